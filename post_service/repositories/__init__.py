# Repositories package.
#
# One repository per collection, each a thin async wrapper over a single
# SQLAlchemy model:
#
#   PostRepository     : CRUD, soft delete, atomic counter updates
#   CommentRepository  : CRUD, soft delete, post / author / reply finders
#   LikeRepository     : CRUD, post / user / (post, user) finders
#
# Every method accepts an optional AsyncSession.  When supplied the call
# joins the caller's transaction and leaves the commit to the caller;
# otherwise the repository opens and commits its own session.
from post_service.repositories.base import BaseRepository, SoftDeleteRepository
from post_service.repositories.comment_repository import CommentRepository
from post_service.repositories.like_repository import LikeRepository
from post_service.repositories.post_repository import PostRepository

__all__ = [
    "BaseRepository",
    "SoftDeleteRepository",
    "PostRepository",
    "CommentRepository",
    "LikeRepository",
]
