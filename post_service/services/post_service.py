"""
Post service: pass-through CRUD for posts plus the counter hooks used by
the comment and like services.

Design notes
------------
- ``author_id`` is immutable after creation; ``update_post`` drops it from
  the payload before it reaches the repository.
- ``like_count`` and ``comment_count`` are never written from client
  payloads.  They move only through ``update_like_counter`` /
  ``update_comment_counter``, which issue an atomic increment inside the
  session handed in by the caller so the counter commits or rolls back
  together with the like/comment write.
"""
import logging
from typing import Any, Literal, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from post_service.exceptions import NotFound, ValidationError
from post_service.models import Post
from post_service.repositories import PostRepository

logger = logging.getLogger(__name__)

CounterAction = Literal["increment", "decrement"]

_IMMUTABLE_FIELDS: frozenset[str] = frozenset({"author_id"})


class PostService:
    def __init__(self, post_repository: PostRepository):
        self._posts = post_repository

    async def create_post(self, data: dict) -> Post:
        post = await self._posts.create(data)
        logger.info("Created post %s by %s", post.id, post.author_id)
        return post

    async def get_post_by_id(self, post_id: Any) -> Optional[Post]:
        return await self._posts.find_by_id(post_id)

    async def get_posts_by_author(self, author_id: str) -> list[Post]:
        return await self._posts.find_by_author(author_id)

    async def update_post(self, post_id: Any, data: dict) -> Optional[Post]:
        safe_data = {k: v for k, v in data.items() if k not in _IMMUTABLE_FIELDS}
        return await self._posts.update(post_id, safe_data)

    async def delete_post(self, post_id: Any) -> Optional[Post]:
        """Soft delete: the post is kept with ``status = DELETED``."""
        post = await self._posts.delete(post_id)
        if post is not None:
            logger.info("Soft-deleted post %s", post.id)
        return post

    async def hard_delete_post(self, post_id: Any) -> Optional[Post]:
        post = await self._posts.hard_delete(post_id)
        if post is not None:
            logger.info("Removed post %s", post.id)
        return post

    async def update_like_counter(
        self, post_id: Any, action: CounterAction, session: Optional[AsyncSession] = None
    ) -> Optional[Post]:
        return await self._update_counter(post_id, "like_count", action, session)

    async def update_comment_counter(
        self, post_id: Any, action: CounterAction, session: Optional[AsyncSession] = None
    ) -> Optional[Post]:
        return await self._update_counter(post_id, "comment_count", action, session)

    async def _update_counter(
        self,
        post_id: Any,
        field: str,
        action: str,
        session: Optional[AsyncSession],
    ) -> Optional[Post]:
        """
        Increments require the post to exist; a missing post raises
        ``NotFound`` so the caller's transaction rolls back.  Decrements on a
        post that is already gone are a no-op returning None, so comments
        and likes of a removed post can still be deleted.
        """
        if action == "increment":
            post = await self._posts.increment_counter(post_id, field, session=session)
            if post is None:
                raise NotFound("Post", str(post_id))
        elif action == "decrement":
            post = await self._posts.decrement_counter(post_id, field, session=session)
            if post is None:
                logger.warning("Post %s is gone; skipping %s decrement", post_id, field)
        else:
            raise ValidationError(f"unsupported counter action: {action}")
        return post
