from post_service.controllers.comment_controller import CommentController
from post_service.controllers.like_controller import LikeController
from post_service.controllers.post_controller import PostController

__all__ = ["PostController", "CommentController", "LikeController"]
