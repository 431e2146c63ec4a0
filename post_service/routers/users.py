from fastapi import APIRouter, Depends

from post_service.controllers import CommentController, LikeController, PostController
from post_service.dependencies import (
    get_comment_controller,
    get_like_controller,
    get_post_controller,
)
from post_service.schemas import CommentResponse, LikeResponse, PostResponse

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.get("/{author_id}/posts", response_model=list[PostResponse])
async def get_user_posts(author_id: str, controller: PostController = Depends(get_post_controller)):
    return await controller.get_posts_by_author(author_id)

@router.get("/{user_id}/likes", response_model=list[LikeResponse])
async def get_user_likes(user_id: str, controller: LikeController = Depends(get_like_controller)):
    return await controller.get_likes_by_user(user_id)

@router.get("/{author_id}/comments", response_model=list[CommentResponse])
async def get_user_comments(
    author_id: str, controller: CommentController = Depends(get_comment_controller)
):
    return await controller.get_comments_by_author(author_id)
