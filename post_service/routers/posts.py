from fastapi import APIRouter, Depends, Query

from post_service.controllers import CommentController, LikeController, PostController
from post_service.dependencies import (
    get_comment_controller,
    get_like_controller,
    get_post_controller,
)
from post_service.schemas import (
    CommentResponse,
    CommentTree,
    LikeCheckResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    ToggleLikeRequest,
)

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])

# posts

@router.post("", status_code=201, response_model=PostResponse)
async def create_post(data: PostCreate, controller: PostController = Depends(get_post_controller)):
    return await controller.create_post(data)

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, controller: PostController = Depends(get_post_controller)):
    return await controller.get_post_by_id(post_id)

@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str, data: PostUpdate, controller: PostController = Depends(get_post_controller)
):
    return await controller.update_post(post_id, data)

@router.delete("/{post_id}")
async def delete_post(post_id: str, controller: PostController = Depends(get_post_controller)):
    return await controller.delete_post(post_id)

# likes

@router.get("/{post_id}/likes", response_model=list[LikeResponse])
async def get_post_likes(post_id: str, controller: LikeController = Depends(get_like_controller)):
    return await controller.get_likes_by_post(post_id)

@router.post("/{post_id}/likes/toggle")
async def toggle_like(
    post_id: str,
    data: ToggleLikeRequest | None = None,
    controller: LikeController = Depends(get_like_controller),
):
    return await controller.toggle_like(post_id, data.user_id if data else None)

@router.get("/{post_id}/likes/check", response_model=LikeCheckResponse)
async def check_like(
    post_id: str,
    user_id: str | None = Query(None, alias="userId"),
    controller: LikeController = Depends(get_like_controller),
):
    return await controller.is_post_liked_by_user(post_id, user_id)

# comments

@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def get_post_comments(
    post_id: str, controller: CommentController = Depends(get_comment_controller)
):
    return await controller.get_comments_by_post(post_id)

@router.get("/{post_id}/comments/nested", response_model=list[CommentTree])
async def get_nested_post_comments(
    post_id: str, controller: CommentController = Depends(get_comment_controller)
):
    return await controller.get_nested_comments_by_post(post_id)
