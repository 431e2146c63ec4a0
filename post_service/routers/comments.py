from fastapi import APIRouter, Depends, Query

from post_service.controllers import CommentController
from post_service.dependencies import get_comment_controller
from post_service.schemas import CommentCreate, CommentResponse, CommentUpdate

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])

@router.post("", status_code=201, response_model=CommentResponse)
async def create_comment(
    data: CommentCreate, controller: CommentController = Depends(get_comment_controller)
):
    return await controller.create_comment(data)

@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: str, controller: CommentController = Depends(get_comment_controller)):
    return await controller.get_comment_by_id(comment_id)

@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    controller: CommentController = Depends(get_comment_controller),
):
    return await controller.update_comment(comment_id, data)

@router.delete("/{comment_id}")
async def delete_comment(
    comment_id: str,
    hard: bool = Query(False, description="Remove the record instead of marking it DELETED."),
    controller: CommentController = Depends(get_comment_controller),
):
    return await controller.delete_comment(comment_id, hard=hard)

@router.get("/{comment_id}/replies", response_model=list[CommentResponse])
async def get_comment_replies(
    comment_id: str, controller: CommentController = Depends(get_comment_controller)
):
    return await controller.get_comment_replies(comment_id)
