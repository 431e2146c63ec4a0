from fastapi import APIRouter, Depends

from post_service.controllers import LikeController
from post_service.dependencies import get_like_controller
from post_service.schemas import LikeCreate, LikeResponse

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])

@router.post("", status_code=201, response_model=LikeResponse)
async def create_like(data: LikeCreate, controller: LikeController = Depends(get_like_controller)):
    return await controller.create_like(data)

@router.get("/{like_id}", response_model=LikeResponse)
async def get_like(like_id: str, controller: LikeController = Depends(get_like_controller)):
    return await controller.get_like_by_id(like_id)

@router.delete("/{like_id}")
async def delete_like(like_id: str, controller: LikeController = Depends(get_like_controller)):
    return await controller.delete_like(like_id)
