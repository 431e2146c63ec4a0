from typing import Optional

from fastapi.responses import JSONResponse

from post_service.controllers.base import (
    bad_request,
    entities,
    entity,
    failure,
    message,
    not_found,
    ok,
)
from post_service.schemas import LikeCheckResponse, LikeCreate, LikeResponse
from post_service.services.like_service import LikeService


class LikeController:
    def __init__(self, like_service: LikeService):
        self._service = like_service

    async def create_like(self, data: LikeCreate) -> JSONResponse:
        try:
            like = await self._service.create_like(data.model_dump())
            return entity(LikeResponse, like, status_code=201)
        except Exception as exc:
            return failure("Failed to create like", exc)

    async def get_like_by_id(self, like_id: str) -> JSONResponse:
        try:
            like = await self._service.get_like_by_id(like_id)
            if like is None:
                return not_found("Like")
            return entity(LikeResponse, like)
        except Exception as exc:
            return failure("Failed to fetch like", exc)

    async def get_likes_by_post(self, post_id: str) -> JSONResponse:
        try:
            return entities(LikeResponse, await self._service.get_likes_by_post(post_id))
        except Exception as exc:
            return failure("Failed to fetch likes for post", exc)

    async def get_likes_by_user(self, user_id: str) -> JSONResponse:
        try:
            return entities(LikeResponse, await self._service.get_likes_by_user(user_id))
        except Exception as exc:
            return failure("Failed to fetch user likes", exc)

    async def delete_like(self, like_id: str) -> JSONResponse:
        try:
            await self._service.delete_like(like_id)
            return message("Like removed successfully")
        except Exception as exc:
            return failure("Failed to delete like", exc)

    async def toggle_like(self, post_id: str, user_id: Optional[str]) -> JSONResponse:
        if not user_id:
            return bad_request("User ID is required")
        try:
            like = await self._service.toggle_like(post_id, user_id)
            if like is None:
                return message("Like removed successfully")
            return entity(LikeResponse, like, status_code=201)
        except Exception as exc:
            return failure("Failed to toggle like", exc)

    async def is_post_liked_by_user(self, post_id: str, user_id: Optional[str]) -> JSONResponse:
        if not user_id:
            return bad_request("User ID is required")
        try:
            liked = await self._service.is_post_liked_by_user(post_id, user_id)
            return ok(LikeCheckResponse(is_liked=liked).model_dump(by_alias=True))
        except Exception as exc:
            return failure("Failed to check like status", exc)
