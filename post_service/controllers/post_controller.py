from fastapi.responses import JSONResponse

from post_service.controllers.base import entities, entity, failure, message, not_found
from post_service.schemas import PostCreate, PostResponse, PostUpdate
from post_service.services.post_service import PostService


class PostController:
    def __init__(self, post_service: PostService):
        self._service = post_service

    async def create_post(self, data: PostCreate) -> JSONResponse:
        try:
            post = await self._service.create_post(data.model_dump())
            return entity(PostResponse, post, status_code=201)
        except Exception as exc:
            return failure("Failed to create post", exc)

    async def get_post_by_id(self, post_id: str) -> JSONResponse:
        try:
            post = await self._service.get_post_by_id(post_id)
            if post is None:
                return not_found("Post")
            return entity(PostResponse, post)
        except Exception as exc:
            return failure("Failed to fetch post", exc)

    async def get_posts_by_author(self, author_id: str) -> JSONResponse:
        try:
            return entities(PostResponse, await self._service.get_posts_by_author(author_id))
        except Exception as exc:
            return failure("Failed to fetch posts", exc)

    async def update_post(self, post_id: str, data: PostUpdate) -> JSONResponse:
        try:
            # Explicit nulls mean "leave unchanged"; every writable column is NOT NULL.
            changes = data.model_dump(exclude_unset=True, exclude_none=True)
            post = await self._service.update_post(post_id, changes)
            if post is None:
                return not_found("Post")
            return entity(PostResponse, post)
        except Exception as exc:
            return failure("Failed to update post", exc)

    async def delete_post(self, post_id: str) -> JSONResponse:
        try:
            post = await self._service.delete_post(post_id)
            if post is None:
                return not_found("Post")
            return message("Post deleted successfully")
        except Exception as exc:
            return failure("Failed to delete post", exc)
