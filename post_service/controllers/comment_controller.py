from fastapi.responses import JSONResponse

from post_service.controllers.base import entities, entity, failure, message, not_found
from post_service.schemas import CommentCreate, CommentResponse, CommentTree, CommentUpdate
from post_service.services.comment_service import CommentService


class CommentController:
    def __init__(self, comment_service: CommentService):
        self._service = comment_service

    async def create_comment(self, data: CommentCreate) -> JSONResponse:
        try:
            comment = await self._service.create_comment(data.model_dump())
            return entity(CommentResponse, comment, status_code=201)
        except Exception as exc:
            return failure("Failed to create comment", exc)

    async def get_comment_by_id(self, comment_id: str) -> JSONResponse:
        try:
            comment = await self._service.get_comment_by_id(comment_id)
            if comment is None:
                return not_found("Comment")
            return entity(CommentResponse, comment)
        except Exception as exc:
            return failure("Failed to fetch comment", exc)

    async def get_comments_by_post(self, post_id: str) -> JSONResponse:
        try:
            return entities(CommentResponse, await self._service.get_comments_by_post(post_id))
        except Exception as exc:
            return failure("Failed to fetch comments for post", exc)

    async def get_comments_by_author(self, author_id: str) -> JSONResponse:
        try:
            return entities(CommentResponse, await self._service.get_comments_by_author(author_id))
        except Exception as exc:
            return failure("Failed to fetch user comments", exc)

    async def get_comment_replies(self, comment_id: str) -> JSONResponse:
        try:
            return entities(CommentResponse, await self._service.get_comment_replies(comment_id))
        except Exception as exc:
            return failure("Failed to fetch comment replies", exc)

    async def get_nested_comments_by_post(self, post_id: str) -> JSONResponse:
        try:
            forest = await self._service.get_nested_comments_by_post(post_id)
            return entities(CommentTree, forest)
        except Exception as exc:
            return failure("Failed to fetch nested comments", exc)

    async def update_comment(self, comment_id: str, data: CommentUpdate) -> JSONResponse:
        try:
            comment = await self._service.update_comment(
                comment_id, data.model_dump(exclude_unset=True, exclude_none=True)
            )
            if comment is None:
                return not_found("Comment")
            return entity(CommentResponse, comment)
        except Exception as exc:
            return failure("Failed to update comment", exc)

    async def delete_comment(self, comment_id: str, hard: bool = False) -> JSONResponse:
        try:
            if hard:
                await self._service.hard_delete_comment(comment_id)
            else:
                await self._service.delete_comment(comment_id)
            return message("Comment deleted successfully")
        except Exception as exc:
            return failure("Failed to delete comment", exc)
