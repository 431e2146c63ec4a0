from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from post_service.models import Comment
from post_service.repositories.base import SoftDeleteRepository, parse_id


class CommentRepository(SoftDeleteRepository[Comment]):
    model = Comment

    async def find_by_post(
        self,
        post_id: Any,
        top_level_only: bool = False,
        session: Optional[AsyncSession] = None,
    ) -> list[Comment]:
        """
        Comments attached to *post_id* in insertion order.

        With *top_level_only* the result is restricted to comments whose
        ``parent_comment_id`` is NULL.
        """
        criteria = [Comment.post_id == parse_id(post_id)]
        if top_level_only:
            criteria.append(Comment.parent_comment_id.is_(None))
        return await self._find_all(*criteria, session=session)

    async def find_by_author(
        self, author_id: str, session: Optional[AsyncSession] = None
    ) -> list[Comment]:
        return await self._find_all(Comment.author_id == author_id, session=session)

    async def find_replies(
        self, parent_comment_id: Any, session: Optional[AsyncSession] = None
    ) -> list[Comment]:
        return await self._find_all(
            Comment.parent_comment_id == parse_id(parent_comment_id), session=session
        )
