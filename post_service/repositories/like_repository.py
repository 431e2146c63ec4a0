from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from post_service.models import Like
from post_service.repositories.base import BaseRepository, parse_id


class LikeRepository(BaseRepository[Like]):
    """Likes have no soft-delete state; removal is always ``hard_delete``."""

    model = Like

    async def find_by_post(
        self, post_id: Any, session: Optional[AsyncSession] = None
    ) -> list[Like]:
        return await self._find_all(Like.post_id == parse_id(post_id), session=session)

    async def find_by_user(
        self, user_id: str, session: Optional[AsyncSession] = None
    ) -> list[Like]:
        return await self._find_all(Like.user_id == user_id, session=session)

    async def find_by_post_and_user(
        self, post_id: Any, user_id: str, session: Optional[AsyncSession] = None
    ) -> Optional[Like]:
        q = select(Like).where(Like.post_id == parse_id(post_id), Like.user_id == user_id)
        async with self._scope(session) as db:
            result = await db.execute(q)
            return result.scalar_one_or_none()
