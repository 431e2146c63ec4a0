"""
Like service: likes on posts with a transactional ``like_count``.

``toggle_like`` checks for an existing like and then creates or deletes
in a separate step.  Two identical toggles racing each other can both
see the same state: a double create is rejected by the (post, user)
unique constraint and a double delete fails with ``NotFound``.
"""
import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from post_service.database import transaction
from post_service.exceptions import NotFound
from post_service.models import Like
from post_service.repositories import LikeRepository
from post_service.repositories.base import parse_id
from post_service.services.post_service import PostService

logger = logging.getLogger(__name__)


class LikeService:
    def __init__(
        self,
        like_repository: LikeRepository,
        post_service: PostService,
        session_factory: async_sessionmaker[AsyncSession],
    ):
        self._likes = like_repository
        self._posts = post_service
        self._session_factory = session_factory

    async def create_like(self, data: dict) -> Like:
        fields = dict(data)
        fields["post_id"] = parse_id(fields.get("post_id"))

        async with transaction(self._session_factory) as session:
            like = await self._likes.create(fields, session=session)
            await self._posts.update_like_counter(like.post_id, "increment", session=session)

        logger.info("User %s liked post %s", like.user_id, like.post_id)
        return like

    async def get_like_by_id(self, like_id: Any) -> Optional[Like]:
        return await self._likes.find_by_id(like_id)

    async def get_likes_by_post(self, post_id: Any) -> list[Like]:
        return await self._likes.find_by_post(post_id)

    async def get_likes_by_user(self, user_id: str) -> list[Like]:
        return await self._likes.find_by_user(user_id)

    async def get_user_like_for_post(self, post_id: Any, user_id: str) -> Optional[Like]:
        return await self._likes.find_by_post_and_user(post_id, user_id)

    async def delete_like(self, like_id: Any) -> Like:
        async with transaction(self._session_factory) as session:
            like = await self._likes.find_by_id(like_id, session=session)
            if like is None:
                raise NotFound("Like", str(like_id))
            deleted = await self._likes.hard_delete(like_id, session=session)
            await self._posts.update_like_counter(like.post_id, "decrement", session=session)

        logger.info("User %s unliked post %s", deleted.user_id, deleted.post_id)
        return deleted

    async def toggle_like(self, post_id: Any, user_id: str) -> Optional[Like]:
        """
        Remove the user's like on *post_id* if there is one (returns None),
        otherwise create it (returns the new like).
        """
        existing = await self.get_user_like_for_post(post_id, user_id)
        if existing is not None:
            await self.delete_like(existing.id)
            return None
        return await self.create_like({"post_id": post_id, "user_id": user_id})

    async def is_post_liked_by_user(self, post_id: Any, user_id: str) -> bool:
        return await self.get_user_like_for_post(post_id, user_id) is not None
