from typing import Any, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from post_service.exceptions import ValidationError
from post_service.models import Post
from post_service.repositories.base import SoftDeleteRepository, parse_id

# Counters that Like/Comment services are allowed to move.
COUNTER_FIELDS: frozenset[str] = frozenset({"like_count", "comment_count"})


class PostRepository(SoftDeleteRepository[Post]):
    model = Post

    async def find_by_author(
        self, author_id: str, session: Optional[AsyncSession] = None
    ) -> list[Post]:
        return await self._find_all(Post.author_id == author_id, session=session)

    async def increment_counter(
        self, id: Any, field: str, session: Optional[AsyncSession] = None
    ) -> Optional[Post]:
        return await self._shift_counter(id, field, 1, session)

    async def decrement_counter(
        self, id: Any, field: str, session: Optional[AsyncSession] = None
    ) -> Optional[Post]:
        return await self._shift_counter(id, field, -1, session)

    async def _shift_counter(
        self, id: Any, field: str, step: int, session: Optional[AsyncSession]
    ) -> Optional[Post]:
        """
        Apply ``field = field + step`` as one UPDATE statement so concurrent
        writers never overwrite each other's increments.

        Returns the refreshed post, or None when no post has this id.
        """
        if field not in COUNTER_FIELDS:
            raise ValidationError(f"unsupported counter field: {field}")
        key = parse_id(id)
        column = getattr(Post, field)
        stmt = (
            update(Post)
            .where(Post.id == key)
            .values({column: column + step})
            .execution_options(synchronize_session=False)
        )
        async with self._scope(session) as db:
            result = await db.execute(stmt)
            if result.rowcount == 0:
                return None
            post = await db.get(Post, key, populate_existing=True)
        return post
