"""
Generic repository contract shared by the post, comment and like stores.

Design notes
------------
- Identifiers are UUID strings.  ``parse_id`` normalises them and raises
  ``InvalidIdentifier`` before any SQL is issued for malformed input.
- ``_scope`` either joins the caller's session or runs the block in a
  fresh session that commits on success.  SQLAlchemy errors leave the
  scope as ``PersistenceError`` in both cases.
- Finders order by ``created_at`` with ``id`` as tie-breaker, so rows
  written in the same instant still come back in a stable order.
- Writes flush and refresh so the returned instance carries the values
  the store assigned (timestamps, counters) and stays usable after the
  session closes (``expire_on_commit=False``).
"""
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from post_service.database import Base, transaction
from post_service.exceptions import InvalidIdentifier, PersistenceError
from post_service.models import EntityStatus

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def parse_id(value: Any) -> str:
    """Return the canonical string form of *value* or raise ``InvalidIdentifier``."""
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier(value) from None


class BaseRepository(Generic[ModelT]):
    model: Type[ModelT]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Session handling
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _scope(self, session: Optional[AsyncSession] = None):
        try:
            if session is not None:
                yield session
            else:
                async with transaction(self._session_factory) as own:
                    yield own
        except SQLAlchemyError as exc:
            orig = getattr(exc, "orig", None)
            message = str(orig) if orig is not None else str(exc)
            logger.warning("%s store error: %s", self.model.__name__, message)
            raise PersistenceError(message) from exc

    async def _find_all(self, *criteria, session: Optional[AsyncSession] = None) -> list[ModelT]:
        q = select(self.model).where(*criteria).order_by(self.model.created_at, self.model.id)
        async with self._scope(session) as db:
            result = await db.execute(q)
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Generic CRUD
    # ------------------------------------------------------------------

    async def create(self, fields: dict, session: Optional[AsyncSession] = None) -> ModelT:
        try:
            entity = self.model(**fields)
        except TypeError as exc:
            raise PersistenceError(str(exc)) from exc
        async with self._scope(session) as db:
            db.add(entity)
            await db.flush()
            await db.refresh(entity)
        return entity

    async def find_by_id(self, id: Any, session: Optional[AsyncSession] = None) -> Optional[ModelT]:
        key = parse_id(id)
        async with self._scope(session) as db:
            return await db.get(self.model, key)

    async def update(
        self, id: Any, fields: dict, session: Optional[AsyncSession] = None
    ) -> Optional[ModelT]:
        key = parse_id(id)
        async with self._scope(session) as db:
            entity = await db.get(self.model, key)
            if entity is None:
                return None
            for field, value in fields.items():
                setattr(entity, field, value)
            await db.flush()
            await db.refresh(entity)
        return entity

    async def hard_delete(self, id: Any, session: Optional[AsyncSession] = None) -> Optional[ModelT]:
        key = parse_id(id)
        async with self._scope(session) as db:
            entity = await db.get(self.model, key)
            if entity is None:
                return None
            await db.delete(entity)
            await db.flush()
        return entity


class SoftDeleteRepository(BaseRepository[ModelT]):
    """Repository for models carrying an ``EntityStatus`` column."""

    async def delete(self, id: Any, session: Optional[AsyncSession] = None) -> Optional[ModelT]:
        return await self.update(id, {"status": EntityStatus.DELETED}, session=session)
