"""
Test infrastructure for the post service.

Strategy
--------
- Every test gets its own app built by ``create_app`` around a fresh
  SQLite in-memory engine (aiosqlite + StaticPool), so no PostgreSQL is
  needed and no state leaks between tests.
- Tables are created from ``Base.metadata`` before the test and the
  engine is disposed afterwards.
- ``container`` exposes the wired repositories and services for tests
  that exercise the layers below HTTP.
"""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from post_service.config import settings
from post_service.database import Base
from post_service.dependencies import Container
from post_service.main import create_app


@pytest_asyncio.fixture
async def app():
    application = create_app(database_url=settings.TEST_DATABASE_URL)
    engine = application.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await engine.dispose()


@pytest_asyncio.fixture
async def container(app) -> Container:
    return app.state.container


@pytest_asyncio.fixture
async def async_client(app) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def post(container):
    """A freshly created post with zeroed counters."""
    return await container.post_service.create_post(
        {"author_id": "u1", "content": "hi", "hashtags": ["intro"], "images": []}
    )
