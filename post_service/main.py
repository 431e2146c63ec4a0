import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from post_service import __version__
from post_service.config import Settings, settings as default_settings
from post_service.database import create_engine, create_session_factory
from post_service.dependencies import build_container
from post_service.middleware import TimingMiddleware, install_query_counter
from post_service.routers import comments, likes, posts, users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema failures on path, query or body map to 400 with the usual envelope."""
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request", "error": str(exc.errors())},
    )


def create_app(database_url: Optional[str] = None, settings: Settings = default_settings) -> FastAPI:
    """
    Build the ASGI app around a fresh engine.

    *database_url* defaults to ``settings.DATABASE_URL``; tests pass
    ``settings.TEST_DATABASE_URL``.  The engine, session factory and
    component container are attached to ``app.state``.
    """
    configure_logging(settings.LOG_LEVEL)

    engine = create_engine(database_url or settings.DATABASE_URL, echo=settings.DEBUG)
    install_query_counter(engine)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("post-service starting (env=%s)", settings.APP_ENV)
        yield
        await engine.dispose()
        logger.info("post-service stopped")

    app = FastAPI(
        title="Post Service",
        description="Posts, nested comments and likes for the social feed",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.container = build_container(session_factory, settings)

    app.add_middleware(TimingMiddleware)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(posts.router)
    app.include_router(comments.router)
    app.include_router(likes.router)
    app.include_router(users.router)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve ``app`` on the configured host and port."""
    uvicorn.run(
        "post_service.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
