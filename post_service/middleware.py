"""
Per-request diagnostics for the post service.

Every HTTP response carries ``X-Response-Time-Ms`` and ``X-Query-Count``,
and one access line is logged under ``post_service.access``.  The query
count makes the cost of the transactional writes (entity write + counter
update) and of the nested comment view, which issues one SELECT per
comment in the tree, visible per call.
"""
import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("post_service.access")

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine: AsyncEngine) -> None:
    """Hook *engine* so each statement it runs bumps ``query_count_var``.

    ``create_app`` calls this once for the engine it builds.
    """

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _on_statement(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class TimingMiddleware:
    """Pure ASGI middleware; the counter is read in the same task that set it."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()
        status_code = 500

        async def send_with_diagnostics(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                message["headers"] = [
                    *message.get("headers", []),
                    (b"x-response-time-ms", str(_elapsed_ms(start)).encode()),
                    (b"x-query-count", str(query_count_var.get()).encode()),
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_diagnostics)
        finally:
            logger.info(
                "%s %s -> %d (%.2f ms, %d queries)",
                scope["method"],
                scope["path"],
                status_code,
                _elapsed_ms(start),
                query_count_var.get(),
            )
