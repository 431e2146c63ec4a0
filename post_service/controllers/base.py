"""
Response helpers shared by the controllers.

Controllers own the HTTP shape of every outcome: they call exactly one
service method and turn its result, or the exception it raised, into a
``JSONResponse``.  Every exception reaching a controller becomes a 500
with a ``{message, error}`` envelope; only missing parameters are 400.
"""
import logging
from typing import Any, Iterable, Type

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from post_service.schemas import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)


def ok(body: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def entity(schema: Type[BaseModel], obj: Any, status_code: int = 200) -> JSONResponse:
    return ok(schema.model_validate(obj).model_dump(mode="json", by_alias=True), status_code)


def entities(schema: Type[BaseModel], objs: Iterable[Any]) -> JSONResponse:
    return ok([schema.model_validate(o).model_dump(mode="json", by_alias=True) for o in objs])


def message(text: str, status_code: int = 200) -> JSONResponse:
    return ok(MessageResponse(message=text).model_dump(), status_code)


def not_found(name: str) -> JSONResponse:
    return message(f"{name} not found", status_code=404)


def bad_request(text: str, error: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=text, error=error)
    return ok(body.model_dump(exclude_none=True), status_code=400)


def failure(text: str, exc: Exception) -> JSONResponse:
    logger.error("%s: %s", text, exc, exc_info=exc)
    return ok(ErrorResponse(message=text, error=str(exc)).model_dump(), status_code=500)
