"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and the handler callables registered by
``create_app``. Domain errors keep their message verbatim in both ``detail``
and ``message`` so existing clients can match on the exact string.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from kanban_api.http.error_mapping import CONFLICT, lookup
from kanban_api.logic.errors import KanbanError

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem_response(
    status: int,
    title: str,
    detail: str,
    *,
    code: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"title": title, "status": status, "detail": detail, "message": detail}
    if code:
        body["code"] = code
    if extra:
        body.update(extra)
    return JSONResponse(jsonable_encoder(body), status_code=status, media_type=PROBLEM_MEDIA_TYPE)


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


async def handle_kanban_error(request: Request, exc: KanbanError) -> JSONResponse:  # noqa: D401
    entry = lookup(exc.kind)
    status = int(entry["status"])  # type: ignore[arg-type]
    logger.info(
        "kanban_error kind=%s status=%s path=%s request_id=%s message=%s",
        exc.kind,
        status,
        request.url.path,
        _request_id(request),
        exc.message,
    )
    return problem_response(status, str(entry["title"]), exc.message, code=str(entry["code"]))


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(exc.status_code or 500)
    if isinstance(exc.detail, dict):
        body = {"status": status, **exc.detail}
        return JSONResponse(body, status_code=status, media_type=PROBLEM_MEDIA_TYPE, headers=exc.headers)
    detail = str(exc.detail or "")
    response = problem_response(status, "Error", detail)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    errors = list(exc.errors())
    first = errors[0].get("msg") if errors else None
    return problem_response(
        422,
        "Invalid Request",
        str(first or "Request validation failed"),
        code="REQUEST_VALIDATION_FAILED",
        extra={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]},
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:  # noqa: D401
    # A concurrent write took the rank or title this request computed.
    logger.warning(
        "integrity_conflict path=%s request_id=%s error=%s",
        request.url.path,
        _request_id(request),
        exc.orig,
    )
    return problem_response(
        int(CONFLICT["status"]),  # type: ignore[arg-type]
        str(CONFLICT["title"]),
        "The board changed while your request was processed; reload and try again",
        code=str(CONFLICT["code"]),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s request_id=%s", request.url.path, _request_id(request), exc_info=exc)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem_response",
    "handle_kanban_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_integrity_error",
    "handle_unexpected_error",
]
