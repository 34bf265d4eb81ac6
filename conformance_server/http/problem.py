"""Error body utilities and global exception handlers.

Every error leaves the server as JSON ``{code, message?}``, the same shape
the API service uses for domain errors.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from conformance_server.config.error_mapping import STANDARD_ERROR_CODES
from conformance_server.logic.shaping import ResultContractViolation

logger = logging.getLogger(__name__)


def error_body(code: str, message: str | None = None) -> dict[str, str]:
    body = {"code": code}
    if message:
        body["message"] = message
    return body


def code_for_status(status: int) -> str:
    """Return the first symbolic code mapped to ``status``, or a generic one."""
    for code, mapped in STANDARD_ERROR_CODES.items():
        if mapped == status:
            return code
    return "InternalError" if status >= 500 else "InvalidRequest"


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: D401
    status = int(exc.status_code or 500)
    message = exc.detail if isinstance(exc.detail, str) else None
    return JSONResponse(
        error_body(code_for_status(status), message),
        status_code=status,
        headers=dict(exc.headers) if exc.headers else None,
    )


async def handle_contract_violation(request: Request, exc: ResultContractViolation) -> JSONResponse:  # noqa: D401
    logger.error(
        "dispatch.contract_violation",
        extra={"operation": exc.operation, "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(error_body("InternalError", str(exc)), status_code=500)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error", extra={"path": request.url.path}, exc_info=exc)
    return JSONResponse(error_body("InternalError"), status_code=500)


__all__ = [
    "error_body",
    "code_for_status",
    "handle_http_exception",
    "handle_contract_violation",
    "handle_unexpected_error",
]
