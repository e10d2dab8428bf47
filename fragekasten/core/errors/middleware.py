"""
Exception handler turning FragekastenError into ``{"error": {code, message}}``.

The internal detail and the operator hint only go to the log; codes missing
from the registry are answered with a plain 500.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from fragekasten.core.errors import FragekastenError
from fragekasten.core.errors.registry import error_registry

logger = logging.getLogger(__name__)

_FALLBACK_MESSAGE = "An unexpected error occurred."


async def fragekasten_error_handler(request: Request, exc: FragekastenError) -> JSONResponse:
    entry = error_registry.get(exc.code)
    status = entry.status if entry else 500
    message = entry.message if entry else _FALLBACK_MESSAGE

    logger.log(
        entry.level if entry else logging.ERROR,
        "request_failed" if entry else "unregistered_error_code",
        extra={
            "error.code": exc.code,
            "error.message": exc.detail,
            "error.hint": entry.hint if entry else None,
            "http.method": request.method,
            "http.path": request.url.path,
            **{f"error.ctx.{k}": v for k, v in exc.context.items()},
        },
    )
    return JSONResponse(status_code=status, content={"error": {"code": exc.code, "message": message}})
