"""Map exceptions to JSON error responses.

Every error body has a ``message``; validation failures add an ``errors``
list with one entry per problem.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from expense_tracker.errors import TrackerError, ValidationFailedError

logger = logging.getLogger(__name__)


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Turn pydantic error entries into ``field: message`` strings.

    Example:
        >>> format_validation_errors(
        ...     [{"loc": ("body", "customerName"), "msg": "Field required"}]
        ... )
        ['customerName: Field required']
    """
    formatted = []
    for error in errors:
        location = [
            str(part) for part in error.get("loc", ()) if part not in ("body", "query")
        ]
        message = error.get("msg", "Invalid value")
        formatted.append(f"{'.'.join(location)}: {message}" if location else message)
    return formatted


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    content: Dict[str, Any] = {"message": exc.message}
    if isinstance(exc, ValidationFailedError) and exc.issues:
        content["errors"] = exc.issues
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
        )
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info(f"{request.method} {request.url.path} -> 400: {errors}")
    return JSONResponse(
        status_code=400,
        content={"message": errors[0] if errors else "Invalid request", "errors": errors},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": str(exc) or "Server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
