"""Exception handlers and the last-resort error middleware."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"
EMPTY_BODY = "Empty request body"
MALFORMED_JSON = "Malformed JSON data. Please check your request format."
INCOMPLETE_JSON = "Incomplete JSON data. Please check your request."
INTERNAL_ERROR = "Internal server error"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def describe_body_error(errors: list[dict[str, Any]], body: Any) -> str | None:
    """Classify a request body that could not be parsed at all.

    Returns:
        A message for empty, truncated or malformed JSON, or None when the
        body parsed and only field rules failed.
    """
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "missing" and loc == ("body",):
            return EMPTY_BODY
        if error.get("type") == "json_invalid":
            document = body if isinstance(body, str) else ""
            if not document.strip():
                return EMPTY_BODY
            position = loc[1] if len(loc) > 1 and isinstance(loc[1], int) else -1
            if position >= len(document.rstrip()):
                return INCOMPLETE_JSON
            return MALFORMED_JSON
    return None


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic errors into ``{"field", "message"}`` pairs."""
    formatted = []
    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        # ValueError-based validators are prefixed by pydantic.
        message = message.removeprefix("Value error, ")
        formatted.append({"field": _field_name(tuple(error.get("loc", ()))), "message": message})
    return formatted


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every violated rule at once as a 400 response."""
    errors = list(exc.errors())
    body_problem = describe_body_error(errors, getattr(exc, "body", None))
    if body_problem is not None:
        logger.warning("Unparseable request body on %s: %s", request.url.path, body_problem)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": body_problem,
                "message": "Please ensure your request contains valid JSON data",
            },
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": VALIDATION_FAILED, "errors": format_validation_errors(errors)},
    )


async def catch_all_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Turn any exception escaping a handler into a generic 500 response."""
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            "Unhandled error during %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=True,
        )
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": INTERNAL_ERROR},
        )
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Attach the validation handler and catch-all middleware to ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.middleware("http")(catch_all_middleware)
