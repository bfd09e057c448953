# blog/core/errors.py
"""
Failure taxonomy and the boundary-level error translator.

Services raise the typed failures below and never build HTTP responses.
`translate_exception` is the single place that turns any exception into a
status code and an error body; `register_exception_handlers` installs it on
the FastAPI application so every failure reaching the boundary goes through it.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog.config import settings

logger = logging.getLogger("uvicorn.error")


# ==============================================================================
# Failure types
# ==============================================================================
class AppError(Exception):
    """Base class for failures raised by the domain layer."""

    status_code: int = 500

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputValidationFailure(AppError):
    status_code = 422

    def __init__(self, errors: dict[str, list[str]], message: str = ""):
        super().__init__(message)
        self.errors = errors


class UniqueConstraintViolation(InputValidationFailure):
    """A unique column (username, email, ...) already holds the value."""

    def __init__(self, field: str):
        super().__init__({field: [f"The {field} has already been taken."]})
        self.field = field


class AuthenticationFailure(AppError):
    status_code = 401


class AuthorizationFailure(AppError):
    status_code = 403


class NotFoundFailure(AppError):
    status_code = 404


class MethodNotAllowedFailure(AppError):
    status_code = 405


class RateLimitFailure(AppError):
    status_code = 429


class BadRequestFailure(AppError):
    status_code = 400


class DomainConflict(AppError):
    status_code = 409


# ==============================================================================
# Translation
# ==============================================================================
VALIDATION_MESSAGE = "The given data was invalid."

# Kinds with a fixed status and message, keyed by status code
KIND_MESSAGES = {
    401: "Unauthenticated.",
    403: "This action is unauthorized.",
    404: "The requested resource was not found.",
    405: "The HTTP method is not allowed for this route.",
    429: "Too many requests. Please try again later.",
}

GENERIC_MESSAGES = {
    400: "Bad request.",
    401: "Unauthenticated.",
    403: "This action is unauthorized.",
    404: "The requested resource was not found.",
    405: "The HTTP method is not allowed for this route.",
    409: "The request conflicts with the current state of the resource.",
    422: VALIDATION_MESSAGE,
    429: "Too many requests.",
    500: "Internal server error.",
    502: "Bad gateway.",
    503: "Service unavailable.",
}
DEFAULT_GENERIC_MESSAGE = "An error occurred while processing the request."

# Expected failures, never logged
DONT_REPORT_KINDS = {"validation", "authentication", "not_found"}

_KIND_BY_STATUS = {
    401: "authentication",
    403: "authorization",
    404: "not_found",
    405: "method_not_allowed",
    429: "rate_limited",
}


def generic_message(status_code: int) -> str:
    return GENERIC_MESSAGES.get(status_code, DEFAULT_GENERIC_MESSAGE)


def _status_of(exc: Exception) -> Optional[int]:
    if isinstance(exc, AppError):
        return exc.status_code
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code
    return None


def classify(exc: Exception) -> str:
    """
    Name the failure kind of an exception.

    Returns one of: validation, authentication, authorization, not_found,
    method_not_allowed, rate_limited, http (any other explicit status) or
    server (unclassified).
    """
    if isinstance(exc, (InputValidationFailure, RequestValidationError)):
        return "validation"
    status_code = _status_of(exc)
    if status_code is None:
        return "server"
    return _KIND_BY_STATUS.get(status_code, "http")


def validation_errors(exc: Exception) -> dict[str, list[str]]:
    """
    Collect field -> [messages] from a validation failure.

    Pydantic locations drop their leading source element ("body", "query", ...)
    and are joined with dots, e.g. ("body", "username") -> "username".
    """
    if isinstance(exc, InputValidationFailure):
        return {field: list(messages) for field, messages in exc.errors.items()}
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "body"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value."))
    return errors


def _raw_message(exc: Exception) -> str:
    if isinstance(exc, AppError):
        return exc.message
    if isinstance(exc, StarletteHTTPException):
        return exc.detail if isinstance(exc.detail, str) else ""
    return str(exc)


def translate_exception(exc: Exception, debug: bool = False) -> tuple[int, dict]:
    """
    Map any exception to (status code, error body).

    Pure function of the exception and the debug flag; it never touches the
    request or the transport. Bodies always look like
    {"success": False, "message": str} plus "errors" for validation failures.
    """
    kind = classify(exc)

    if kind == "validation":
        return 422, {
            "success": False,
            "message": VALIDATION_MESSAGE,
            "errors": validation_errors(exc),
        }

    if kind in ("authentication", "authorization", "not_found", "method_not_allowed", "rate_limited"):
        status_code = _status_of(exc)
        # Messages written by the domain layer are safe to show as-is
        message = exc.message if isinstance(exc, AppError) and exc.message else KIND_MESSAGES[status_code]
        return status_code, {"success": False, "message": message}

    if kind == "http":
        status_code = _status_of(exc)
        message = _raw_message(exc) if debug else generic_message(status_code)
        return status_code, {"success": False, "message": message or generic_message(status_code)}

    message = str(exc) if debug else generic_message(500)
    return 500, {"success": False, "message": message or generic_message(500)}


def should_report(exc: Exception) -> bool:
    return classify(exc) not in DONT_REPORT_KINDS


def report(exc: Exception, request: Optional[Request] = None) -> None:
    """Log a failure unless it is one of the expected kinds."""
    if not should_report(exc):
        return
    where = f"{request.method} {request.url.path}" if request is not None else "-"
    if classify(exc) == "server":
        logger.exception("[error] unhandled exception on %s", where, exc_info=exc)
    else:
        logger.warning("[error] %s on %s: %s", type(exc).__name__, where, _raw_message(exc))


# ==============================================================================
# FastAPI boundary
# ==============================================================================
def expects_json(request: Request) -> bool:
    """
    Whether the client wants a JSON reply.

    True for XHR requests, for a missing or catch-all Accept header (API
    clients) and when the preferred media type is JSON.
    """
    if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
        return True
    accept = request.headers.get("accept", "").strip()
    if not accept:
        return True
    preferred = accept.split(",")[0].split(";")[0].strip().lower()
    return preferred == "*/*" or "json" in preferred


async def _default_response(request: Request, exc: Exception):
    if isinstance(exc, RequestValidationError):
        return await request_validation_exception_handler(request, exc)
    if isinstance(exc, StarletteHTTPException):
        return await http_exception_handler(request, exc)
    if isinstance(exc, AppError):
        return PlainTextResponse(exc.message or generic_message(exc.status_code), status_code=exc.status_code)
    return PlainTextResponse("Internal Server Error", status_code=500)


async def handle_exception(request: Request, exc: Exception):
    report(exc, request)
    if not expects_json(request):
        return await _default_response(request, exc)
    status_code, body = translate_exception(exc, debug=settings.debug)
    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(body, status_code=status_code, headers=headers)


async def catch_unhandled(request: Request, call_next):
    """
    Answer unclassified failures inside the middleware stack.

    A handler registered for `Exception` would run in Starlette's
    ServerErrorMiddleware, which re-raises after responding and makes the
    server log the traceback a second time. Here the failure stops at
    `report()`.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return await handle_exception(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route every failure reaching the application boundary through the translator.

    Call before adding CORS so error responses still carry its headers.
    """
    app.add_exception_handler(AppError, handle_exception)
    app.add_exception_handler(RequestValidationError, handle_exception)
    app.add_exception_handler(StarletteHTTPException, handle_exception)
    app.add_exception_handler(RateLimitExceeded, handle_exception)
    app.middleware("http")(catch_unhandled)
