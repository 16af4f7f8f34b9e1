import logging
from typing import Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger("wealth_ranker.errors")


class WealthRankerError(Exception):
    """Base domain error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class InputValidationError(WealthRankerError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"


class CurrencyLookupError(WealthRankerError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "unknown_currency"

    def __init__(self, currency: str):
        super().__init__(f"No exchange rate available for currency '{currency}'")
        self.currency = currency


class UpstreamFetchError(WealthRankerError):
    """Every attempt against an upstream API failed and nothing is cached."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error = "upstream_unavailable"

    def __init__(self, message: str, source: str = "", hint: Optional[str] = None):
        super().__init__(message, hint=hint)
        self.source = source


def domain_error_handler(request: Request, exc: WealthRankerError):  # type: ignore
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            extra={"error": exc.error},
        )
    content = {"error": exc.error, "detail": exc.message}
    if exc.hint:
        content["tip"] = exc.hint
    return JSONResponse(status_code=exc.status_code, content=content)


def not_found_handler(request: Request, exc):  # type: ignore
    if getattr(exc, "status_code", 404) != 404:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "http_error", "detail": exc.detail},
        )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "not_found",
            "detail": f"No route for {request.method} {request.url.path}",
        },
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError):
    # pydantic may embed the raw exception object under "ctx"
    return jsonable_encoder(
        [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
