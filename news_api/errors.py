"""
Error dispatch for the API.

Every failure that escapes a route ends up here and is turned into exactly
one ``{"msg": ...}`` JSON response.  Classification order:

1. ApiError raised by the data layer: status and message echoed verbatim.
2. StoreError for a value of the wrong type or out of range: 400.
3. Unrouted path: 404.
4. Malformed request (transport-level validation): 400.
5. Anything else: 500, logged, detail suppressed.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from news_data.errors import ApiError, ErrorKind
from news_data.store import INVALID_TEXT_REPRESENTATION, NUMERIC_VALUE_OUT_OF_RANGE, StoreError

logger = logging.getLogger("news_api")

MSG_INVALID_DATA_TYPE = "Bad request - invalid data type"
MSG_PATH_NOT_FOUND = "Not found - this path does not exist"
MSG_BAD_REQUEST = "Bad request"
MSG_INTERNAL = "Internal server error"

# Store codes for a supplied value the column cannot hold.
_BAD_VALUE_CODES = (INVALID_TEXT_REPRESENTATION, NUMERIC_VALUE_OUT_OF_RANGE)


def dispatch_error(exc: Exception) -> tuple[int, str]:
    """Map an exception to ``(status_code, msg)``."""
    if isinstance(exc, ApiError):
        if exc.kind is ErrorKind.INTERNAL:
            return 500, MSG_INTERNAL
        return exc.status, exc.msg
    if isinstance(exc, StoreError) and exc.code in _BAD_VALUE_CODES:
        return 400, MSG_INVALID_DATA_TYPE
    if isinstance(exc, StarletteHTTPException):
        # A known path with an unsupported method is still an unmatched route.
        if exc.status_code in (404, 405):
            return 404, MSG_PATH_NOT_FOUND
        return exc.status_code, str(exc.detail)
    if isinstance(exc, RequestValidationError):
        return 400, MSG_BAD_REQUEST
    return 500, MSG_INTERNAL


def error_response(exc: Exception) -> JSONResponse:
    status, msg = dispatch_error(exc)
    return JSONResponse(status_code=status, content={"msg": msg})


def register_error_handlers(app: FastAPI) -> None:
    """Attach the dispatcher to *app* for every failure class it handles."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return error_response(exc)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if exc.code not in _BAD_VALUE_CODES:
            logger.error("store_error method=%s path=%s code=%s",
                         request.method, request.url.path, exc.code,
                         exc_info=exc)
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response(exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of a traceback."""
        logger.error("unhandled_error method=%s path=%s",
                     request.method, request.url.path, exc_info=exc)
        return error_response(exc)
