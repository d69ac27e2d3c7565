# report_builder/logging/exception_handlers.py

import json
import logging
import traceback
from datetime import datetime

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse

from report_builder.logging.middleware import write_log

logger = logging.getLogger(__name__)


def safe_json_dumps(obj) -> str:
    return json.dumps(obj, indent=2, default=str)


def get_request_body_safely(request: Request) -> str:
    """Body captured by the logging middleware, if any."""
    return getattr(request.state, "body", None) or "Request body not captured"


def _log_error(request: Request, status_code: int, response_body: str) -> None:
    try:
        write_log(request, status_code, get_request_body_safely(request), response_body)
    except Exception:
        logger.exception("Error logging exception for %s", request.url.path)


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions and log them to database"""
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    _log_error(request, 500, safe_json_dumps({
        "error": str(exc),
        "type": type(exc).__name__,
        "traceback": traceback.format_exc(),
    }))
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


async def response_validation_exception_handler(request: Request, exc: ResponseValidationError):
    _log_error(request, 500, safe_json_dumps(exc.errors()))
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error: Response validation failed."},
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    _log_error(request, 422, safe_json_dumps(exc.errors()))

    # Errors may carry exception objects in their context
    def convert_error(error):
        if isinstance(error, dict):
            return {k: convert_error(v) for k, v in error.items()}
        elif isinstance(error, list):
            return [convert_error(item) for item in error]
        elif isinstance(error, (str, int, float, bool)) or error is None:
            return error
        return str(error)

    return JSONResponse(
        status_code=422,
        content={"detail": convert_error(exc.errors())},
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions; server-side failures get an extra detailed log row"""
    if exc.status_code >= 500:
        _log_error(request, exc.status_code, safe_json_dumps({
            "detail": exc.detail,
            "headers": getattr(exc, "headers", None),
            "timestamp": datetime.now().isoformat(),
        }))
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )
