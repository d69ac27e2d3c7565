import getpass
import json
import logging
import os
import platform
import socket
import time
from datetime import datetime
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.background import BackgroundTask
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from report_builder.core.config import APPLICATION_ID
from report_builder.core.database import SessionLocal
from report_builder.logging.models import Log

logger = logging.getLogger(__name__)

# Paths that are never logged
EXCLUDED_PATHS = ["/api/logs", "/api/docs", "/api/openapi.json"]


def current_username() -> str:
    try:
        return (
            os.environ.get("USER")
            or os.environ.get("USERNAME")
            or getpass.getuser()
            or "unknown_user"
        )
    except Exception:
        return "unknown_user"


def current_hostname() -> str:
    try:
        return socket.gethostname() or platform.node() or "unknown_host"
    except Exception:
        return "unknown_host"


def write_log(
    request: Request,
    status_code: int,
    request_body: Optional[str],
    response_body: Optional[str],
    processing_time: Optional[float] = None,
) -> None:
    """Persist one request/response log row."""
    with SessionLocal() as session:
        session.add(Log(
            timestamp=datetime.now(),
            method=request.method,
            path=str(request.url.path),
            status_code=status_code,
            client_ip=request.client.host if request.client else None,
            request_headers=json.dumps(dict(request.headers)),
            request_body=request_body,
            response_body=response_body,
            processing_time=processing_time,
            user_agent=request.headers.get("user-agent"),
            username=current_username(),
            hostname=current_hostname(),
            application_id=APPLICATION_ID,
        ))
        session.commit()


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.username = current_username()
        self.hostname = current_hostname()
        logger.info(
            "Logging middleware initialized with username: %s on host: %s, App ID: %s",
            self.username, self.hostname, APPLICATION_ID,
        )

    async def dispatch(self, request: Request, call_next: Callable):
        if any(request.url.path.startswith(path) for path in EXCLUDED_PATHS):
            return await call_next(request)

        start_time = time.time()

        body_bytes = await request.body()
        request_body = body_bytes.decode("utf-8", errors="ignore")
        # Keep the body readable for exception handlers
        request.state.body = request_body

        async def receive() -> dict:
            return {"type": "http.request", "body": body_bytes}

        request = Request(request.scope, receive=receive)

        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        status_code = response.status_code
        content_type = response.headers.get("content-type", "")

        response_body = b""
        if isinstance(response, Response) and hasattr(response, "body"):
            response_body = response.body
        elif hasattr(response, "body_iterator"):
            # Streaming response: buffer the chunks as they are sent
            original_iterator = response.body_iterator
            chunks = []

            async def buffer_iterator():
                nonlocal response_body
                async for chunk in original_iterator:
                    chunks.append(chunk)
                    yield chunk
                response_body = b"".join(chunks)

            response.body_iterator = buffer_iterator()

        def log_to_db():
            if content_type.startswith(("text/csv", "application/vnd.openxmlformats")):
                body_to_log = f"[{content_type} export of {len(response_body)} bytes]"
            elif response_body:
                body_to_log = response_body.decode("utf-8", errors="ignore")
            else:
                body_to_log = "[Response body not available]"
            try:
                write_log(request, status_code, request_body, body_to_log, duration_ms)
            except Exception:
                logger.exception("Failed to persist request log for %s", request.url.path)

        response.background = getattr(response, "background", None) or BackgroundTask(log_to_db)
        return response
