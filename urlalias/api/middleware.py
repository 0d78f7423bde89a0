"""
HTTP middleware for urlalias.

RequestContextMiddleware:
    - Assigns a request id (honours an incoming X-Request-ID header)
      and stores it on `request.state.request_id`
    - Bounds handling time of read requests; overruns get a 504 envelope
    - Logs every request with method, path, status and duration

Only methods in `bounded_methods` (GET/HEAD by default) are cut off. A route
that is abandoned here keeps running in the threadpool, so cutting off a
write would report failure for a record that still gets stored. Writes are
bounded by the storage backend instead (PostgreSQL statement_timeout), which
fails the statement before it commits.
"""

import asyncio
import logging
import time
import uuid
from typing import Callable, Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .response import error_response

REQUEST_ID_HEADER = "X-Request-ID"
READ_METHODS = ("GET", "HEAD")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request id, read timeout and access logging."""

    def __init__(
        self,
        app,
        logger: Optional[logging.Logger] = None,
        timeout: Optional[float] = None,
        bounded_methods: Iterable[str] = READ_METHODS,
    ):
        super().__init__(app)
        self.logger = logger or logging.getLogger("urlalias.http")
        self.timeout = timeout
        self.bounded_methods = frozenset(bounded_methods)

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        start_time = time.perf_counter()

        timeout = self.timeout if request.method in self.bounded_methods else None
        try:
            response = await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            self.logger.error(
                "request timed out",
                extra={"request_id": request_id, "method": request.method, "path": request.url.path},
            )
            response = error_response(504, "request timeout")

        response.headers[REQUEST_ID_HEADER] = request_id
        duration_ms = (time.perf_counter() - start_time) * 1000
        self.logger.info(
            "request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
