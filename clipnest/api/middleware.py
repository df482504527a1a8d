"""Request logging middleware.

Logs one structured event per request and tags the response with an
``X-Request-ID`` header (the caller's value is reused when present).
"""

import time
import uuid
from typing import Optional, Set

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from clipnest.core.logging import get_logger

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log for every request.

    Example:
        .. code-block:: python

            app.add_middleware(RequestLoggingMiddleware, ignored_paths={"/api/v1/health"})
    """

    default_ignored_paths = {"/favicon.ico", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        logger=None,
        add_request_id_header: bool = True,
        ignored_paths: Optional[Set[str]] = None,
    ):
        super().__init__(app)
        self.logger = logger or get_logger("api.request")
        self.add_request_id_header = add_request_id_header
        self.ignored_paths = ignored_paths if ignored_paths is not None else self.default_ignored_paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        if request.url.path not in self.ignored_paths:
            self.logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        if self.add_request_id_header:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
