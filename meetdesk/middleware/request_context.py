"""Request context middleware: one id per request, carried into every log line.

The id lives in a ContextVar so concurrent async requests sharing a
thread each see their own. A filter on the root handlers copies it onto
every LogRecord, whichever module emitted it.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        return True


def install_request_context_filter() -> None:
    """Attach the request-id filter to each root handler that lacks one.

    Logger-level filters skip records propagated from child loggers, so
    the filter belongs on the handlers.
    """
    for handler in logging.getLogger().handlers:
        if any(isinstance(f, _RequestContextFilter) for f in handler.filters):
            continue
        handler.addFilter(_RequestContextFilter())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the duration of the request and log a summary.

    An incoming X-Request-ID is reused; otherwise a uuid4 is generated.
    Either way it is returned on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(req_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            context = {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            }
            logger.info(
                "%(method)s %(path)s -> %(status_code)d (%(duration_ms).1fms)",
                context,
                extra=context,
            )
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = req_id
        return response
