from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from meetdesk.core.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION

_UNTRACKED_PATHS = frozenset({"/metrics"})


def _endpoint_label(request: Request) -> str:
    """Route template (``/v1/orgs/{org_id}/bookings``) rather than the raw path.

    Org and booking ids would otherwise give every organization its own
    label set.
    """
    path_format = getattr(request.scope.get("route"), "path_format", None)
    return path_format or request.url.path


def _observe(request: Request, status_code: int, elapsed: float) -> None:
    endpoint = _endpoint_label(request)
    REQUEST_COUNT.labels(
        method=request.method, endpoint=endpoint, status_code=str(status_code)
    ).inc()
    REQUEST_DURATION.labels(method=request.method, endpoint=endpoint).observe(elapsed)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count and time every request except Prometheus scrapes."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _UNTRACKED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        status_code = 500
        with ACTIVE_REQUESTS.track_inprogress():
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                _observe(request, status_code, time.perf_counter() - started)
        return response
