from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Booking workflow metrics
# ---------------------------------------------------------------------------

BOOKINGS_CREATED = Counter(
    "bookings_created_total",
    "Bookings accepted into the ledger",
    ["location_type"],  # online|physical|premium
)

BOOKING_REJECTIONS = Counter(
    "booking_rejections_total",
    "Booking submissions rejected, by first failing rule",
    ["reason"],  # error code, e.g. missing_address
)

CONFERENCE_PROVIDER_REQUESTS = Counter(
    "conference_provider_requests_total",
    "Calls to the external conferencing provider",
    ["outcome"],  # "ok" or "error"
)

CONFERENCE_PROVIDER_DURATION = Histogram(
    "conference_provider_request_duration_seconds",
    "Latency of external conferencing provider calls",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

PREMIUM_PERMISSION_TOGGLES = Counter(
    "premium_permission_toggles_total",
    "Admin toggles of premium room permission",
    ["granted"],  # "true" after a grant, "false" after a revoke
)
