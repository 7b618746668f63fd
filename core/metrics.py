"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
license_operations_total = Counter(
    "license_operations_total",
    "License lifecycle operations by outcome",
    ["operation", "result"],
)

license_checks_total = Counter(
    "license_checks_total",
    "License validate/verify checks",
    ["check", "valid"],
)

admin_operations_total = Counter(
    "admin_operations_total",
    "Admin management operations",
    ["operation"],
)

# Rate limiting
rate_limited_requests_total = Counter(
    "rate_limited_requests_total",
    "Requests rejected by the rate limiter",
    ["endpoint"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
