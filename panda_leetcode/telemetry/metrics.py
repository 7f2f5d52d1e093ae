"""Prometheus metrics definitions."""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

http_request_duration = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

upstream_requests_total = Counter(
    "upstream_requests_total",
    "Outbound requests to the upstream problem repository",
    labelnames=["source", "outcome"],
)

upstream_request_duration = Histogram(
    "upstream_request_duration_seconds",
    "Duration of outbound upstream requests in seconds",
    labelnames=["source"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0),
)

problem_set_errors_total = Counter(
    "problem_set_errors_total",
    "Problem-set requests rejected or failed, by failure kind",
    labelnames=["error_type"],
)

directory_cache_total = Counter(
    "directory_cache_total",
    "Company directory lookups by cache result",
    labelnames=["result"],
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
