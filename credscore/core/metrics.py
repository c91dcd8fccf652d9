"""Prometheus metrics for the CredScore Gateway service.

Metrics are organized into two categories:

Business Metrics (for Product/Risk):
- credscore_score_computed_total: Scores computed by band
- credscore_score_bucket: Scores by 100-point bucket and band
- credscore_risk_flag_total: Risk flags raised
- credscore_entries_upserted_total: Daily entries written
- credscore_cash_estimates_total: Cash estimates recorded
- credscore_avg_score: Average computed score

Technical Metrics (for Engineering/SRE):
- credscore_score_latency_seconds: Score request latency
- credscore_sanitizer_total: Sanitizer outcomes
- credscore_polish_total: Polisher outcomes
- credscore_polish_latency_seconds: Polisher latency
- credscore_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator, Iterable

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Risk dashboards)
# =============================================================================

score_computed_total = Counter(
    "credscore_score_computed_total",
    "Total number of scores computed",
    ["band"],  # A, B, C, D
)

score_bucket = Counter(
    "credscore_score_bucket",
    "Computed scores by bucket",
    ["bucket", "band"],
)

risk_flag_total = Counter(
    "credscore_risk_flag_total",
    "Total number of risk flags raised",
    ["flag"],
)

entries_upserted_total = Counter(
    "credscore_entries_upserted_total",
    "Total number of daily entries written",
)

cash_estimates_total = Counter(
    "credscore_cash_estimates_total",
    "Total number of cash estimates recorded",
)

avg_score_gauge = Gauge(
    "credscore_avg_score",
    "Average computed score (0-1000)",
)

# Track totals for computing the average
_score_count = 0
_score_sum = 0


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

score_latency = Histogram(
    "credscore_score_latency_seconds",
    "Score request latency in seconds",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

sanitizer_total = Counter(
    "credscore_sanitizer_total",
    "Sanitizer outcomes for user-facing text",
    ["outcome"],  # clean, cleaned, fallback
)

polish_total = Counter(
    "credscore_polish_total",
    "Total number of polisher requests",
    ["status"],  # polished, skipped
)

polish_latency = Histogram(
    "credscore_polish_latency_seconds",
    "Polisher request latency in seconds",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

http_requests_total = Counter(
    "credscore_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "credscore_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_score(score: int, band: str, flags: Iterable[str]) -> None:
    """Record a computed score in metrics."""
    global _score_count, _score_sum

    score_computed_total.labels(band=band).inc()
    score_bucket.labels(bucket=_get_score_bucket(score), band=band).inc()
    for flag in flags:
        risk_flag_total.labels(flag=flag).inc()

    _score_count += 1
    _score_sum += score
    avg_score_gauge.set(_score_sum / _score_count)


def _get_score_bucket(score: int) -> str:
    """Map a score to a 100-point bucket label."""
    if score <= 0:
        return "0"
    elif score >= 1000:
        return "1000"
    lower = (score // 100) * 100
    return f"{lower}-{lower + 99}"


@contextmanager
def track_score_latency() -> Generator[None, None, None]:
    """Context manager to track score computation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        score_latency.observe(duration)


@contextmanager
def track_polish_latency() -> Generator[None, None, None]:
    """Context manager to track polisher latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        polish_latency.observe(duration)


def record_entry_upserted() -> None:
    entries_upserted_total.inc()


def record_cash_estimate() -> None:
    cash_estimates_total.inc()


def record_sanitizer_outcome(was_modified: bool, used_fallback: bool) -> None:
    """Record how a user-facing text left the sanitizer."""
    if used_fallback:
        outcome = "fallback"
    elif was_modified:
        outcome = "cleaned"
    else:
        outcome = "clean"
    sanitizer_total.labels(outcome=outcome).inc()


def record_polish(polished: bool) -> None:
    polish_total.labels(status="polished" if polished else "skipped").inc()


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
