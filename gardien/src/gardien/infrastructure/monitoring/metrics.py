"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "gardien_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "gardien_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "gardien_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Verification Metrics
# ============================================================

verification_challenges_total = Counter(
    "gardien_verification_challenges_total",
    "Challenge requests by outcome",
    ["platform", "outcome"],
)

verification_attempts_total = Counter(
    "gardien_verification_attempts_total",
    "Signature verification attempts by outcome",
    ["outcome"],
)

wallet_unlinks_total = Counter(
    "gardien_wallet_unlinks_total",
    "Wallet bindings removed",
    ["platform"],
)

# ============================================================
# Store Metrics
# ============================================================

store_unavailable_total = Counter(
    "gardien_store_unavailable_total",
    "Operations failed because a backing store was unreachable",
    ["store"],
)
