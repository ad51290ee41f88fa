"""
Prometheus metrics for the license service.

Custom metrics for business logic and store performance monitoring.
"""

from prometheus_client import Counter, Histogram

# License metrics
customers_issued_total = Counter(
    "customers_issued_total",
    "Total customer licenses issued",
)

licenses_renewed_total = Counter(
    "licenses_renewed_total",
    "Total license renewals",
)

license_ban_changes_total = Counter(
    "license_ban_changes_total",
    "Total ban and unban operations",
    ["banned"],
)

activation_attempts_total = Counter(
    "activation_attempts_total",
    "Total activation attempts",
    ["outcome"],
)

verifications_total = Counter(
    "verifications_total",
    "Total verification checks",
    ["outcome"],
)

# Store metrics
store_update_duration_seconds = Histogram(
    "store_update_duration_seconds",
    "Duration of atomic record updates in seconds",
    ["store"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

store_contention_total = Counter(
    "store_contention_total",
    "Total updates that hit a locked record",
    ["operation"],
)
