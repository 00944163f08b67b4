"""Prometheus metrics for monitoring decision mix, ratios, and store health"""

from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "underwriting_decision_total",
    "Total underwriting decisions made",
    ["outcome"],  # approved | refer | denied
)

dti_histogram = Histogram(
    "underwriting_dti_percent",
    "Debt-to-income ratio of evaluated applications",
    buckets=[10, 20, 30, 36, 43, 50, 60, 80, 100],
)

ltv_histogram = Histogram(
    "underwriting_ltv_percent",
    "Loan-to-value ratio of evaluated applications",
    buckets=[50, 60, 70, 75, 80, 85, 90, 95, 97, 100],
)

validation_failures_counter = Counter(
    "underwriting_validation_failures_total",
    "Rejected loan applications",
)

computation_failures_counter = Counter(
    "underwriting_computation_failures_total",
    "Internal faults while evaluating an application",
)

# History store metrics
store_failures_counter = Counter(
    "history_store_failures_total",
    "Failed history store operations",
    ["operation"],  # append | list
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(outcome: str, dti: float, ltv: float) -> None:
    """Record decision metrics for monitoring approval rates and ratio distribution"""
    decision_counter.labels(outcome=outcome).inc()
    dti_histogram.observe(dti)
    ltv_histogram.observe(ltv)
