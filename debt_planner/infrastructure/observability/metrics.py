"""Prometheus metrics for payoff simulations, projections and request latency"""

from prometheus_client import Counter, Histogram

# Payoff metrics
payoff_counter = Counter(
    "debt_planner_payoff_total",
    "Total payoff simulations computed",
    ["strategy", "outcome"],  # outcome: plan | unpayable | negative_amortization
)

payoff_months_histogram = Histogram(
    "debt_planner_payoff_months",
    "Simulated months until debt-free",
    buckets=[6, 12, 24, 36, 60, 120, 240, 600, 1200],
)

# Projection metrics
projection_counter = Counter(
    "debt_planner_projection_total",
    "Total twelve-month projections computed",
)

projection_negative_month_counter = Counter(
    "debt_planner_projection_negative_months_total",
    "Projected months with a negative available balance",
)

# Validation
validation_failure_counter = Counter(
    "debt_planner_validation_failures_total",
    "Requests rejected by snapshot validation",
    ["endpoint"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payoff(strategy: str, outcome: str, months: int | None) -> None:
    """Record payoff metrics by strategy and outcome"""
    payoff_counter.labels(strategy=strategy, outcome=outcome).inc()
    if months is not None:
        payoff_months_histogram.observe(months)


def record_projection(negative_months: int) -> None:
    projection_counter.inc()
    if negative_months:
        projection_negative_month_counter.inc(negative_months)
