"""Prometheus metrics for ledger mutations, state transitions, and store health"""

from prometheus_client import Counter, Histogram

# Mutation metrics
mutation_counter = Counter(
    "ledger_mutations_total",
    "Ledger records written",
    ["entity", "action"],  # transaction|budget|installment|credit_card_bill|template, create|update|...
)

invalid_transition_counter = Counter(
    "invalid_transition_total",
    "Rejected state machine transitions",
    ["entity"],  # installment | credit_card_bill
)

# Store metrics
store_failures_counter = Counter(
    "store_failures_total",
    "Failed backing store calls",
    ["operation"],
)

# Summary service metrics
summary_latency_histogram = Histogram(
    "summary_latency_seconds",
    "Text-summary service response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

summary_failure_counter = Counter(
    "summary_failures_total",
    "Failed text-summary requests",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_mutation(entity: str, action: str) -> None:
    """Count one committed write"""
    mutation_counter.labels(entity=entity, action=action).inc()
