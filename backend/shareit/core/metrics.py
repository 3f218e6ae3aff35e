"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking lifecycle metrics
booking_transitions = Counter(
    'booking_transitions_total',
    'Booking state machine outcomes',
    ['outcome']  # created, approved, rejected, refused
)

booking_queries = Counter(
    'booking_queries_total',
    'Temporal booking queries',
    ['perspective', 'state']
)

booking_latency = Histogram(
    'booking_operation_latency_seconds',
    'Booking operation latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Comment gate metrics
comment_attempts = Counter(
    'comment_attempts_total',
    'Comment attempts by eligibility result',
    ['result']  # accepted, rejected
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_transition(outcome: str):
    """Record a state machine outcome: created, approved, rejected, refused."""
    booking_transitions.labels(outcome=outcome).inc()


def record_query(perspective: str, state: str):
    booking_queries.labels(perspective=perspective, state=state).inc()


def record_comment_attempt(accepted: bool):
    """Record comment gate decision."""
    result = "accepted" if accepted else "rejected"
    comment_attempts.labels(result=result).inc()
