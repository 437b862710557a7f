"""
Prometheus metrics for system monitoring.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from install_scheduling.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()


def get_registry():
    """Get the current registry."""
    return registry


def _get_metric(metric_class, *args, **kwargs):
    """Create a metric, falling back to a no-op when registration fails."""
    try:
        return metric_class(*args, **kwargs, registry=get_registry())
    except Exception as e:
        logger.warning(
            "Failed to create metric", metric=metric_class.__name__, error=str(e)
        )

        # Return a dummy metric that does nothing
        class DummyMetric:
            def labels(self, *args, **kwargs):
                return self

            def inc(self, amount=1):
                pass

            def observe(self, value):
                pass

        return DummyMetric()


# Distance lookups
DISTANCE_CACHE_LOOKUPS = _get_metric(
    Counter,
    "distance_cache_lookups_total",
    "Distance cache lookups by result",
    ["result"],
)

DISTANCE_PROVIDER_CALLS = _get_metric(
    Counter,
    "distance_provider_calls_total",
    "Calls made to the distance provider",
    ["provider", "status"],
)

DISTANCE_PROVIDER_DURATION = _get_metric(
    Histogram,
    "distance_provider_duration_seconds",
    "Time spent waiting on the distance provider",
    ["provider"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Scheduling
RECOMMENDATION_CANDIDATES = _get_metric(
    Counter,
    "recommendation_candidates_total",
    "Candidate engineers evaluated by the recommendation engine",
    ["outcome"],
)

CONFLICTS_DETECTED = _get_metric(
    Counter,
    "scheduling_conflicts_detected_total",
    "Scheduling conflicts detected",
    ["type", "severity"],
)

ASSIGNMENTS_APPLIED = _get_metric(
    Counter,
    "assignments_applied_total",
    "Engineer/date changes applied to jobs",
    ["reset_reason"],
)

# API metrics
API_REQUESTS = _get_metric(
    Counter,
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)

API_REQUEST_DURATION = _get_metric(
    Histogram,
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
)

# Error metrics
ERRORS_TOTAL = _get_metric(
    Counter,
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
)


def record_distance_cache_lookup(result: str):
    """Record a cache lookup (hit, miss, expired, same_postcode)."""
    DISTANCE_CACHE_LOOKUPS.labels(result=result).inc()


def record_distance_provider_call(provider: str, status: str, duration: float):
    """Record a distance provider call and its latency."""
    DISTANCE_PROVIDER_CALLS.labels(provider=provider, status=status).inc()
    DISTANCE_PROVIDER_DURATION.labels(provider=provider).observe(duration)


def record_recommendation_candidate(outcome: str):
    """Record what happened to a candidate (ranked, skipped, too_far)."""
    RECOMMENDATION_CANDIDATES.labels(outcome=outcome).inc()


def record_conflict(conflict_type: str, severity: str):
    """Record a detected conflict."""
    CONFLICTS_DETECTED.labels(type=conflict_type, severity=severity).inc()


def record_assignment(reset_reason: str):
    """Record an applied assignment ('none' when nothing was reset)."""
    ASSIGNMENTS_APPLIED.labels(reset_reason=reset_reason).inc()


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record an API request."""
    API_REQUESTS.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST
