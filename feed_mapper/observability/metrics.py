"""
Prometheus metrics collection for feed-mapper

This module provides metrics instrumentation for feed loading,
mapping and export.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Registry for package metrics
REGISTRY = CollectorRegistry()


# =======================
# LOAD METRICS
# =======================

feeds_loaded_total = Counter(
    name="feed_mapper_feeds_loaded_total",
    documentation="Total number of feed documents loaded",
    labelnames=["status"],  # status: success, failure
    registry=REGISTRY,
)

items_loaded_total = Counter(
    name="feed_mapper_items_loaded_total",
    documentation="Total number of <item> records parsed",
    registry=REGISTRY,
)

# =======================
# TRANSFORM METRICS
# =======================

rules_applied_total = Counter(
    name="feed_mapper_rules_applied_total",
    documentation="Total number of mapping rules applied, counted once per apply call",
    labelnames=["rule_type"],  # rule_type: rename, static, combine, empty
    registry=REGISTRY,
)

transform_duration_seconds = Histogram(
    name="feed_mapper_transform_duration_seconds",
    documentation="Time spent applying mapping rules to a feed",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY,
)

# =======================
# OUTPUT METRICS
# =======================

serialized_bytes = Histogram(
    name="feed_mapper_serialized_bytes",
    documentation="Size of serialized feed documents in bytes",
    buckets=[1_000, 10_000, 100_000, 1_000_000, 10_000_000],
    registry=REGISTRY,
)

exports_total = Counter(
    name="feed_mapper_exports_total",
    documentation="Total number of feeds handed to an export sink",
    labelnames=["sink"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def get_sample_value(name: str, labels: dict[str, str] | None = None) -> float:
    """
    Read the current value of a sample from the package registry

    Args:
        name: Sample name (e.g. "feed_mapper_items_loaded_total")
        labels: Label values identifying the sample

    Returns:
        Sample value, 0.0 if it has not been recorded yet
    """
    value = REGISTRY.get_sample_value(name, labels or {})
    return value or 0.0
