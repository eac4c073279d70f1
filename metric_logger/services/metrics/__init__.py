"""Windowed metric aggregation and flush system.

This package collects measurements and event counts keyed by tag and
parameters, aggregates them in memory per 30 second wall-clock window and
emits one structured log line per series at each flush.
"""

from .registry import AggregateRecord, MetricsRegistry
from .collector import IMetricLogger, MetricLogger
from .null_collector import NullMetricLogger
from .instance import (
    create_metric_logger,
    get_metric_logger,
    metric_logger_for,
    reset_metric_logger,
    set_metric_logger,
)

__all__ = [
    "AggregateRecord",
    "MetricsRegistry",
    "IMetricLogger",
    "MetricLogger",
    "NullMetricLogger",
    "create_metric_logger",
    "get_metric_logger",
    "metric_logger_for",
    "reset_metric_logger",
    "set_metric_logger",
]
