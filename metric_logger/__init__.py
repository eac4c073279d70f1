"""Aggregate metric logger.

Module-level shortcuts delegate to the default instance built from
``METRIC_LOGGER_*`` environment variables; use create_metric_logger() for an
explicitly configured instance.
"""

from typing import Any, Iterable, Mapping, Optional

from metric_logger.services.metrics import (
    IMetricLogger,
    MetricLogger,
    NullMetricLogger,
    create_metric_logger,
    get_metric_logger,
    metric_logger_for,
    reset_metric_logger,
    set_metric_logger,
)
from metric_logger.services.metrics.timer import async_timed, timed
from metric_logger.core.logging_config import configure_logging

__version__ = "1.0.0"

Parameters = Optional[Mapping[str, Any]]


def measure(tag: str, value: float, parameters: Parameters = None) -> None:
    get_metric_logger().measure(tag, value, parameters)


def count(tag: str, value: float, parameters: Parameters = None) -> None:
    get_metric_logger().count(tag, value, parameters)


def trace(tag: str, parameters: Parameters = None) -> None:
    get_metric_logger().trace(tag, parameters)


def debug(tag: str, parameters: Parameters = None) -> None:
    get_metric_logger().debug(tag, parameters)


def info(tag: str, parameters: Parameters = None) -> None:
    get_metric_logger().info(tag, parameters)


def warn(tag: str, parameters: Parameters = None) -> None:
    get_metric_logger().warn(tag, parameters)


def error(tag: str, parameters: Parameters = None) -> None:
    get_metric_logger().error(tag, parameters)


def fatal(tag: str, parameters: Parameters = None) -> None:
    get_metric_logger().fatal(tag, parameters)


def start(tag: str, parameters: Parameters = None) -> str:
    return get_metric_logger().start(tag, parameters)


def stop(measurement_id: str) -> None:
    get_metric_logger().stop(measurement_id)


def cancel(measurement_id: str) -> None:
    get_metric_logger().cancel(measurement_id)


def set_thresholds(tag: str, thresholds: Iterable[float]) -> None:
    get_metric_logger().set_thresholds(tag, thresholds)


__all__ = [
    "IMetricLogger",
    "MetricLogger",
    "NullMetricLogger",
    "create_metric_logger",
    "get_metric_logger",
    "metric_logger_for",
    "reset_metric_logger",
    "set_metric_logger",
    "configure_logging",
    "timed",
    "async_timed",
    "measure",
    "count",
    "trace",
    "debug",
    "info",
    "warn",
    "error",
    "fatal",
    "start",
    "stop",
    "cancel",
    "set_thresholds",
]
