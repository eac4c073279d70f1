"""Factory and module-level default instance for the metric logger.

create_metric_logger() is the primary entry point and returns an instance that
owns all of its state. The default instance is built lazily from environment
settings for callers that use the package-level shortcuts.
"""

import threading
from typing import Any, Optional

from metric_logger.core.config import Settings

from .collector import (
    DEFAULT_IN_PROGRESS_WARNING_LIMIT,
    DEFAULT_NAMESPACE,
    IMetricLogger,
    MetricLogger,
)
from .null_collector import NullMetricLogger

# Module-level default instance - created on first access
_metric_logger: Optional[IMetricLogger] = None
_instance_lock = threading.Lock()


def create_metric_logger(
    enabled: bool = True,
    namespace: str = DEFAULT_NAMESPACE,
    in_progress_measurement_warning_limit: int = DEFAULT_IN_PROGRESS_WARNING_LIMIT,
    **kwargs: Any,
) -> IMetricLogger:
    """Build a metric logger instance.

    Args:
        enabled: Master switch; False returns a NullMetricLogger
        namespace: Name of the structured logger metric lines go to
        in_progress_measurement_warning_limit: Open measurement count above
            which each flush emits a warning
        **kwargs: Injection seams forwarded to MetricLogger (structured_logger,
            clock, id_factory, timer_factory)

    Returns:
        An aggregating MetricLogger, or a NullMetricLogger when disabled
    """
    if not enabled:
        id_factory = kwargs.get("id_factory")
        if id_factory is not None:
            return NullMetricLogger(namespace=namespace, id_factory=id_factory)
        return NullMetricLogger(namespace=namespace)

    return MetricLogger(
        namespace=namespace,
        in_progress_measurement_warning_limit=in_progress_measurement_warning_limit,
        **kwargs,
    )


def create_from_settings(settings: Settings, namespace: Optional[str] = None) -> IMetricLogger:
    return create_metric_logger(
        enabled=settings.METRIC_LOGGER_ENABLED,
        namespace=namespace or settings.METRIC_LOGGER_NAMESPACE,
        in_progress_measurement_warning_limit=settings.METRIC_LOGGER_IN_PROGRESS_WARNING_LIMIT,
    )


def metric_logger_for(namespace: str) -> IMetricLogger:
    """Build an instance for ``namespace`` sharing the environment's settings."""
    return create_from_settings(Settings.from_env(), namespace=namespace)


def get_metric_logger() -> IMetricLogger:
    """Get the default metric logger, creating it from the environment once.

    Returns:
        The active metric logger instance (aggregating or null)
    """
    global _metric_logger
    with _instance_lock:
        if _metric_logger is None:
            _metric_logger = create_from_settings(Settings.from_env())
        return _metric_logger


def set_metric_logger(metric_logger: IMetricLogger) -> None:
    """Replace the default metric logger.

    Args:
        metric_logger: The instance package-level shortcuts delegate to
    """
    global _metric_logger
    with _instance_lock:
        _metric_logger = metric_logger


def reset_metric_logger(flush: bool = True) -> None:
    """Close and drop the default instance; the next access rebuilds it."""
    global _metric_logger
    with _instance_lock:
        current, _metric_logger = _metric_logger, None
    if current is not None:
        current.close(flush=flush)
