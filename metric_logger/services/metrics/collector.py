"""IMetricLogger Protocol and the aggregating MetricLogger implementation.

This module defines the operation surface used by instrumented code and the
real implementation that accumulates observations per flush window. The no-op
counterpart for disabled mode lives in null_collector.py.
"""

import threading
import time
import uuid
from typing import Any, Callable, Iterable, List, Mapping, Optional, Protocol, Tuple

from metric_logger.core.logging_config import StructuredLogger, get_logger

from .measurements import MeasurementTable
from .models import MetricLoggerStatsModel, MetricRecordModel, record_fields
from .registry import MetricsRegistry
from .scheduler import FlushScheduler, TimerFactory, default_timer_factory
from .thresholds import ThresholdRegistry

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "aggregate-metric-logger"
DEFAULT_IN_PROGRESS_WARNING_LIMIT = 10000
TOO_MANY_IN_PROGRESS_TAG = "too-many-in-progress-measurements"

Parameters = Optional[Mapping[str, Any]]


class IStructuredLogger(Protocol):
    def log(self, severity: str, tag: str, fields: Mapping[str, Any]) -> None:
        ...


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _new_id() -> str:
    return str(uuid.uuid4())


class IMetricLogger(Protocol):
    """Protocol defining the interface for metric aggregation.

    Instrumented code depends on this interface only, so the aggregating and
    the disabled implementation are interchangeable.
    """

    def measure(self, tag: str, value: float, parameters: Parameters = None) -> None:
        """Fold a value-bearing observation into the current window.

        Args:
            tag: Metric name
            value: Observed value
            parameters: Flat mapping of extra dimensions narrowing the tag
        """
        ...

    def count(self, tag: str, value: float, parameters: Parameters = None) -> None:
        """Deprecated alias of measure()."""
        ...

    def trace(self, tag: str, parameters: Parameters = None) -> None:
        ...

    def debug(self, tag: str, parameters: Parameters = None) -> None:
        ...

    def info(self, tag: str, parameters: Parameters = None) -> None:
        ...

    def warn(self, tag: str, parameters: Parameters = None) -> None:
        ...

    def error(self, tag: str, parameters: Parameters = None) -> None:
        ...

    def fatal(self, tag: str, parameters: Parameters = None) -> None:
        ...

    def start(self, tag: str, parameters: Parameters = None) -> str:
        """Begin a duration measurement and return its id."""
        ...

    def stop(self, measurement_id: str) -> None:
        """Finish a measurement and fold its elapsed milliseconds."""
        ...

    def cancel(self, measurement_id: str) -> None:
        """Discard a measurement without recording anything."""
        ...

    def set_thresholds(self, tag: str, thresholds: Iterable[float]) -> None:
        ...

    def get_thresholds(self, tag: str) -> Tuple[float, ...]:
        ...

    def flush(self) -> int:
        """Emit and clear the current window now; returns the record count."""
        ...

    def close(self, flush: bool = True) -> None:
        ...

    def snapshot(self) -> List[MetricRecordModel]:
        ...

    def stats(self) -> MetricLoggerStatsModel:
        ...

    def is_enabled(self) -> bool:
        ...


class MetricLogger:
    """Aggregating metric logger.

    Owns the accumulator, the in-flight measurement table, the threshold
    registry and the flush timer. One lock serializes every mutation of the
    accumulator and the measurement table.
    """

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        in_progress_measurement_warning_limit: int = DEFAULT_IN_PROGRESS_WARNING_LIMIT,
        structured_logger: Optional[IStructuredLogger] = None,
        clock: Callable[[], int] = _now_ms,
        id_factory: Callable[[], str] = _new_id,
        timer_factory: TimerFactory = default_timer_factory,
    ):
        """Initialize an empty, idle metric logger.

        Args:
            namespace: Name of the structured logger metric lines go to
            in_progress_measurement_warning_limit: Open measurement count above
                which each flush emits a warning
            structured_logger: Metric channel, defaults to StructuredLogger(namespace)
            clock: Wall clock in epoch milliseconds
            id_factory: Generator of unique measurement ids
            timer_factory: Builds the one-shot flush timers
        """
        self.namespace = namespace
        self.in_progress_measurement_warning_limit = in_progress_measurement_warning_limit
        self.structured_logger = structured_logger or StructuredLogger(namespace)

        self.registry = MetricsRegistry()
        self.thresholds = ThresholdRegistry()
        self.measurements = MeasurementTable(clock=clock, id_factory=id_factory)
        self.scheduler = FlushScheduler(self._flush_window, clock=clock, timer_factory=timer_factory)

        self._lock = threading.Lock()
        self._count_deprecation_reported = False

    def measure(self, tag: str, value: float, parameters: Parameters = None) -> None:
        self._record(tag, value, parameters, "info", count_only=False)

    def count(self, tag: str, value: float, parameters: Parameters = None) -> None:
        """Deprecated alias of measure(); reports the deprecation once."""
        with self._lock:
            report = not self._count_deprecation_reported
            self._count_deprecation_reported = True
        if report:
            logger.warning("MetricLogger.count() is deprecated, use measure() instead")
        self.measure(tag, value, parameters)

    def trace(self, tag: str, parameters: Parameters = None) -> None:
        self._record(tag, None, parameters, "trace", count_only=True)

    def debug(self, tag: str, parameters: Parameters = None) -> None:
        self._record(tag, None, parameters, "debug", count_only=True)

    def info(self, tag: str, parameters: Parameters = None) -> None:
        self._record(tag, None, parameters, "info", count_only=True)

    def warn(self, tag: str, parameters: Parameters = None) -> None:
        self._record(tag, None, parameters, "warn", count_only=True)

    def error(self, tag: str, parameters: Parameters = None) -> None:
        self._record(tag, None, parameters, "error", count_only=True)

    def fatal(self, tag: str, parameters: Parameters = None) -> None:
        self._record(tag, None, parameters, "fatal", count_only=True)

    def start(self, tag: str, parameters: Parameters = None) -> str:
        with self._lock:
            measurement_id = self.measurements.begin(tag, parameters)
        self.scheduler.ensure_armed()
        return measurement_id

    def stop(self, measurement_id: str) -> None:
        with self._lock:
            ended = self.measurements.end(measurement_id)
            if ended is None:
                return
            measurement, elapsed_ms = ended
            self.registry.record(
                measurement.tag,
                elapsed_ms,
                measurement.parameters,
                "info",
                count_only=False,
                thresholds=self.thresholds.get_thresholds(measurement.tag),
            )
        self.scheduler.ensure_armed()

    def cancel(self, measurement_id: str) -> None:
        with self._lock:
            self.measurements.cancel(measurement_id)

    def set_thresholds(self, tag: str, thresholds: Iterable[float]) -> None:
        with self._lock:
            self.thresholds.set_thresholds(tag, thresholds)

    def get_thresholds(self, tag: str) -> Tuple[float, ...]:
        with self._lock:
            return self.thresholds.get_thresholds(tag)

    def flush(self) -> int:
        return self._flush_window()

    def close(self, flush: bool = True) -> None:
        """Cancel the pending flush timer, emitting the open window first."""
        self.scheduler.cancel()
        if flush:
            self._flush_window()

    def snapshot(self) -> List[MetricRecordModel]:
        """Current window as MetricRecordModels, without clearing it."""
        with self._lock:
            return self.registry.snapshot()

    def stats(self) -> MetricLoggerStatsModel:
        with self._lock:
            pending = len(self.registry)
            in_progress = len(self.measurements)
        return MetricLoggerStatsModel(
            enabled=True,
            namespace=self.namespace,
            pending_records=pending,
            in_progress_measurements=in_progress,
            flush_armed=self.scheduler.is_armed,
            next_flush_ms=self.scheduler.next_flush_ms,
        )

    def is_enabled(self) -> bool:
        return True

    def _record(
        self,
        tag: str,
        value: Optional[float],
        parameters: Parameters,
        severity: str,
        count_only: bool,
    ) -> None:
        with self._lock:
            thresholds = () if count_only else self.thresholds.get_thresholds(tag)
            self.registry.record(tag, value, parameters, severity, count_only, thresholds)
        self.scheduler.ensure_armed()

    def _flush_window(self) -> int:
        with self._lock:
            records = self.registry.drain_and_clear()
            in_progress = len(self.measurements)

        for record in records:
            try:
                self.structured_logger.log(record.severity, record.tag, record_fields(record))
            except Exception as e:
                logger.error(f"Error emitting metric '{record.tag}': {e}")

        if in_progress > self.in_progress_measurement_warning_limit:
            self.structured_logger.log(
                "warn",
                TOO_MANY_IN_PROGRESS_TAG,
                {
                    "in_progress_measurements": in_progress,
                    "limit": self.in_progress_measurement_warning_limit,
                },
            )

        logger.debug(f"Flushed {len(records)} metric records ({in_progress} measurements in progress)")
        return len(records)
