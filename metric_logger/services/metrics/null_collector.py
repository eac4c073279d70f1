"""NullMetricLogger - No-op implementation for disabled metrics.

This module provides a null object pattern implementation that aggregates
nothing and arms no timer when metrics are disabled, while keeping ids from
start() valid so callers' stop()/cancel() stay safe.
"""

import uuid
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import MetricLoggerStatsModel, MetricRecordModel

Parameters = Optional[Mapping[str, Any]]


def _new_id() -> str:
    return str(uuid.uuid4())


class NullMetricLogger:
    """No-op metric logger for when metrics are disabled.

    All recording methods return immediately. snapshot() and stats() return
    valid empty models to keep the IMetricLogger contract.
    """

    def __init__(self, namespace: str = "aggregate-metric-logger", id_factory: Callable[[], str] = _new_id):
        self.namespace = namespace
        self._id_factory = id_factory

    def measure(self, tag: str, value: float, parameters: Parameters = None) -> None:
        """No-op: fold a value-bearing observation."""
        pass

    def count(self, tag: str, value: float, parameters: Parameters = None) -> None:
        """No-op: deprecated alias of measure()."""
        pass

    def trace(self, tag: str, parameters: Parameters = None) -> None:
        pass

    def debug(self, tag: str, parameters: Parameters = None) -> None:
        pass

    def info(self, tag: str, parameters: Parameters = None) -> None:
        pass

    def warn(self, tag: str, parameters: Parameters = None) -> None:
        pass

    def error(self, tag: str, parameters: Parameters = None) -> None:
        pass

    def fatal(self, tag: str, parameters: Parameters = None) -> None:
        pass

    def start(self, tag: str, parameters: Parameters = None) -> str:
        """Return a fresh id that stop()/cancel() accept without effect."""
        return self._id_factory()

    def stop(self, measurement_id: str) -> None:
        pass

    def cancel(self, measurement_id: str) -> None:
        pass

    def set_thresholds(self, tag: str, thresholds: Iterable[float]) -> None:
        pass

    def get_thresholds(self, tag: str) -> Tuple[float, ...]:
        return ()

    def flush(self) -> int:
        return 0

    def close(self, flush: bool = True) -> None:
        pass

    def snapshot(self) -> List["MetricRecordModel"]:
        return []

    def stats(self) -> "MetricLoggerStatsModel":
        """Return a valid stats model with zero values."""
        # Import here to avoid circular imports
        from .models import MetricLoggerStatsModel

        return MetricLoggerStatsModel(
            enabled=False,
            namespace=self.namespace,
            pending_records=0,
            in_progress_measurements=0,
            flush_armed=False,
        )

    def is_enabled(self) -> bool:
        """Always returns False for the null logger."""
        return False
