"""MetricsRegistry - In-memory accumulator for the current flush window.

This module provides the aggregate record type and the store that folds
observations into it. All state lives in one dict keyed by grouping key and is
swapped out wholesale at flush time.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

from .key_codec import Parameters, grouping_key, normalize_parameters

if TYPE_CHECKING:
    from .models import MetricRecordModel


@dataclass
class AggregateRecord:
    """Running aggregate for one (tag, parameters) series within a window.

    Count-only records (severity counters) leave the numeric fields as None.
    """
    tag: str
    parameters: Dict[str, Any]
    severity: str = "info"
    count: int = 1
    min: Optional[float] = None
    max: Optional[float] = None
    sum: Optional[float] = None
    average: Optional[float] = None
    threshold_counts: Dict[float, int] = field(default_factory=dict)

    @property
    def is_count_only(self) -> bool:
        return self.sum is None


class MetricsRegistry:
    """Accumulator store holding every aggregate record of the open window.

    This is a pure data-holding class; callers serialize access with the
    owning MetricLogger's lock.
    """

    def __init__(self):
        # Aggregate records keyed by (kind, grouping key)
        self.records: Dict[Tuple[str, str], AggregateRecord] = {}

    def record(
        self,
        tag: str,
        value: Optional[float],
        parameters: Optional[Parameters] = None,
        severity: str = "info",
        count_only: bool = False,
        thresholds: Sequence[float] = (),
    ) -> AggregateRecord:
        """Fold one observation into the record for (tag, parameters).

        ``thresholds`` is the set registered for ``tag`` at observation time;
        each threshold strictly below ``value`` has its counter bumped.
        """
        # Event counters never share a record with value-bearing observations
        kind = severity if count_only else "value"
        key = (kind, grouping_key(tag, parameters))
        existing = self.records.get(key)

        if existing is None:
            existing = AggregateRecord(
                tag=tag,
                parameters=normalize_parameters(parameters),
                severity=severity,
            )
            if not count_only:
                existing.min = value
                existing.max = value
                existing.sum = value
                existing.average = value
                existing.threshold_counts = {
                    threshold: 1 if value > threshold else 0 for threshold in thresholds
                }
            self.records[key] = existing
            return existing

        existing.count += 1
        if count_only:
            return existing

        existing.min = min(existing.min, value)
        existing.max = max(existing.max, value)
        existing.sum = existing.sum + value
        existing.average = existing.sum / existing.count

        for threshold in thresholds:
            above = 1 if value > threshold else 0
            existing.threshold_counts[threshold] = existing.threshold_counts.get(threshold, 0) + above

        return existing

    def drain_and_clear(self) -> List[AggregateRecord]:
        """Return all records and reset the store to empty."""
        drained = list(self.records.values())
        self.records = {}
        return drained

    def peek(self) -> List[AggregateRecord]:
        """Return copies of the current records without clearing."""
        return [copy.deepcopy(record) for record in self.records.values()]

    def snapshot(self) -> List["MetricRecordModel"]:
        """Serialize current state into MetricRecordModel instances."""
        # Import here to avoid circular imports
        from .models import MetricRecordModel

        return [MetricRecordModel.from_record(record) for record in self.peek()]

    def reset(self) -> None:
        """Drop all records. Used for testing."""
        self.records.clear()

    def __len__(self) -> int:
        return len(self.records)
