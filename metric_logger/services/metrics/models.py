"""Pydantic V2 models for flushed metric records and logger stats.

MetricRecordModel is the shape of one metric line in a snapshot. Flushes
flatten AggregateRecords with record_fields() directly, so values pydantic
would reject still reach the log unchanged.
"""

from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .thresholds import threshold_field_name

if TYPE_CHECKING:
    from .registry import AggregateRecord

Number = Union[int, float]


def record_fields(record: Any) -> Dict[str, Any]:
    """Flatten a record into the field mapping handed to the structured logger.

    Accepts an AggregateRecord or a MetricRecordModel. Parameters come first
    so aggregate fields win on a name clash.
    """
    fields: Dict[str, Any] = dict(record.parameters)
    fields["count"] = record.count
    if record.sum is not None:
        fields["min"] = record.min
        fields["max"] = record.max
        fields["sum"] = record.sum
        fields["average"] = record.average
    for threshold, above in sorted(record.threshold_counts.items()):
        fields[threshold_field_name(threshold)] = above
    fields["is_metric"] = True
    return fields


class MetricRecordModel(BaseModel):
    """Aggregated metric for one (tag, parameters) series over one window"""
    model_config = ConfigDict(from_attributes=True)

    tag: str
    severity: str = "info"
    parameters: Dict[str, Any] = {}
    count: int
    min: Optional[Number] = None
    max: Optional[Number] = None
    sum: Optional[Number] = None
    average: Optional[Number] = None
    threshold_counts: Dict[Number, int] = {}

    @classmethod
    def from_record(cls, record: "AggregateRecord") -> "MetricRecordModel":
        return cls(
            tag=record.tag,
            severity=record.severity,
            parameters=dict(record.parameters),
            count=record.count,
            min=record.min,
            max=record.max,
            sum=record.sum,
            average=record.average,
            threshold_counts=dict(record.threshold_counts),
        )

    def to_fields(self) -> Dict[str, Any]:
        return record_fields(self)


class MetricLoggerStatsModel(BaseModel):
    """Lightweight state summary of a metric logger instance"""
    model_config = ConfigDict(from_attributes=True)

    enabled: bool
    namespace: str
    pending_records: int
    in_progress_measurements: int
    flush_armed: bool
    next_flush_ms: Optional[int] = None
