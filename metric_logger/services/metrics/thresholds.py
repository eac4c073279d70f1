"""ThresholdRegistry - per-tag numeric cutoffs for "above threshold" counters."""

from typing import Dict, Iterable, Tuple

Number = float


def threshold_field_name(threshold: Number) -> str:
    """Log field name for a threshold counter, e.g. ``above_500``."""
    if isinstance(threshold, float) and threshold.is_integer():
        threshold = int(threshold)
    return f"above_{threshold}"


class ThresholdRegistry:
    """Ordered threshold sets keyed by tag.

    Sets outlive flush windows; only MetricLogger.set_thresholds replaces them.
    """

    def __init__(self):
        self._thresholds: Dict[str, Tuple[Number, ...]] = {}

    def set_thresholds(self, tag: str, thresholds: Iterable[Number]) -> None:
        """Replace the threshold set for ``tag``."""
        self._thresholds[tag] = tuple(sorted(set(thresholds)))

    def get_thresholds(self, tag: str) -> Tuple[Number, ...]:
        return self._thresholds.get(tag, ())

    def clear_thresholds(self, tag: str) -> None:
        self._thresholds.pop(tag, None)

    def __contains__(self, tag: str) -> bool:
        return tag in self._thresholds
