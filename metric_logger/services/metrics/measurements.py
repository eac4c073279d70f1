"""In-flight duration measurements started with ``start`` and not yet stopped."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .key_codec import Parameters, normalize_parameters


@dataclass(frozen=True)
class InFlightMeasurement:
    tag: str
    parameters: Dict[str, Any]
    start_ms: int


class MeasurementTable:
    """Open measurements keyed by a unique id.

    An id is consumed by exactly one ``end`` or ``cancel``; later calls with the
    same id find nothing and do nothing.
    """

    def __init__(self, clock: Callable[[], int], id_factory: Callable[[], str]):
        self._clock = clock
        self._id_factory = id_factory
        self._measurements: Dict[str, InFlightMeasurement] = {}

    def begin(self, tag: str, parameters: Optional[Parameters] = None) -> str:
        measurement_id = self._id_factory()
        self._measurements[measurement_id] = InFlightMeasurement(
            tag=tag,
            parameters=normalize_parameters(parameters),
            start_ms=self._clock(),
        )
        return measurement_id

    def end(self, measurement_id: str) -> Optional[Tuple[InFlightMeasurement, int]]:
        """Remove the measurement and return it with its elapsed milliseconds.

        Unknown, stopped and cancelled ids return None.
        """
        measurement = self._measurements.pop(measurement_id, None)
        if measurement is None:
            return None
        return measurement, self._clock() - measurement.start_ms

    def cancel(self, measurement_id: str) -> None:
        self._measurements.pop(measurement_id, None)

    def __contains__(self, measurement_id: str) -> bool:
        return measurement_id in self._measurements

    def __len__(self) -> int:
        return len(self._measurements)
