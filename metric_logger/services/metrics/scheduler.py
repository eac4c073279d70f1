"""FlushScheduler - wall-clock aligned, self re-arming flush timer.

Deadlines are pinned to second 30 of a wall-clock minute: the current minute's
:30 when it is still ahead, otherwise the next minute's. Each firing recomputes
the next deadline from the live clock and arms a fresh one-shot timer, so slow
flush work never accumulates drift across windows.
"""

import threading
from typing import Callable, Optional, Protocol

from metric_logger.core.logging_config import get_logger

logger = get_logger(__name__)

MINUTE_MS = 60 * 1000


class TimerHandle(Protocol):
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def default_timer_factory(interval: float, function: Callable[[], None]) -> TimerHandle:
    """One-shot daemon thread timer so a pending flush never blocks exit."""
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


def next_flush_at(now_ms: int) -> int:
    """Epoch milliseconds of the flush following ``now_ms``.

    Before second 30 of the current minute the deadline is minute start + 30s,
    otherwise minute start + 90s.
    """
    start_of_minute = now_ms - now_ms % MINUTE_MS
    seconds_in_minute = (now_ms % MINUTE_MS) // 1000
    offset_ms = 90 * 1000 if seconds_in_minute >= 30 else 30 * 1000
    return start_of_minute + offset_ms


class FlushScheduler:
    """Two-state timer: idle until the first ``ensure_armed``, then armed for good.

    ``cancel`` is the only way back to idle and exists for shutdown.
    """

    def __init__(
        self,
        on_flush: Callable[[], None],
        clock: Callable[[], int],
        timer_factory: TimerFactory = default_timer_factory,
    ):
        self._on_flush = on_flush
        self._clock = clock
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[TimerHandle] = None
        self._deadline_ms: Optional[int] = None

    @property
    def is_armed(self) -> bool:
        return self._timer is not None

    @property
    def next_flush_ms(self) -> Optional[int]:
        return self._deadline_ms

    def ensure_armed(self) -> None:
        """Arm the first timer; no-op when already armed."""
        with self._lock:
            if self._timer is None:
                self._arm()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._deadline_ms = None

    def _arm(self, not_before_ms: Optional[int] = None) -> None:
        now_ms = self._clock()
        # The timer waits on the monotonic clock; never re-target a deadline that just fired
        base_ms = now_ms if not_before_ms is None else max(now_ms, not_before_ms)
        self._deadline_ms = next_flush_at(base_ms)
        delay = max(self._deadline_ms - now_ms, 0) / 1000.0

        timer_ref: list = []

        def fire() -> None:
            self._fire(timer_ref[0])

        timer = self._timer_factory(delay, fire)
        timer_ref.append(timer)
        self._timer = timer
        timer.start()
        logger.debug(f"Next metric flush in {delay:.3f}s")

    def _fire(self, timer: TimerHandle) -> None:
        fired_deadline_ms = self._deadline_ms
        try:
            self._on_flush()
        except Exception as e:
            logger.error(f"Error flushing metrics: {e}")
        finally:
            with self._lock:
                # A cancel() during the flush wins; stay idle
                if self._timer is timer:
                    self._arm(not_before_ms=fired_deadline_ms)
