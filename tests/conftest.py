import pytest

from metric_logger.services.metrics import MetricLogger

# Second 0 of a wall-clock minute, in epoch milliseconds
START_MS = 28_333_333 * 60_000


class FakeTimer:
    def __init__(self, clock, interval, function):
        self.clock = clock
        self.deadline_ms = clock.now_ms + round(interval * 1000)
        self.function = function
        self.cancelled = False

    def start(self):
        self.clock.pending.append(self)

    def cancel(self):
        self.cancelled = True
        if self in self.clock.pending:
            self.clock.pending.remove(self)


class FakeClock:
    """Millisecond wall clock whose timers fire only when tick() passes them."""

    def __init__(self, now_ms=START_MS):
        self.now_ms = now_ms
        self.pending = []

    def now(self):
        return self.now_ms

    def timer(self, interval, function):
        return FakeTimer(self, interval, function)

    def tick(self, ms):
        target = self.now_ms + ms
        while True:
            due = [t for t in self.pending if t.deadline_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.deadline_ms)
            self.pending.remove(timer)
            self.now_ms = timer.deadline_ms
            timer.function()
        self.now_ms = target


class RecordingLogger:
    """Structured logger double capturing every (severity, tag, fields) call."""

    def __init__(self):
        self.calls = []

    def log(self, severity, tag, fields):
        self.calls.append((severity, tag, dict(fields)))

    def fields_for(self, tag):
        return [fields for _, t, fields in self.calls if t == tag]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def metric_log():
    return RecordingLogger()


@pytest.fixture
def metric_logger(clock, metric_log):
    logger = MetricLogger(
        structured_logger=metric_log,
        clock=clock.now,
        timer_factory=clock.timer,
    )
    yield logger
    logger.scheduler.cancel()
