"""Context managers that time a block as a start/stop measurement.

Usage example:
```python
with timed("db-query", {"table": "users"}):
    rows = fetch_users()

async with async_timed("http-call"):
    await client.get(url)
```
"""

from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator, Mapping, Optional

from metric_logger.core.logging_config import get_logger

from .collector import IMetricLogger
from .instance import get_metric_logger

logger = get_logger(__name__)


@contextmanager
def timed(
    tag: str,
    parameters: Optional[Mapping[str, Any]] = None,
    metric_logger: Optional[IMetricLogger] = None,
) -> Generator[str, None, None]:
    """Measure the duration of the enclosed block.

    Args:
        tag: Metric name the elapsed milliseconds are recorded under
        parameters: Extra dimensions for the measurement
        metric_logger: Target instance, defaults to the module-level one

    Yields:
        The measurement id
    """
    target = metric_logger or get_metric_logger()
    measurement_id = target.start(tag, parameters)
    try:
        yield measurement_id
    finally:
        target.stop(measurement_id)
        logger.debug(f"Timed block '{tag}' finished")


@asynccontextmanager
async def async_timed(
    tag: str,
    parameters: Optional[Mapping[str, Any]] = None,
    metric_logger: Optional[IMetricLogger] = None,
) -> AsyncGenerator[str, None]:
    """Async variant of timed() for awaited work."""
    target = metric_logger or get_metric_logger()
    measurement_id = target.start(tag, parameters)
    try:
        yield measurement_id
    finally:
        target.stop(measurement_id)
