import logging
from typing import Any, Dict, Mapping, MutableMapping, Optional

import structlog

from metric_logger.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

SEVERITY_LEVELS: Dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

# Keys the JSON renderer owns; metric fields never overwrite them
ENVELOPE_KEYS = ("tag", "level", "logger", "timestamp")


def merge_metric_fields(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Lift the flat field mapping of a metric record into the event dict.

    Fields whose name clashes with an envelope key are kept under
    ``field_<name>``.
    """
    record = event_dict.get("_record")
    fields = getattr(record, "metric_fields", None)
    if fields is None:
        return event_dict

    event_dict["tag"] = event_dict.pop("event", getattr(record, "tag", None))
    for name, value in fields.items():
        if name in ENVELOPE_KEYS:
            name = f"field_{name}"
        event_dict[name] = value
    return event_dict


def build_json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """structlog formatter rendering stdlib records as one JSON object per line."""
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(default=str),
        ],
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            merge_metric_fields,
        ],
    )


class StructuredLogger:
    """Metric channel: ``log(severity, tag, fields)`` on top of stdlib logging.

    The namespace becomes the logger name, so applications route metric lines
    with ordinary logging configuration; build_json_formatter() renders them.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace
        self._logger = logging.getLogger(namespace)

    def log(self, severity: str, tag: str, fields: Mapping[str, Any]) -> None:
        level = SEVERITY_LEVELS.get(severity, logging.INFO)
        self._logger.log(level, tag, extra={"tag": tag, "metric_fields": dict(fields)})


def configure_logging(level: Optional[str] = None, namespace: Optional[str] = None) -> None:
    """Install stream handlers for the diagnostic and metric channels.

    The library never configures logging on import; applications call this
    once at startup if they have no logging setup of their own.
    """
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    metric_logger = logging.getLogger(namespace or settings.METRIC_LOGGER_NAMESPACE)
    if not any(isinstance(h.formatter, structlog.stdlib.ProcessorFormatter) for h in metric_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(build_json_formatter())
        metric_logger.addHandler(handler)
    metric_logger.setLevel(TRACE)
    metric_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger with the given module name."""
    return logging.getLogger(name)
