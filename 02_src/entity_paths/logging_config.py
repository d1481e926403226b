"""Console logging tagged with the pipeline phase that emitted each record."""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from pythonjsonlogger.json import JsonFormatter

NO_PHASE = "-"

current_phase: ContextVar[str] = ContextVar("current_phase", default=NO_PHASE)


@contextmanager
def phase_scope(phase_name: str) -> Iterator[None]:
    token = current_phase.set(phase_name)
    try:
        yield
    finally:
        current_phase.reset(token)


class PhaseFilter(logging.Filter):
    """Stamps ``record.phase`` so both formats can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "phase"):
            record.phase = current_phase.get()
        return True


class JSONFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["phase"] = getattr(record, "phase", None) or current_phase.get()
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    module_levels: Optional[dict[str, str]] = None,
) -> None:
    """
    Route all records to stderr, tagged with the running pipeline phase.

    Args:
        log_level: root level name, e.g. INFO
        log_format: "json" or "text"
        module_levels: per-logger overrides such as {"entity_paths.search": "DEBUG"}
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    handler = logging.StreamHandler(sys.stderr)
    handler.addFilter(PhaseFilter())
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter(fmt="%(timestamp)s %(level)s %(phase)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(phase)-9s %(levelname)-7s %(message)s", datefmt="%H:%M:%S"))
    root_logger.addHandler(handler)

    for module_name, level in (module_levels or {}).items():
        logging.getLogger(module_name).setLevel(getattr(logging, level.upper()))
