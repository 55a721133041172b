from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Dict, Iterator, Optional, TextIO

# session_id: one per Streamlit session; run_id: one per CLI invocation
_CONTEXT: Dict[str, ContextVar[str]] = {
    "session_id": ContextVar("session_id", default="-"),
    "run_id": ContextVar("run_id", default="-"),
}


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for name, var in _CONTEXT.items():
            setattr(record, name, var.get())
        return True


class KeyValueFormatter(logging.Formatter):
    """`<ts> level=.. logger=.. session_id=.. run_id=.. msg=..`, traceback on following lines."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        ctx = " ".join(f"{name}={getattr(record, name, '-')}" for name in _CONTEXT)
        line = f"{ts} level={record.levelname} logger={record.name} {ctx} msg={record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Streamlit reruns the script on every interaction
    root.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(KeyValueFormatter())
    root.addHandler(handler)


def set_log_context(*, session_id: Optional[str] = None, run_id: Optional[str] = None) -> None:
    if session_id is not None:
        _CONTEXT["session_id"].set(session_id)
    if run_id is not None:
        _CONTEXT["run_id"].set(run_id)


@contextmanager
def log_context(**values: str) -> Iterator[None]:
    """Scoped context fields, restored on exit."""
    tokens = [(_CONTEXT[name], _CONTEXT[name].set(value)) for name, value in values.items()]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"fire_planner.{name}")
