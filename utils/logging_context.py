"""Contextual logging for CNIS parsing runs.

Every record carries the document being parsed, the parser stage and the bond
sequence under analysis, so heuristic fallbacks can be traced back to the
block that triggered them.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator

_DEFAULT_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [document=%(document)s stage=%(stage)s "
    "bond=%(bond)s] %(name)s: %(message)s"
)

_CONTEXT_VARS: dict[str, contextvars.ContextVar[str]] = {
    name: contextvars.ContextVar(name, default="-") for name in ("document", "stage", "bond")
}
_DEFAULT_RECORD_FACTORY = logging.getLogRecordFactory()
_RECORD_FACTORY_INSTALLED = False


def _apply_context(record: logging.LogRecord) -> None:
    for name, var in _CONTEXT_VARS.items():
        setattr(record, name, var.get("-"))


class _ContextFilter(logging.Filter):
    """Copy the bound document, stage and bond onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _apply_context(record)
        return True


def _coerce(value: object | None) -> str:
    if value is None:
        return "-"
    stripped = str(value).strip()
    return stripped or "-"


def configure_logging(*, level: int | str = logging.INFO) -> None:
    """Install the contextual format on the root logger.

    Safe to call repeatedly; when handlers already exist only the level is
    updated and the context filter is attached once.
    """

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_LOG_FORMAT)
    else:
        root.setLevel(level)
    for handler in root.handlers:
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(_DEFAULT_LOG_FORMAT))
    if not any(isinstance(flt, _ContextFilter) for flt in root.filters):
        root.addFilter(_ContextFilter())

    global _RECORD_FACTORY_INSTALLED
    if _RECORD_FACTORY_INSTALLED:
        return

    def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
        record = _DEFAULT_RECORD_FACTORY(*args, **kwargs)
        _apply_context(record)
        return record

    logging.setLogRecordFactory(_record_factory)
    _RECORD_FACTORY_INSTALLED = True


def set_document(document: str | None) -> None:
    """Bind a document name for subsequent log records."""

    configure_logging()
    _CONTEXT_VARS["document"].set(_coerce(document))


def set_stage(stage: str | None) -> None:
    """Bind the current parser stage to the logging context."""

    _CONTEXT_VARS["stage"].set(_coerce(stage))


@contextmanager
def log_context(
    *,
    document: str | None = None,
    stage: str | None = None,
    bond: int | str | None = None,
) -> Iterator[None]:
    """Temporarily override logging context variables.

    Arguments left as ``None`` keep the value bound by an enclosing context.
    """

    values = {"document": document, "stage": stage, "bond": bond}
    tokens = [
        (_CONTEXT_VARS[name], _CONTEXT_VARS[name].set(_coerce(value)))
        for name, value in values.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = ["configure_logging", "log_context", "set_document", "set_stage"]
