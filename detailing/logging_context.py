"""Detailer-scoped logging context.

Every store and lookup that works on behalf of one detailer runs inside
``detailer_context``, so records logged anywhere below it (the stores, the
availability engine) carry that detailer's id, and the id is dropped again
when the operation returns.

Usage:
    from detailing.logging_context import detailer_context, get_detailer_logger

    logger = get_detailer_logger(__name__)
    with detailer_context("det-42"):
        logger.info("Booking accepted")  # record.detailer_id == "det-42"
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator

NO_DETAILER = "NO_DETAILER"

_detailer_id: ContextVar[str] = ContextVar("detailer_id", default=NO_DETAILER)


def get_detailer_id() -> str:
    """Detailer currently being scheduled, or ``NO_DETAILER`` outside any operation."""
    return _detailer_id.get()


@contextmanager
def detailer_context(detailer_id: str) -> Iterator[str]:
    """Scope log records to ``detailer_id`` and restore the previous id on exit."""
    token: Token[str] = _detailer_id.set(detailer_id)
    try:
        yield detailer_id
    finally:
        _detailer_id.reset(token)


class DetailerIdFilter(logging.Filter):
    """Stamps ``detailer_id`` onto each record passing through the logger."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.detailer_id = _detailer_id.get()  # type: ignore[attr-defined]
        return True


def get_detailer_logger(name: str) -> logging.Logger:
    """Module logger whose records expose ``%(detailer_id)s`` to formatters."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, DetailerIdFilter) for f in logger.filters):
        logger.addFilter(DetailerIdFilter())
    return logger
