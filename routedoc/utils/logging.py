"""Logging helpers for document assembly and serving."""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import monotonic
from typing import Dict, Iterator, Mapping, Optional

import contextvars

from .config import LOG_LEVEL


_REQUEST_CONTEXT: contextvars.ContextVar["RequestContext | None"] = contextvars.ContextVar(
    "routedoc_request_context", default=None
)


def configure_root(level: int = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


@contextmanager
def scoped_timer(
    logger: logging.Logger, message: str, *, extra: Optional[Dict[str, object]] = None
) -> Iterator[None]:
    start = monotonic()
    try:
        yield
    finally:
        elapsed = monotonic() - start
        logger.debug("%s", message, extra={"duration_s": elapsed, **(extra or {})})


@dataclass(slots=True)
class RequestContext:
    """Structured per-request logging context."""

    name: str
    request_id: str
    logger: logging.Logger
    metadata: Dict[str, object] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=dict)
    start_time: float = field(default_factory=monotonic)

    def extra(self, **values: object) -> Dict[str, object]:
        payload = {"request_id": self.request_id, "request": self.name, **self.metadata}
        payload.update(values)
        return payload

    def log(
        self, level: int, message: str, *, extra: Optional[Mapping[str, object]] = None
    ) -> None:
        payload = self.extra(**(dict(extra) if extra else {}))
        self.logger.log(level, message, extra=payload)

    def increment(self, counter: str, amount: int = 1) -> int:
        value = self.counters.get(counter, 0) + amount
        self.counters[counter] = value
        return value


@contextmanager
def request_scope(
    name: str,
    *,
    logger: Optional[logging.Logger] = None,
    extra: Optional[Mapping[str, object]] = None,
) -> Iterator[RequestContext]:
    """Create a structured logging scope for a single request."""

    logger = logger or logging.getLogger("routedoc.request")
    context = RequestContext(
        name=name,
        request_id=str(uuid.uuid4()),
        logger=logger,
        metadata=dict(extra or {}),
    )
    token = _REQUEST_CONTEXT.set(context)
    context.log(logging.INFO, "request.start")
    try:
        with scoped_timer(logger, f"{name}.duration", extra=context.extra(event="timer")):
            yield context
    except Exception:
        logger.exception("request.error", extra=context.extra())
        raise
    finally:
        duration = monotonic() - context.start_time
        context.log(
            logging.INFO,
            "request.finish",
            extra={"duration_s": duration, "counters": dict(context.counters)},
        )
        _REQUEST_CONTEXT.reset(token)


def current_request() -> Optional[RequestContext]:
    """Return the active request context if one is present."""

    return _REQUEST_CONTEXT.get(None)


def increment_counter(name: str, amount: int = 1) -> None:
    """Increment a named counter on the current request."""

    context = current_request()
    if context is not None:
        context.increment(name, amount)


__all__ = [
    "RequestContext",
    "configure_root",
    "current_request",
    "increment_counter",
    "request_scope",
    "scoped_timer",
]
