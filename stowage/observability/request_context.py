"""Request id shared between the HTTP middleware and log records."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

_current_request_id: ContextVar[str | None] = ContextVar("stowage_request_id", default=None)


def current_request_id() -> str | None:
    return _current_request_id.get()


@contextmanager
def request_scope(header_value: str | None = None) -> Iterator[str]:
    """Bind the client's ``X-Request-ID`` (or a fresh id) until the request ends."""
    request_id = header_value or uuid4().hex
    token = _current_request_id.set(request_id)
    try:
        yield request_id
    finally:
        _current_request_id.reset(token)
