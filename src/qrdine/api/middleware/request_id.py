from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator
from uuid import uuid4

request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return request_id_context.get()


@contextmanager
def request_scope(request_id: str | None = None) -> Iterator[str]:
    """Bind a request id for the duration of one facade call.

    Nested scopes keep the outer id so multi-step calls log under one id.
    """
    current = request_id_context.get()
    if current is not None and request_id is None:
        yield current
        return

    value = request_id or str(uuid4())
    token = request_id_context.set(value)
    try:
        yield value
    finally:
        request_id_context.reset(token)
