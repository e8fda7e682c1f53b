from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

# Read by the JSON log formatter so every line of one API call shares an id.
_request_id_var: ContextVar[str] = ContextVar("smsgate_request_id", default="")


def get_request_id() -> str:
    return _request_id_var.get() or ""


@contextmanager
def request_id_scope(rid: str) -> Iterator[str]:
    token = _request_id_var.set(rid or "")
    try:
        yield rid
    finally:
        _request_id_var.reset(token)
