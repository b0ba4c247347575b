"""Scoped fields that are merged into every log record.

A feature call (one chat turn, one resume analysis, one job search) pushes
``feature`` and ``request_id`` here so that the adapter and persistence logs
it triggers can be correlated without threading those values through every
function signature. Backed by ``contextvars`` so concurrent requests in
different threads or tasks do not see each other's fields.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional
from uuid import uuid4

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**fields: Any) -> Token:
    """Merge ``fields`` into the active context.

    Returns:
        Token to hand back to pop_log_context()
    """
    return LogContextVar.set({**LogContextVar.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before the matching push."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field. Mostly for tests."""
    LogContextVar.set({})


def new_request_id() -> str:
    """Short random identifier used to tie the logs of one request together."""
    return uuid4().hex[:12]


class log_context:
    """Context manager form of push/pop.

    Example:
        >>> with log_context(feature="coach", request_id=new_request_id()):
        ...     logger.info("Sending message")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
