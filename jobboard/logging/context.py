"""Context propagation for structured logging.

Fields pushed here are added to every log record emitted inside the scope by
ContextualFilter. Context lives in a contextvars.ContextVar, so it is isolated
per thread and per asyncio task.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return dict(_log_context.get())


def push_log_context(**fields: Any) -> Token:
    """Merge fields into the active context.

    Returns:
        Token for pop_log_context() to restore the previous context

    Example:
        >>> token = push_log_context(operation="list_active_jobs")
        >>> # ... every log line now carries operation=list_active_jobs ...
        >>> pop_log_context(token)
    """
    return _log_context.set({**_log_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before push_log_context()."""
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop all context fields (used by tests)."""
    _log_context.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(operation="get_job", record_id="recA1b2C3"):
        ...     logger.info("Fetching job")  # includes operation and record_id
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self) -> "log_context":
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
