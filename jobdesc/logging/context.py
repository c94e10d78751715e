"""Context propagation for structured logging.

Fields pushed here (run_id, document_id, operation) are added to every log
record emitted inside the scope. Context lives in a ContextVar, so worker
threads only see it when the submitting code runs them inside a copied
context (see ``run_in_context``).
"""

from contextvars import ContextVar, Token, copy_context
from typing import Any, Callable, Dict, Optional, TypeVar

T = TypeVar("T")

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the current context fields."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Returns:
        Token for ``pop_log_context`` to restore the previous state

    Example:
        >>> token = push_log_context(run_id="abc123", operation="format")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context saved by ``push_log_context``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop all context fields. Mostly useful in tests."""
    LogContextVar.set({})


def run_in_context(func: Callable[..., T], *args, **kwargs) -> Callable[[], T]:
    """Bind ``func`` to a snapshot of the current context.

    The returned callable can be handed to a thread pool; log records
    emitted while it runs carry the submitting thread's context fields.

    Example:
        >>> with log_context(run_id="abc123"):
        ...     future = executor.submit(run_in_context(process, document))
    """
    context = copy_context()
    return lambda: context.run(func, *args, **kwargs)


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(run_id="abc123", document_id="job-42"):
        ...     logger.info("Formatting document")  # includes run_id and document_id
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
