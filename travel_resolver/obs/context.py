"""Request-scoped identifiers carried through resolver calls."""

from contextvars import ContextVar
from typing import Optional


request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
tool_call_var: ContextVar[Optional[str]] = ContextVar("tool_call", default=None)


def clear_context() -> None:
    """Reset context variables to defaults."""
    request_id_var.set(None)
    tool_call_var.set(None)
