# colr/logging_context.py
"""
Per-picking-session log fields.

Every `activate()` gets a fresh `corr_id`, so all lines of one picking session
(capture, ticks that failed, pick, exit) can be grepped together; `action`
names the transition that is running. Both default to "-".
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Dict, Iterator, List, Optional, Tuple
from uuid import uuid4

corr_id_var: ContextVar[str] = ContextVar("corr_id", default="-")
action_var: ContextVar[str] = ContextVar("action", default="-")

# record attribute name -> context var (ContextFilter copies these onto records)
LOG_FIELDS: Dict[str, ContextVar[str]] = {
    "corr_id": corr_id_var,
    "action": action_var,
}


def new_corr_id() -> str:
    return uuid4().hex[:12]


def current_fields() -> Dict[str, str]:
    return {name: var.get() for name, var in LOG_FIELDS.items()}


@contextmanager
def log_context(*, corr_id: Optional[str] = None, action: Optional[str] = None) -> Iterator[None]:
    """Set the given fields for the duration of the block; None leaves a field as is."""
    requested = (("corr_id", corr_id), ("action", action))
    tokens: List[Tuple[ContextVar[str], Token[str]]] = [
        (LOG_FIELDS[name], LOG_FIELDS[name].set(value)) for name, value in requested if value is not None
    ]
    try:
        yield
    finally:
        for var, tok in reversed(tokens):
            var.reset(tok)
