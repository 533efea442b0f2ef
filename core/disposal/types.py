"""
Resource kind definitions for component disposal.
"""
from __future__ import annotations

from enum import Enum, auto


class ResourceKind(Enum):
    """Kinds of resources the resolver knows how to release."""
    ANIMATION = auto()
    TICKER = auto()
    TIMER = auto()
    SUBSCRIPTION = auto()
    FOCUS_NODE = auto()
    NOTIFIER = auto()
    DISPOSABLE = auto()
    DUCK_TYPED = auto()
    CALLBACK = auto()


def type_name(obj: object) -> str:
    """Runtime type name used in diagnostics."""
    return type(obj).__name__
