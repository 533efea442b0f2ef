"""Lifecycle protocol for widgets and managers.

Hosts end a component's life by calling ``cleanup()``.
``AutoDisposeMixin`` satisfies ``Cleanable``; non-Qt managers that
implement it can be registered as resources through the resolver's
structural fallback. Type-checking only, no runtime inheritance
required (structural subtyping via Protocol).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Cleanable(Protocol):
    """Protocol for objects that only need cleanup (no start/stop)."""

    def cleanup(self) -> None: ...
