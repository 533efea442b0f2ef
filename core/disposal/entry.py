"""
Single disposal unit: one resource plus the action that releases it.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Optional

from .types import ResourceKind, type_name


class DisposeEntry:
    """
    Pairs a registered target with its resolved cleanup action.

    The action runs at most once. ``target`` is kept for diagnostics only;
    the owning registry drops the entry after teardown.
    """

    __slots__ = ("target", "action", "kind", "duration", "_disposed")

    def __init__(
        self,
        target: Any,
        action: Callable[[], Any],
        kind: ResourceKind = ResourceKind.CALLBACK,
    ):
        self.target = target
        self.action = action
        self.kind = kind
        self.duration: Optional[float] = None  # seconds, set when timed
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def execute(self, track_performance: bool = False) -> None:
        """
        Run the cleanup action unless it already ran.

        The entry is marked disposed even when the action raises; the
        exception is re-raised for the caller to handle.

        Args:
            track_performance: Measure the action with ``perf_counter`` and
                store the elapsed seconds in ``duration``.
        """
        if self._disposed:
            return

        if track_performance:
            start = time.perf_counter()
            try:
                self.action()
            finally:
                self.duration = time.perf_counter() - start
                self._disposed = True
        else:
            try:
                self.action()
            finally:
                self._disposed = True

    def describe(self) -> str:
        """Diagnostic line naming the target type and, if measured, duration."""
        text = f"Disposed {type_name(self.target)} [{self.kind.name}]"
        if self.duration is not None:
            text += f" in {self.duration * 1000.0:.3f}ms"
        return text

    def __repr__(self) -> str:
        return (
            f"DisposeEntry(target={type_name(self.target)}, kind={self.kind.name}, "
            f"disposed={self._disposed})"
        )
