"""
Per-component disposal registry.

A component owns exactly one DisposalRegistry. While the component is
alive it registers resources and callbacks; at the end of its life it
calls ``teardown()`` once, which releases every entry in reverse
registration order and then rejects further registrations.
"""
from __future__ import annotations

import time
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from core.logging.logger import get_logger
from core.logging.tags import TAG_DISPOSE, TAG_PERF
from .diagnostics import DisposeDiagnostics, get_diagnostics
from .entry import DisposeEntry
from .resolver import resolve_disposable
from .types import ResourceKind, type_name

T = TypeVar('T')

_logger = get_logger("core.disposal.registry")


class RegistryState(Enum):
    """Lifecycle state of a DisposalRegistry."""
    ACTIVE = "active"
    TORN_DOWN = "torn_down"


class RegistrationAfterTeardownError(RuntimeError):
    """Raised when a torn-down registry receives a registration."""


class DisposalRegistry:
    """
    Ordered collection of DisposeEntry objects for one component.

    Not thread-safe: registration and teardown happen on the owning
    component's (UI) thread.
    """

    def __init__(
        self,
        owner_name: str = "",
        diagnostics: Optional[DisposeDiagnostics] = None,
    ):
        """
        Args:
            owner_name: Label for log lines, usually the component class name.
            diagnostics: Config to read at teardown. Defaults to the shared
                process-wide config, looked up each time it is needed.
        """
        self.owner_name = owner_name or "component"
        self._diagnostics = diagnostics
        self._entries: List[DisposeEntry] = []
        self._unresolved: List[Any] = []
        self._failures: List[Tuple[DisposeEntry, BaseException]] = []
        self._state = RegistryState.ACTIVE

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def diagnostics(self) -> DisposeDiagnostics:
        return self._diagnostics if self._diagnostics is not None else get_diagnostics()

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is RegistryState.ACTIVE

    @property
    def entries(self) -> List[DisposeEntry]:
        """Pending entries in registration order (copy)."""
        return list(self._entries)

    @property
    def unresolved(self) -> List[Any]:
        """Objects registered but not classified as disposable (copy)."""
        return list(self._unresolved)

    @property
    def failures(self) -> List[Tuple[DisposeEntry, BaseException]]:
        """Cleanup actions that raised during the last teardown (copy)."""
        return list(self._failures)

    def __len__(self) -> int:
        return len(self._entries)

    def _ensure_active(self, operation: str) -> None:
        if self._state is not RegistryState.ACTIVE:
            raise RegistrationAfterTeardownError(
                f"{operation}() called after teardown of {self.owner_name}"
            )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_resource(self, resource: T) -> T:
        """
        Register a resource for release at teardown.

        Args:
            resource: Any object. Objects the resolver cannot classify are
                recorded as unresolved (and warned about when reporting is
                enabled) instead of raising.

        Returns:
            The same object, so registration can wrap construction inline.

        Raises:
            RegistrationAfterTeardownError: If teardown already ran.
        """
        self._ensure_active("register_resource")

        entry = resolve_disposable(resource)
        if entry is not None:
            self._entries.append(entry)
        else:
            self._unresolved.append(resource)
            if self.diagnostics.report_enabled:
                _logger.warning(
                    "%s %s is not disposable (owner=%s)",
                    TAG_DISPOSE, type_name(resource), self.owner_name,
                )
        return resource

    def register_callback(self, callback: Callable[[], Any]) -> None:
        """
        Register a zero-argument cleanup callable.

        Raises:
            ValueError: If callback is not callable.
            RegistrationAfterTeardownError: If teardown already ran.
        """
        if not callable(callback):
            raise ValueError("Dispose callback must be callable")
        self._ensure_active("register_callback")
        self._entries.append(DisposeEntry(callback, callback, ResourceKind.CALLBACK))

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """
        Release all registered entries, last registered first.

        A failing cleanup action does not stop the remaining ones; the
        failure is logged (when reporting is enabled) and kept in
        ``failures``. Subsequent calls release nothing.
        """
        self._state = RegistryState.TORN_DOWN

        diagnostics = self.diagnostics
        track = diagnostics.track_performance
        report = diagnostics.report_enabled

        total_start = time.perf_counter() if track else None
        disposed = 0
        self._failures = []

        for entry in reversed(self._entries):
            if entry.is_disposed:
                # Already executed elsewhere; nothing ran here.
                continue
            try:
                entry.execute(track_performance=track)
                disposed += 1
            except Exception as e:
                self._failures.append((entry, e))
                if report:
                    _logger.error(
                        "%s Failed to dispose %s (owner=%s): %s",
                        TAG_DISPOSE, type_name(entry.target), self.owner_name, e,
                        exc_info=True,
                    )
                continue
            if report:
                tag = f"{TAG_DISPOSE} {TAG_PERF}" if entry.duration is not None else TAG_DISPOSE
                _logger.info("%s %s", tag, entry.describe())

        total_ms = (time.perf_counter() - total_start) * 1000.0 if total_start is not None else None

        if report:
            self._log_summary(disposed, total_ms)

        self._entries.clear()
        self._unresolved.clear()

    def _log_summary(self, disposed: int, total_ms: Optional[float]) -> None:
        total_text = f"{total_ms:.3f}ms" if total_ms is not None else "-"
        _logger.info(
            "%s Dispose summary for %s: disposed=%d, failed=%d, not_disposable=%d, total=%s",
            TAG_DISPOSE, self.owner_name, disposed, len(self._failures),
            len(self._unresolved), total_text,
        )
        for obj in self._unresolved:
            _logger.info("%s Not disposable: %s", TAG_DISPOSE, type_name(obj))
