"""Automatic resource disposal for Qt widgets.

Mix ``AutoDisposeMixin`` into a QWidget (or any QObject) subclass, ahead
of the Qt base class, and register resources as they are created::

    class ClockPanel(AutoDisposeMixin, QWidget):
        def __init__(self, parent=None):
            super().__init__(parent)
            self._tick = self.register_for_dispose(QTimer(self))
            self.register_dispose_callback(self._flush_state)

Everything registered is released, last registered first, when the host
calls ``cleanup()`` (or on close for ``WA_DeleteOnClose`` widgets).
"""
from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from PySide6.QtCore import Qt

from core.disposal import DisposalRegistry, DisposeDiagnostics
from core.logging.logger import get_logger
from core.logging.tags import TAG_LIFECYCLE

logger = get_logger(__name__)

T = TypeVar('T')


class AutoDisposeMixin:
    """Gives a component its own DisposalRegistry and a cleanup() end point."""

    # Optional per-class override of the shared diagnostics config.
    dispose_diagnostics: Optional[DisposeDiagnostics] = None

    def _dispose_registry(self) -> DisposalRegistry:
        registry = getattr(self, "_auto_dispose_registry", None)
        if registry is None:
            registry = DisposalRegistry(
                owner_name=type(self).__name__,
                diagnostics=self.dispose_diagnostics,
            )
            self._auto_dispose_registry = registry
        return registry

    @property
    def is_mounted(self) -> bool:
        """True until cleanup() has torn the registry down."""
        return self._dispose_registry().is_active

    def register_for_dispose(self, resource: T) -> T:
        """Register ``resource`` for release at cleanup; returns it unchanged."""
        return self._dispose_registry().register_resource(resource)

    def register_dispose_callback(self, callback: Callable[[], Any]) -> None:
        """Register a manual cleanup callable (sockets, files, ad-hoc state)."""
        self._dispose_registry().register_callback(callback)

    def cleanup(self) -> None:
        """Release registered resources, then chain to any base cleanup()."""
        registry = self._dispose_registry()
        if not registry.is_active:
            return
        logger.debug("%s Tearing down %s (%d entries)",
                     TAG_LIFECYCLE, registry.owner_name, len(registry))
        registry.teardown()

        base_cleanup = getattr(super(), "cleanup", None)
        if callable(base_cleanup):
            base_cleanup()

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        try:
            delete_on_close = self.testAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        except AttributeError:
            delete_on_close = False
        if delete_on_close:
            self.cleanup()
        base_close = getattr(super(), "closeEvent", None)
        if callable(base_close):
            base_close(event)
