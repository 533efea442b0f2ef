"""
Maps arbitrary objects onto a DisposeEntry with the right cleanup policy.

Resolution is ordered and the first match wins. Several Qt kinds are
also QObjects, so the specific kinds must be checked before the broad
QObject family:

1. QAbstractAnimation  - stop (no ``finished`` emitted), then deleteLater
2. QTimeLine           - stop if running, then deleteLater
3. QTimer              - stop if active
   threading.Timer     - cancel if alive
4. asyncio / concurrent futures - cancel (never awaited)
   QMetaObject.Connection       - disconnect
5. QShortcut           - deleteLater
6. any other QObject   - cleanup() for host components, then deleteLater
7. Disposable          - guarded dispose()
8. objects exposing a callable ``dispose`` (or host-style ``cleanup``)

Classification never invokes cleanup and never raises.
"""
from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from typing import Any, Callable, Optional, Tuple

from PySide6.QtCore import QAbstractAnimation, QMetaObject, QObject, QTimeLine, QTimer
from PySide6.QtGui import QShortcut
from shiboken6 import Shiboken

from core.lifecycle import Cleanable
from core.logging.logger import get_logger, is_verbose_logging
from core.logging.tags import TAG_FALLBACK
from .disposable import Disposable
from .entry import DisposeEntry
from .types import ResourceKind, type_name

logger = get_logger(__name__)

# Member names probed by the structural fallback, in order.
DUCK_TYPED_MEMBERS: Tuple[str, ...] = ("dispose", "cleanup")


def _qt_alive(obj: QObject) -> bool:
    """False once the C++ side of a wrapper is gone (e.g. deleted with its parent)."""
    return Shiboken.isValid(obj)


def _animation_action(anim: QAbstractAnimation) -> Callable[[], None]:
    def _dispose() -> None:
        if not _qt_alive(anim):
            return
        # QAbstractAnimation.stop() does not emit finished(), so completion
        # handlers never fire mid-teardown.
        anim.stop()
        anim.deleteLater()
    return _dispose


def _ticker_action(timeline: QTimeLine) -> Callable[[], None]:
    def _dispose() -> None:
        if not _qt_alive(timeline):
            return
        if timeline.state() == QTimeLine.State.Running:
            timeline.stop()
        timeline.deleteLater()
    return _dispose


def _qtimer_action(timer: QTimer) -> Callable[[], None]:
    def _dispose() -> None:
        if _qt_alive(timer) and timer.isActive():
            timer.stop()
    return _dispose


def _thread_timer_action(timer: threading.Timer) -> Callable[[], None]:
    def _dispose() -> None:
        if timer.is_alive():
            timer.cancel()
    return _dispose


def _future_action(future: Any) -> Callable[[], None]:
    def _dispose() -> None:
        # Fire-and-forget: the cancellation outcome is never awaited.
        future.cancel()
    return _dispose


def _connection_action(connection: QMetaObject.Connection) -> Callable[[], None]:
    def _dispose() -> None:
        QObject.disconnect(connection)
    return _dispose


def _delete_later_action(obj: QObject) -> Callable[[], None]:
    def _dispose() -> None:
        if not _qt_alive(obj):
            return
        try:
            if isinstance(obj, Cleanable):
                # Nested components release their own registries first.
                obj.cleanup()
        finally:
            obj.deleteLater()
    return _dispose


def _disposable_action(obj: Disposable) -> Callable[[], None]:
    def _dispose() -> None:
        if obj.is_disposed:
            return
        obj.dispose()
        # Implementations are supposed to mark themselves; do it anyway.
        obj.mark_disposed()
    return _dispose


# Nominal kinds, checked in order before the Disposable and structural tiers.
_KIND_TABLE: Tuple[Tuple[ResourceKind, Tuple[type, ...], Callable[[Any], Callable[[], None]]], ...] = (
    (ResourceKind.ANIMATION, (QAbstractAnimation,), _animation_action),
    (ResourceKind.TICKER, (QTimeLine,), _ticker_action),
    (ResourceKind.TIMER, (QTimer,), _qtimer_action),
    (ResourceKind.TIMER, (threading.Timer,), _thread_timer_action),
    (ResourceKind.SUBSCRIPTION, (asyncio.Future, concurrent.futures.Future), _future_action),
    (ResourceKind.SUBSCRIPTION, (QMetaObject.Connection,), _connection_action),
    (ResourceKind.FOCUS_NODE, (QShortcut,), _delete_later_action),
    (ResourceKind.NOTIFIER, (QObject,), _delete_later_action),
)


def _probe_member(obj: Any) -> Optional[Callable[[], Any]]:
    """Find a callable cleanup member without calling it.

    Any error raised while looking the member up means "not disposable".
    """
    if isinstance(obj, type):
        # A class's dispose is an unbound function; calling it would fail.
        return None
    for name in DUCK_TYPED_MEMBERS:
        try:
            member = getattr(obj, name, None)
            if member is not None and callable(member):
                return member
        except Exception:
            return None
    return None


def resolve_disposable(obj: Any) -> Optional[DisposeEntry]:
    """
    Resolve ``obj`` into a DisposeEntry.

    Args:
        obj: Any object a component wants released at teardown.

    Returns:
        A DisposeEntry whose action applies the kind-specific policy, or
        None when the object is not disposable (a normal outcome).
    """
    if obj is None:
        return None

    for kind, types, factory in _KIND_TABLE:
        if isinstance(obj, types):
            return DisposeEntry(obj, factory(obj), kind)

    if isinstance(obj, Disposable):
        return DisposeEntry(obj, _disposable_action(obj), ResourceKind.DISPOSABLE)

    member = _probe_member(obj)
    if member is not None:
        if is_verbose_logging():
            logger.debug("%s Structural dispose for %s", TAG_FALLBACK, type_name(obj))
        return DisposeEntry(obj, member, ResourceKind.DUCK_TYPED)

    return None
