"""
Tests for resolve_disposable: kind classification and per-kind policy.
"""
import asyncio
import concurrent.futures
import threading
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QObject, QTimeLine, QTimer, QVariantAnimation
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QWidget

from core.disposal import Disposable, ResourceKind, resolve_disposable


# ---------------------------------------------------------------------------
# Spies
# ---------------------------------------------------------------------------

class _SpyAnimation(QVariantAnimation):
    def __init__(self, calls):
        super().__init__()
        self.calls = calls
        self.setStartValue(0.0)
        self.setEndValue(1.0)
        self.setDuration(10_000)

    def stop(self):
        self.calls.append("stop")
        super().stop()

    def deleteLater(self):
        self.calls.append("deleteLater")
        super().deleteLater()


class _SpyTimer(QTimer):
    def __init__(self):
        super().__init__()
        self.stop_calls = 0

    def stop(self):
        self.stop_calls += 1
        super().stop()


class _SpyTimeLine(QTimeLine):
    def __init__(self):
        super().__init__(10_000)
        self.calls = []

    def stop(self):
        self.calls.append("stop")
        super().stop()

    def deleteLater(self):
        self.calls.append("deleteLater")
        super().deleteLater()


class _SpyObject(QObject):
    def __init__(self):
        super().__init__()
        self.delete_calls = 0

    def deleteLater(self):
        self.delete_calls += 1
        super().deleteLater()


class _Client(Disposable):
    def __init__(self):
        self.close_calls = 0

    def dispose(self):
        self.close_calls += 1
        self.mark_disposed()


class _ForgetfulClient(Disposable):
    """Never calls mark_disposed() itself."""

    def __init__(self):
        self.close_calls = 0

    def dispose(self):
        self.close_calls += 1


class _Duck:
    def __init__(self):
        self.released = False

    def dispose(self):
        self.released = True


class _Cleanable:
    def __init__(self):
        self.cleaned = False

    def cleanup(self):
        self.cleaned = True


class _Exploding:
    @property
    def dispose(self):
        raise RuntimeError("probe failed")


class _NotCallable:
    dispose = "not a method"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

@pytest.mark.qt
class TestQtKinds:

    def test_animation_resolves_before_qobject(self, qt_app):
        entry = resolve_disposable(QVariantAnimation())
        assert entry.kind is ResourceKind.ANIMATION

    def test_timeline_resolves_as_ticker(self, qt_app):
        entry = resolve_disposable(QTimeLine(100))
        assert entry.kind is ResourceKind.TICKER

    def test_qtimer_resolves_as_timer(self, qt_app):
        entry = resolve_disposable(QTimer())
        assert entry.kind is ResourceKind.TIMER

    def test_shortcut_resolves_as_focus_node(self, qt_app):
        host = QWidget()
        entry = resolve_disposable(QShortcut(QKeySequence("Ctrl+K"), host))
        assert entry.kind is ResourceKind.FOCUS_NODE

    def test_plain_qobject_resolves_as_notifier(self, qt_app):
        entry = resolve_disposable(QObject())
        assert entry.kind is ResourceKind.NOTIFIER


class TestPythonKinds:

    def test_threading_timer_resolves_as_timer(self):
        entry = resolve_disposable(threading.Timer(60.0, lambda: None))
        assert entry.kind is ResourceKind.TIMER

    def test_concurrent_future_resolves_as_subscription(self):
        entry = resolve_disposable(concurrent.futures.Future())
        assert entry.kind is ResourceKind.SUBSCRIPTION

    def test_asyncio_future_resolves_as_subscription(self):
        loop = asyncio.new_event_loop()
        try:
            entry = resolve_disposable(loop.create_future())
            assert entry.kind is ResourceKind.SUBSCRIPTION
        finally:
            loop.close()

    def test_disposable_resolves_before_duck_typing(self):
        entry = resolve_disposable(_Client())
        assert entry.kind is ResourceKind.DISPOSABLE

    def test_duck_typed_dispose(self):
        entry = resolve_disposable(_Duck())
        assert entry.kind is ResourceKind.DUCK_TYPED

    def test_duck_typed_cleanup(self):
        entry = resolve_disposable(_Cleanable())
        assert entry.kind is ResourceKind.DUCK_TYPED

    def test_mock_with_dispose_is_duck_typed(self):
        entry = resolve_disposable(MagicMock())
        assert entry.kind is ResourceKind.DUCK_TYPED

    @pytest.mark.parametrize("obj", [object(), 42, "text", [1, 2], None, _NotCallable()])
    def test_unrecognised_objects_are_not_disposable(self, obj):
        assert resolve_disposable(obj) is None

    def test_probe_failure_is_not_disposable(self):
        assert resolve_disposable(_Exploding()) is None

    def test_classes_are_not_disposable(self):
        assert resolve_disposable(_Duck) is None

    def test_classification_has_no_side_effects(self):
        duck = _Duck()
        client = _Client()
        resolve_disposable(duck)
        resolve_disposable(client)
        assert duck.released is False
        assert client.close_calls == 0
        assert client.is_disposed is False


# ---------------------------------------------------------------------------
# Cleanup policies
# ---------------------------------------------------------------------------

@pytest.mark.qt
class TestQtPolicies:

    def test_running_animation_stopped_before_delete(self, qt_app):
        calls = []
        finished = []
        anim = _SpyAnimation(calls)
        anim.finished.connect(lambda: finished.append(True))
        anim.start()
        assert anim.state() == QVariantAnimation.State.Running

        resolve_disposable(anim).execute()

        assert calls == ["stop", "deleteLater"]
        assert anim.state() == QVariantAnimation.State.Stopped
        assert finished == []

    def test_active_qtimer_is_stopped(self, qt_app):
        timer = _SpyTimer()
        timer.start(10_000)
        assert timer.isActive()

        resolve_disposable(timer).execute()

        assert timer.isActive() is False
        assert timer.stop_calls == 1

    def test_inactive_qtimer_not_stopped_but_disposed(self, qt_app):
        timer = _SpyTimer()
        entry = resolve_disposable(timer)

        entry.execute()

        assert timer.stop_calls == 0
        assert entry.is_disposed is True

    def test_running_timeline_stopped_then_deleted(self, qt_app):
        timeline = _SpyTimeLine()
        timeline.start()
        assert timeline.state() == QTimeLine.State.Running

        resolve_disposable(timeline).execute()

        assert timeline.calls == ["stop", "deleteLater"]
        assert timeline.state() == QTimeLine.State.NotRunning

    def test_idle_timeline_only_deleted(self, qt_app):
        timeline = _SpyTimeLine()
        resolve_disposable(timeline).execute()
        assert timeline.calls == ["deleteLater"]

    def test_notifier_is_deleted_later(self, qt_app):
        obj = _SpyObject()
        resolve_disposable(obj).execute()
        assert obj.delete_calls == 1

    def test_cleanable_qobject_cleaned_up_then_deleted(self, qt_app):
        class _Component(_SpyObject):
            def __init__(self):
                super().__init__()
                self.order = []

            def cleanup(self):
                self.order.append(("cleanup", self.delete_calls))

        obj = _Component()
        entry = resolve_disposable(obj)
        assert entry.kind is ResourceKind.NOTIFIER

        entry.execute()

        assert obj.order == [("cleanup", 0)]
        assert obj.delete_calls == 1

    def test_signal_connection_is_disconnected(self, qt_app):
        source = QObject()
        received = []
        connection = source.objectNameChanged.connect(received.append)
        entry = resolve_disposable(connection)
        assert entry.kind is ResourceKind.SUBSCRIPTION

        source.setObjectName("first")
        entry.execute()
        source.setObjectName("second")

        assert received == ["first"]


class TestPythonPolicies:

    def test_alive_threading_timer_is_cancelled(self):
        fired = []
        timer = threading.Timer(60.0, lambda: fired.append(True))
        timer.daemon = True
        timer.start()

        resolve_disposable(timer).execute()
        timer.join(timeout=5.0)

        assert timer.is_alive() is False
        assert fired == []

    def test_idle_threading_timer_not_cancelled(self):
        timer = threading.Timer(60.0, lambda: None)
        entry = resolve_disposable(timer)

        entry.execute()

        assert timer.finished.is_set() is False
        assert entry.is_disposed is True

    def test_concurrent_future_is_cancelled(self):
        future = concurrent.futures.Future()
        resolve_disposable(future).execute()
        assert future.cancelled() is True

    def test_asyncio_task_cancel_is_not_awaited(self):
        loop = asyncio.new_event_loop()
        try:
            task = loop.create_task(asyncio.sleep(60))
            resolve_disposable(task).execute()
            # Cancellation is requested, completion happens on the loop later.
            assert task.done() is False
            loop.run_until_complete(asyncio.sleep(0))
            assert task.cancelled() is True
        finally:
            loop.close()

    def test_disposable_guard_skips_already_disposed(self):
        client = _Client()
        entry = resolve_disposable(client)

        client.dispose()
        entry.execute()

        assert client.close_calls == 1

    def test_disposable_guard_marks_forgetful_implementers(self):
        client = _ForgetfulClient()
        resolve_disposable(client).execute()
        assert client.close_calls == 1
        assert client.is_disposed is True

    def test_duck_typed_dispose_is_called(self):
        duck = _Duck()
        resolve_disposable(duck).execute()
        assert duck.released is True

    def test_duck_typed_cleanup_is_called(self):
        obj = _Cleanable()
        resolve_disposable(obj).execute()
        assert obj.cleaned is True
