"""Demo window registering one resource of every supported kind.

Closing the window (it is ``WA_DeleteOnClose``) runs the teardown; with
reporting enabled the log shows each disposal and the summary.
"""
from __future__ import annotations

import concurrent.futures
import threading
from typing import List, Optional

from PySide6.QtCore import QEasingCurve, QPropertyAnimation, QTimeLine, QTimer, Qt
from PySide6.QtGui import QKeySequence, QShortcut, QStandardItemModel
from PySide6.QtWidgets import QLabel, QLineEdit, QVBoxLayout, QWidget

from core.disposal import Disposable
from core.logging.logger import get_logger
from .auto_dispose import AutoDisposeMixin

logger = get_logger(__name__)


class FakeSocketClient(Disposable):
    """Stand-in for a network client implementing the Disposable contract."""

    def __init__(self) -> None:
        self.connected = True

    def dispose(self) -> None:
        self.connected = False
        logger.info("FakeSocketClient closed")
        self.mark_disposed()


class FrameCounter:
    """Plain object exposing ``dispose()`` without any base class."""

    def __init__(self) -> None:
        self.frames = 0
        self.released = False

    def tick(self) -> None:
        self.frames += 1

    def dispose(self) -> None:
        self.released = True


class DisposeDemoWindow(AutoDisposeMixin, QWidget):
    """Window whose resources are all released through the mixin."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)
        self.setWindowTitle("AutoDispose demo")
        self.teardown_log: List[str] = []

        layout = QVBoxLayout(self)
        self._status = QLabel("Close this window to trigger disposal.", self)
        self._editor = QLineEdit(self)
        layout.addWidget(self._status)
        layout.addWidget(self._editor)

        # Notifier-style state holder.
        self.model = self.register_for_dispose(QStandardItemModel(self))

        # Animation driver.
        self.fade = self.register_for_dispose(QPropertyAnimation(self, b"windowOpacity", self))
        self.fade.setDuration(2000)
        self.fade.setStartValue(0.6)
        self.fade.setEndValue(1.0)
        self.fade.setEasingCurve(QEasingCurve.Type.InOutQuad)
        self.fade.setLoopCount(-1)

        # Ticker.
        self.timeline = self.register_for_dispose(QTimeLine(1000, self))
        self.timeline.setLoopCount(0)

        # Timers.
        self.frame_counter = self.register_for_dispose(FrameCounter())
        self.tick_timer = self.register_for_dispose(QTimer(self))
        self.tick_timer.setInterval(16)
        self.tick_timer.timeout.connect(self.frame_counter.tick)
        self.watchdog = self.register_for_dispose(threading.Timer(3600.0, lambda: None))
        self.watchdog.daemon = True

        # Subscriptions.
        self.text_connection = self.register_for_dispose(
            self._editor.textChanged.connect(self._on_text_changed)
        )
        self.pending_lookup = self.register_for_dispose(concurrent.futures.Future())

        # Focus handling.
        self.focus_shortcut = self.register_for_dispose(QShortcut(QKeySequence("Ctrl+L"), self))
        self.focus_shortcut.activated.connect(lambda: self._editor.setFocus())

        # Custom resources.
        self.socket_client = self.register_for_dispose(FakeSocketClient())
        self.register_for_dispose(object())  # reported as not disposable

        self.register_dispose_callback(lambda: self.teardown_log.append("manual callback"))

    def start(self) -> None:
        self.fade.start()
        self.timeline.start()
        self.tick_timer.start()
        self.watchdog.start()

    def _on_text_changed(self, text: str) -> None:
        self._status.setText(f"{len(text)} characters")
