"""
Base class for resources that opt into guarded disposal.

Subclasses implement ``dispose()`` and call ``mark_disposed()`` once
cleanup is done. ``DisposalRegistry`` checks ``is_disposed`` before
calling ``dispose()`` so a resource released early by its owner is not
released a second time at teardown.

Example::

    class SocketClient(Disposable):
        def dispose(self) -> None:
            self._socket.close()
            self.mark_disposed()
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class Disposable(ABC):
    """Base class for resources that need explicit, single-shot cleanup."""

    _is_disposed: bool = False

    @property
    def is_disposed(self) -> bool:
        """True once the resource has been disposed."""
        return self._is_disposed

    def mark_disposed(self) -> None:
        """Flag the resource as disposed. Safe to call more than once."""
        self._is_disposed = True

    @abstractmethod
    def dispose(self) -> None:
        """Release the resource, then call ``mark_disposed()``."""

    def __enter__(self):
        return self

    def __exit__(self, *args):
        if not self._is_disposed:
            self.dispose()
            self.mark_disposed()
