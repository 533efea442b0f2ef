"""Widget-side helpers for component lifecycle management."""

from .auto_dispose import AutoDisposeMixin

__all__ = [
    'AutoDisposeMixin',
]
