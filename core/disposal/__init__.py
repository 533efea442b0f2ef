"""Automatic disposal of component-owned resources."""

from .diagnostics import (
    DisposeDiagnostics,
    configure_diagnostics,
    get_diagnostics,
    reset_diagnostics,
)
from .disposable import Disposable
from .entry import DisposeEntry
from .registry import DisposalRegistry, RegistrationAfterTeardownError, RegistryState
from .resolver import resolve_disposable
from .types import ResourceKind

__all__ = [
    'Disposable',
    'DisposeEntry',
    'DisposalRegistry',
    'RegistrationAfterTeardownError',
    'RegistryState',
    'ResourceKind',
    'resolve_disposable',
    'DisposeDiagnostics',
    'configure_diagnostics',
    'get_diagnostics',
    'reset_diagnostics',
]
