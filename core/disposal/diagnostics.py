"""
Diagnostics switches for component teardown.

Two independent flags gate the optional output of ``DisposalRegistry``:

- ``report_enabled``: log each disposed entry, unresolved-object warnings
  and a per-component summary.
- ``track_performance``: time every cleanup action and the teardown as a
  whole.

Both are intended for development builds. Defaults are read from the
``AUTODISPOSE_REPORT`` and ``AUTODISPOSE_TRACK_PERF`` environment
variables and are off when unset.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = ("1", "true", "on", "yes")
_FALSE_VALUES = ("0", "false", "off", "no")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass
class DisposeDiagnostics:
    """Process-wide logging/timing toggles read at teardown time."""
    report_enabled: bool = False
    track_performance: bool = False

    @classmethod
    def from_env(cls) -> 'DisposeDiagnostics':
        """Build a config from ``AUTODISPOSE_*`` environment variables."""
        return cls(
            report_enabled=_env_flag("AUTODISPOSE_REPORT"),
            track_performance=_env_flag("AUTODISPOSE_TRACK_PERF"),
        )


_DIAGNOSTICS: DisposeDiagnostics = DisposeDiagnostics.from_env()


def get_diagnostics() -> DisposeDiagnostics:
    """Return the shared diagnostics config."""
    return _DIAGNOSTICS


def configure_diagnostics(
    report_enabled: Optional[bool] = None,
    track_performance: Optional[bool] = None,
) -> DisposeDiagnostics:
    """Update the shared config in place. ``None`` leaves a flag unchanged."""
    if report_enabled is not None:
        _DIAGNOSTICS.report_enabled = bool(report_enabled)
    if track_performance is not None:
        _DIAGNOSTICS.track_performance = bool(track_performance)
    return _DIAGNOSTICS


def reset_diagnostics() -> DisposeDiagnostics:
    """Restore the shared config to its environment defaults."""
    defaults = DisposeDiagnostics.from_env()
    _DIAGNOSTICS.report_enabled = defaults.report_enabled
    _DIAGNOSTICS.track_performance = defaults.track_performance
    return _DIAGNOSTICS
