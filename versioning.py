"""Centralised version and naming information for AutoDispose.

The demo entry point reads the display name and version from here.
"""

APP_NAME: str = "AutoDispose"
APP_VERSION: str = "1.0.0"


__all__ = [
    "APP_NAME",
    "APP_VERSION",
]
