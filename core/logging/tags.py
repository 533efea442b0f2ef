"""Standard logging tags for consistent log filtering.

These tags prefix log lines emitted by the disposal core so disposal
output can be filtered out of (or routed away from) application logs.

Usage:
    from core.logging.tags import TAG_DISPOSE, TAG_PERF
    logger.info(f"{TAG_DISPOSE} Disposed QTimer")
"""

# =============================================================================
# Performance and Metrics
# =============================================================================

TAG_PERF = "[PERF]"
"""Disposal timing (only emitted when performance tracking is enabled)."""

# =============================================================================
# Disposal
# =============================================================================

TAG_DISPOSE = "[DISPOSE]"
"""Per-entry disposal lines, teardown summaries and unresolved warnings."""

TAG_LIFECYCLE = "[LIFECYCLE]"
"""Widget/component lifecycle events."""

# =============================================================================
# Status Tags
# =============================================================================

TAG_FALLBACK = "[FALLBACK]"
"""Duck-typed fallback resolution (no recognised resource kind)."""

__all__ = [
    "TAG_PERF",
    "TAG_DISPOSE",
    "TAG_LIFECYCLE",
    "TAG_FALLBACK",
]
