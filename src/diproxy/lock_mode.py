from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for lazy resolution and shared instances.

    Use these values for proxy-level ``lock_mode`` or container-level defaults.
    Keep ``THREAD`` whenever a proxy or container may be reached from more than
    one thread.
    """

    THREAD = "thread"
    """Guard first resolution with ``threading`` locks (double-checked)."""

    NONE = "none"
    """Disable locking; the object must be confined to a single thread."""
