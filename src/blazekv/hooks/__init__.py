"""
Lifecycle hooks fired on transaction boundaries.
"""

from .dispatcher import (
    AFTER_BEGIN,
    AFTER_COMMIT,
    AFTER_END,
    AFTER_ROLLBACK,
    HookDispatcher,
    HookEvent,
)

__all__ = [
    "AFTER_BEGIN",
    "AFTER_COMMIT",
    "AFTER_END",
    "AFTER_ROLLBACK",
    "HookDispatcher",
    "HookEvent",
]
