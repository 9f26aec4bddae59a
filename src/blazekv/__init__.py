"""
BlazeKV public package initialization.

Exposes the transactional store along with its configuration, errors and
lifecycle hooks.
"""

from .config import RollbackPolicy, StoreConfig  # noqa: F401
from .errors import (  # noqa: F401
    CommandError,
    ConfigurationError,
    KeyStoreError,
    TransactionError,
)
from .hooks import HookDispatcher  # noqa: F401
from .persistence import SessionStack, TransactionalStore  # noqa: F401

__all__ = [
    "TransactionalStore",
    "SessionStack",
    "StoreConfig",
    "RollbackPolicy",
    "HookDispatcher",
    "KeyStoreError",
    "TransactionError",
    "ConfigurationError",
    "CommandError",
]
