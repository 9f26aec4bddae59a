"""
Persistence layer components: the transactional store and its snapshot stack.
"""

from .snapshot import SessionStack, copy_snapshot
from .store import TransactionalStore

__all__ = ["SessionStack", "TransactionalStore", "copy_snapshot"]
