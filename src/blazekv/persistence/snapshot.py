"""
Snapshot stack holding the saved parent levels of nested transactions.
"""

from __future__ import annotations

from typing import Dict, Generic, Hashable, List, Mapping, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def copy_snapshot(source: Mapping[K, V]) -> Dict[K, V]:
    """
    Return a fully materialized copy of ``source``.

    Values are shared by reference; each level owns its own key set.
    """
    return dict(source)


class SessionStack(Generic[K, V]):
    """
    LIFO of parent snapshots. The top entry is the level directly beneath
    the current session.
    """

    def __init__(self) -> None:
        self._stack: List[Dict[K, V]] = []

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)

    def push(self, snapshot: Dict[K, V]) -> None:
        self._stack.append(snapshot)

    def pop(self) -> Dict[K, V]:
        if not self._stack:
            raise IndexError("pop from empty session stack")
        return self._stack.pop()

    def peek(self) -> Dict[K, V] | None:
        if not self._stack:
            return None
        return self._stack[-1]

    def replace_top(self, snapshot: Dict[K, V]) -> None:
        if not self._stack:
            raise IndexError("replace on empty session stack")
        self._stack[-1] = snapshot

    def clear(self) -> None:
        self._stack.clear()

    def snapshots(self) -> List[Dict[K, V]]:
        """Copies of the saved levels, outermost first."""
        return [copy_snapshot(snapshot) for snapshot in self._stack]
