"""
Hook dispatcher coordinating transaction lifecycle events.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from ..persistence.store import TransactionalStore


HookHandler = Callable[..., None]


@dataclass(frozen=True)
class HookEvent:
    name: str


AFTER_BEGIN = HookEvent("after_begin")
AFTER_COMMIT = HookEvent("after_commit")
AFTER_ROLLBACK = HookEvent("after_rollback")
AFTER_END = HookEvent("after_end")

EVENTS = frozenset(event.name for event in (AFTER_BEGIN, AFTER_COMMIT, AFTER_ROLLBACK, AFTER_END))


class HookDispatcher:
    """
    Maintains handlers keyed by lifecycle event name.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[HookHandler]] = defaultdict(list)

    def register(self, event: str | HookEvent, handler: HookHandler) -> None:
        name = event.name if isinstance(event, HookEvent) else event
        if name not in EVENTS:
            raise ValueError(f"Unknown hook event '{name}'")
        self._handlers[name].append(handler)

    def fire(self, event: str | HookEvent, store: "TransactionalStore", **context: Any) -> None:
        name = event.name if isinstance(event, HookEvent) else event
        for handler in list(self._handlers.get(name, [])):
            handler(store, **context)

    def clear(self) -> None:
        self._handlers.clear()
