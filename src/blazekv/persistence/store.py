"""
Transactional key-value store with nested, savepoint-style sessions.
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Dict, Generator, Generic, Optional, Tuple

from ..config import RollbackPolicy, StoreConfig
from ..errors import TransactionError
from ..hooks import AFTER_BEGIN, AFTER_COMMIT, AFTER_END, AFTER_ROLLBACK, HookDispatcher
from ..utils import get_logger, redact_value, time_call
from .snapshot import K, SessionStack, V, copy_snapshot


class TransactionalStore(Generic[K, V]):
    """
    Key-value store whose reads and writes happen inside nested sessions.

    The committed mapping is only changed by ``commit``. Each ``begin`` opens a
    level holding a full copy of the level beneath it; ``end`` discards the
    level and ``rollback`` resets it to the saved parent while keeping it open.
    Outside a transaction ``set``/``delete`` are ignored and ``get`` reports
    not-found.
    """

    def __init__(
        self,
        *,
        config: Optional[StoreConfig] = None,
        hooks: Optional[HookDispatcher] = None,
    ) -> None:
        self.config = config or StoreConfig()
        self.hooks = hooks or HookDispatcher()
        self.logger = get_logger("persistence.store")
        self._committed: Dict[K, V] = {}
        self._sessions: SessionStack[K, V] = SessionStack()
        self._session: Optional[Dict[K, V]] = None
        self._lock = RLock()

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    @property
    def depth(self) -> int:
        with self._lock:
            if self._session is None:
                return 0
            return len(self._sessions) + 1

    @property
    def in_transaction(self) -> bool:
        with self._lock:
            return self._session is not None

    def committed(self) -> Dict[K, V]:
        with self._lock:
            return copy_snapshot(self._committed)

    def count(self) -> int:
        with self._lock:
            return len(self._committed)

    # ------------------------------------------------------------------ #
    # Transaction boundaries
    # ------------------------------------------------------------------ #
    def begin(self) -> None:
        with self._lock:
            base = self._committed if self._session is None else self._session
            with self._timer("store.begin", len(base)):
                session = copy_snapshot(base)
            if self._session is not None:
                self._sessions.push(self._session)
            self._session = session
            depth = self.depth
        self.logger.debug("Began transaction at depth %s", depth)
        self.hooks.fire(AFTER_BEGIN, self, depth=depth)

    def end(self) -> None:
        with self._lock:
            if self._session is None:
                return
            if self._sessions:
                self._session = self._sessions.pop()
            else:
                self._session = None
            depth = self.depth
        self.logger.debug("Ended transaction, depth now %s", depth)
        self.hooks.fire(AFTER_END, self, depth=depth)

    def rollback(self) -> None:
        with self._lock:
            if self._session is None:
                return
            if not self._sessions:
                if not self._rollback_outermost():
                    return
            else:
                parent = self._sessions.pop()
                with self._timer("store.rollback", len(parent)):
                    self._session = copy_snapshot(parent)
                self._sessions.push(parent)
            depth = self.depth
        self.logger.debug("Rolled back transaction at depth %s", depth)
        self.hooks.fire(AFTER_ROLLBACK, self, depth=depth)

    def commit(self) -> None:
        with self._lock:
            if self._session is None:
                return
            with self._timer("store.commit", len(self._session)):
                self._committed = copy_snapshot(self._session)
                # Only the immediate parent sees the commit; deeper levels keep their snapshot.
                if self._sessions:
                    self._sessions.replace_top(copy_snapshot(self._session))
            depth = self.depth
            keys = len(self._committed)
        self.logger.debug("Committed %s keys at depth %s", keys, depth)
        self.hooks.fire(AFTER_COMMIT, self, depth=depth)

    @contextmanager
    def transaction(self) -> Generator["TransactionalStore[K, V]", None, None]:
        """
        Open a level, commit it on success and close it either way.
        """

        self.begin()
        try:
            yield self
        except Exception:
            self.end()
            raise
        else:
            self.commit()
            self.end()

    # ------------------------------------------------------------------ #
    # Data operations
    # ------------------------------------------------------------------ #
    def set(self, key: K, value: V) -> None:
        with self._lock:
            if self._session is None:
                self.logger.debug("Ignored set of %r outside a transaction", key)
                return
            self._session[key] = value
        self.logger.debug("Set %r = %r", key, self._loggable(key, value))

    def get(self, key: K) -> Tuple[Optional[V], bool]:
        with self._lock:
            if self._session is None:
                return None, False
            if key not in self._session:
                return None, False
            return self._session[key], True

    def delete(self, key: K) -> None:
        with self._lock:
            if self._session is None:
                return
            self._session.pop(key, None)
        self.logger.debug("Deleted %r", key)

    # ------------------------------------------------------------------ #
    def _rollback_outermost(self) -> bool:
        policy = self.config.outermost_rollback
        if policy is RollbackPolicy.ERROR:
            raise TransactionError("No enclosing transaction to roll back to at the outermost level.")
        if policy is RollbackPolicy.IGNORE:
            self.logger.debug("Ignored rollback at the outermost level")
            return False
        with self._timer("store.rollback", len(self._committed)):
            self._session = copy_snapshot(self._committed)
        return True

    def _timer(self, name: str, keys: int):
        return time_call(
            name,
            self.logger,
            depth=len(self._sessions),
            keys=keys,
            threshold_ms=self.config.slow_operation_ms,
        )

    def _loggable(self, key: K, value: V):
        if not self.config.redact_values:
            return value
        return redact_value(value, key=key)
