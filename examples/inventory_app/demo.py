"""
Inventory example staging stock adjustments in nested transactions.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from blazekv import StoreConfig, TransactionalStore

INITIAL_STOCK = {"widget": 12, "gadget": 4, "gizmo": 0}


def bootstrap_store() -> TransactionalStore[str, int]:
    return TransactionalStore(config=StoreConfig(outermost_rollback="reset"))


def seed_stock(store: TransactionalStore[str, int], stock: Dict[str, int] = INITIAL_STOCK) -> int:
    with store.transaction():
        for sku, quantity in stock.items():
            store.set(sku, quantity)
    return store.count()


def apply_adjustments(
    store: TransactionalStore[str, int],
    batches: Iterable[List[Tuple[str, int]]],
) -> List[bool]:
    """
    Apply each batch in its own nested level. A batch that would drive a
    quantity negative is rolled back; accepted batches are committed.
    """

    results: List[bool] = []
    store.begin()
    try:
        for batch in batches:
            store.begin()
            accepted = True
            for sku, delta in batch:
                current, found = store.get(sku)
                updated = (current if found else 0) + delta
                if updated < 0:
                    accepted = False
                    break
                store.set(sku, updated)
            if accepted:
                store.commit()
            else:
                store.rollback()
            store.end()
            results.append(accepted)
    finally:
        store.end()
    return results


def run_demo() -> Dict[str, int]:
    store = bootstrap_store()
    seed_stock(store)
    apply_adjustments(
        store,
        [
            [("widget", -5), ("gadget", 2)],
            [("gizmo", -1)],
            [("gizmo", 7), ("widget", -2)],
        ],
    )
    return store.committed()


if __name__ == "__main__":
    for sku, quantity in sorted(run_demo().items()):
        print(f"{sku}: {quantity}")
