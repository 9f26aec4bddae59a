from examples.inventory_app import apply_adjustments, bootstrap_store, run_demo, seed_stock


def test_inventory_seed_and_adjust():
    store = bootstrap_store()
    assert seed_stock(store) == 3

    results = apply_adjustments(store, [[("widget", -20)], [("gadget", 1)]])
    assert results == [False, True]
    assert store.committed() == {"widget": 12, "gadget": 5, "gizmo": 0}
    assert store.depth == 0


def test_run_inventory_demo():
    assert run_demo() == {"widget": 5, "gadget": 6, "gizmo": 7}
