import pytest

from blazekv.persistence import TransactionalStore


@pytest.fixture
def store():
    return TransactionalStore()


def test_nested_levels_shadow_and_end_restores_parent(store):
    store.begin()
    store.set("X", 200)
    store.set("Y", 14)
    assert store.get("X") == (200, True)

    store.begin()
    assert store.get("X") == (200, True)
    store.set("Z", 5000)
    assert store.get("Z") == (5000, True)

    store.end()
    assert store.get("Z") == (None, False)
    assert store.get("X") == (200, True)
    assert store.get("Y") == (14, True)


def test_rollback_in_nested_level_discards_writes(store):
    store.begin()
    store.set("X", 200)
    store.begin()
    store.set("O", 1000)
    assert store.get("O") == (1000, True)

    store.rollback()
    assert store.get("O") == (None, False)
    assert store.get("X") == (200, True)

    store.set("Z", 5000)
    store.commit()
    assert store.get("Z") == (5000, True)
    assert store.committed() == {"X": 200, "Z": 5000}


def test_rollback_keeps_depth(store):
    store.begin()
    store.begin()
    store.set("k", 1)
    store.rollback()
    assert store.depth == 2
    store.set("k", 2)
    assert store.get("k") == (2, True)

    store.end()
    assert store.depth == 1
    assert store.get("k") == (None, False)


def test_end_restores_snapshot_taken_at_begin(store):
    store.begin()
    store.begin()
    store.begin()
    store.set("Z", 1)
    store.begin()
    store.begin()
    store.set("Z", 10)
    assert store.depth == 5

    store.end()
    assert store.get("Z") == (1, True)
    assert store.depth == 4


def test_begin_set_end_leaves_previous_value(store):
    store.begin()
    store.set("k", "before")
    store.begin()
    store.set("k", "after")
    store.set("fresh", 1)
    store.end()
    assert store.get("k") == ("before", True)
    assert store.get("fresh") == (None, False)


def test_comprehensive_nested_commit(store):
    store.begin()
    store.begin()
    store.set("K", 5)
    store.set("O", 10)
    store.begin()
    store.set("Z", 1)
    store.begin()
    store.begin()
    assert store.get("K") == (5, True)
    store.set("Z", 10)
    store.end()
    assert store.get("Z") == (1, True)

    store.set("K", 15)
    store.commit()
    assert store.committed() == {"K": 15, "O": 10, "Z": 1}

    store.end()
    # The immediate parent received the commit.
    assert store.get("K") == (15, True)
    store.end()
    # Its parent did not.
    assert store.get("K") == (5, True)
    store.end()
    store.end()
    assert not store.in_transaction

    store.begin()
    assert store.get("K") == (15, True)
    assert store.count() == 3


def test_commit_propagates_one_level_only(store):
    store.begin()
    store.set("x", 1)
    store.begin()
    store.set("x", 2)
    store.begin()
    store.set("x", 3)
    store.commit()

    assert store.committed() == {"x": 3}
    assert store.depth == 3
    assert store.get("x") == (3, True)

    store.end()
    assert store.get("x") == (3, True)
    store.end()
    assert store.get("x") == (1, True)


def test_commit_keeps_session_open_and_independent(store):
    store.begin()
    store.set("a", 1)
    store.begin()
    store.commit()
    store.set("a", 3)

    assert store.committed() == {"a": 1}
    store.end()
    assert store.get("a") == (1, True)


def test_commit_replaces_committed_state_wholesale(store):
    with store.transaction():
        store.set("a", 1)
        store.set("b", 2)

    store.begin()
    store.delete("a")
    store.commit()
    assert store.committed() == {"b": 2}
    assert store.count() == 1


def test_operations_without_transaction_are_ignored(store):
    with store.transaction():
        store.set("present", 1)

    store.set("other", 2)
    store.delete("present")
    assert store.get("present") == (None, False)
    assert store.get("other") == (None, False)
    assert store.committed() == {"present": 1}

    store.end()
    store.rollback()
    store.commit()
    assert store.depth == 0
    assert store.count() == 1


def test_count_reports_committed_keys_only(store):
    store.begin()
    store.set("new", 1)
    assert store.count() == 0
    store.commit()
    assert store.count() == 1
    store.set("another", 2)
    assert store.count() == 1


def test_delete_missing_key_is_not_an_error(store):
    store.begin()
    store.delete("missing")
    assert store.get("missing") == (None, False)


def test_committed_returns_copy(store):
    with store.transaction():
        store.set("a", 1)
    snapshot = store.committed()
    snapshot["a"] = 99
    assert store.committed() == {"a": 1}


def test_transaction_context_discards_on_error(store):
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.set("a", 1)
            raise RuntimeError("boom")

    assert store.count() == 0
    assert store.depth == 0


def test_nested_transaction_context_commits_inner_level(store):
    with store.transaction():
        store.set("outer", 1)
        with store.transaction():
            store.set("inner", 2)
        assert store.get("inner") == (2, True)
        assert store.committed() == {"outer": 1, "inner": 2}
    assert store.depth == 0
