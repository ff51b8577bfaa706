"""
Tests for the object store.
Covers staging, committing, inspection, and outcome handling.
"""

import pytest

from branchstore.config.schema import StoreConfig
from branchstore.store import (
    BranchResolutionError,
    HistoryEntry,
    NamedValue,
    ObjectStore,
    Outcome,
    OutcomeError,
)
from tests.fixtures.store_test_data import TickingClock


@pytest.fixture
def store():
    """Create an empty store with a deterministic clock."""
    return ObjectStore(clock=TickingClock())


class TestOutcome:
    """Test the Outcome result type."""
    
    def test_ok(self):
        outcome = Outcome.ok("done", 5)
        assert outcome.success is True
        assert outcome.error is False
        assert outcome.kind is None
        assert outcome.unwrap() == 5
        assert str(outcome) == "done"
    
    def test_fail(self):
        outcome = Outcome.fail("nothing_to_commit", "nope")
        assert outcome.success is False
        assert outcome.error is True
        assert outcome.kind == "nothing_to_commit"
        assert outcome.payload is None
    
    def test_unwrap_failure_raises(self):
        outcome = Outcome.fail("commit_not_found", "Commit x does not exist.")
        with pytest.raises(OutcomeError) as exc_info:
            outcome.unwrap()
        assert exc_info.value.outcome is outcome
        assert "Commit x does not exist." in str(exc_info.value)


class TestNamedValue:
    """Test named value equality and tombstoning."""
    
    def test_equality_by_name(self):
        assert NamedValue("a", 1) == NamedValue("a", 2)
        assert NamedValue("a", 1) != NamedValue("b", 1)
        assert len({NamedValue("a", 1), NamedValue("a", 2)}) == 1
    
    def test_tombstone_returns_copy(self):
        value = NamedValue("a", 1)
        marked = value.tombstone()
        assert marked.tombstoned is True
        assert value.tombstoned is False
        assert marked.revive().tombstoned is False


class TestStaging:
    """Test add and remove."""
    
    def test_add_stages_value(self, store):
        outcome = store.add("a", 1)
        
        assert outcome.success
        assert outcome.message == "Added a to stage."
        assert outcome.payload == 1
        assert store.branch.staged == [NamedValue("a", 1)]
        assert store.branch.items == {}
    
    def test_add_committed_name_stages_removal_first(self, store):
        store.add("a", 1)
        store.commit("m1")
        
        store.add("a", 2)
        staged = store.branch.staged
        
        assert [(c.name, c.value, c.tombstoned) for c in staged] == [
            ("a", 1, True),
            ("a", 2, False),
        ]
        # Committed item is left untouched until the commit
        assert store.branch.items["a"].tombstoned is False
    
    def test_remove_uncommitted_fails(self, store):
        store.add("a", 1)
        outcome = store.remove("a")
        
        assert outcome.error
        assert outcome.kind == "object_not_committed"
        assert outcome.message == "Object a is not committed."
    
    def test_remove_committed(self, store):
        store.add("a", 1)
        store.commit("m1")
        
        outcome = store.remove("a")
        
        assert outcome.success
        assert outcome.message == "Added a for removal."
        assert outcome.payload == 1
        assert store.branch.staged[-1].tombstoned is True
        assert store.get("a").payload == 1
    
    def test_store_keeps_own_copy_of_value(self, store):
        value = {"tags": ["x"]}
        staged = store.add("a", value).payload
        value["tags"].append("caller")
        staged["tags"].append("payload")
        store.commit("m1")
        
        assert store.get("a").payload == {"tags": ["x"]}
        
        removed = store.remove("a").payload
        removed["tags"].clear()
        assert store.branch.staged[-1].value == {"tags": ["x"]}
        assert store.get("a").payload == {"tags": ["x"]}


class TestCommit:
    """Test commit."""
    
    def test_commit_empty_stage_fails(self, store):
        outcome = store.commit("nothing")
        
        assert outcome.error
        assert outcome.kind == "nothing_to_commit"
        assert outcome.message == "Nothing to commit, working directory clean."
        assert store.branch.items == {}
        assert store.branch.history == []
    
    def test_commit_empty_stage_leaves_state_unchanged(self, store):
        store.add("a", 1)
        store.commit("m1")
        items = dict(store.branch.items)
        history = list(store.branch.history)
        
        assert store.commit("again").error
        assert store.branch.items == items
        assert store.branch.history == history
    
    def test_commit_applies_and_clears_stage(self, store):
        store.add("a", 1)
        store.add("b", 2)
        outcome = store.commit("two values")
        
        assert outcome.success
        assert outcome.message == "two values\n\t2 objects changed"
        assert isinstance(outcome.payload, HistoryEntry)
        assert outcome.payload.message == "two values"
        assert store.branch.staged == []
        assert store.get("a").payload == 1
        assert store.get("b").payload == 2
    
    def test_history_newest_first(self, store):
        store.add("a", 1)
        first = store.commit("m1").payload
        store.add("b", 2)
        second = store.commit("m2").payload
        
        assert store.branch.history == [second, first]
    
    def test_entry_changes_are_snapshot(self, store):
        store.add("a", 1)
        entry = store.commit("m1").payload
        store.add("b", 2)
        
        assert entry.changes == (NamedValue("a", 1),)
    
    def test_last_write_wins_in_one_window(self, store):
        store.add("a", 1)
        store.add("a", 2)
        store.add("a", 3)
        store.commit("m1")
        
        assert store.get("a").payload == 3
    
    def test_replace_committed_value(self, store):
        store.add("a", 1)
        store.commit("m1")
        store.add("a", 2)
        outcome = store.commit("m2")
        
        assert outcome.message == "m2\n\t2 objects changed"
        assert store.get("a").payload == 2
    
    def test_remove_then_commit(self, store):
        store.add("a", 1)
        store.commit("m1")
        store.remove("a")
        store.commit("m2")
        
        outcome = store.get("a")
        assert outcome.error
        assert outcome.kind == "object_not_committed"
    
    def test_commit_id_from_timestamp_and_message(self):
        clock = TickingClock()
        store_a = ObjectStore(clock=clock)
        store_b = ObjectStore(clock=TickingClock())
        
        store_a.add("a", 1)
        store_b.add("z", 99)
        
        # Same minute and message, different content: same id
        assert store_a.commit("same").payload.id == store_b.commit("same").payload.id


class TestInspection:
    """Test head, log, get and status."""
    
    def test_head_without_commits(self, store):
        outcome = store.head()
        assert outcome.error
        assert outcome.kind == "no_commits_yet"
        assert outcome.message == "Branch master does not have any commits yet."
    
    def test_log_without_commits(self, store):
        outcome = store.log()
        assert outcome.error
        assert outcome.kind == "no_commits_yet"
    
    def test_head(self, store):
        store.add("a", 1)
        store.commit("m1")
        store.add("b", 2)
        entry = store.commit("m2").payload
        
        outcome = store.head()
        assert outcome.success
        assert outcome.message == "m2"
        assert outcome.payload == entry
        # Without overlay the payload reports only that commit's changes
        assert outcome.payload.changes == (NamedValue("b", 2),)
    
    def test_head_overlay(self):
        store = ObjectStore(config=StoreConfig(head_overlay=True), clock=TickingClock())
        store.add("a", 1)
        store.commit("m1")
        store.add("b", 2)
        entry = store.commit("m2").payload
        
        assert [c.name for c in entry.changes] == ["a", "b"]
        assert store.head().payload.id == store.branch.history[0].id
        assert store.branch.history[0].changes == (NamedValue("b", 2),)
    
    def test_log(self, store):
        store.add("a", 1)
        first = store.commit("m1").payload
        store.add("b", 2)
        second = store.commit("m2").payload
        
        outcome = store.log()
        assert outcome.success
        assert outcome.payload == (second, first)
        assert outcome.message == (
            f"Commit {second.id}\nDate: Mon Jan 01 09:01 2024 +0000\n\n\tm2"
            "\n\n"
            f"Commit {first.id}\nDate: Mon Jan 01 09:00 2024 +0000\n\n\tm1"
        )
    
    def test_log_is_idempotent(self, store):
        store.add("a", 1)
        store.commit("m1")
        
        first = store.log()
        second = store.log()
        assert first == second
    
    def test_log_payload_is_detached(self, store):
        store.add("a", 1)
        store.commit("m1")
        payload = store.log().payload
        
        store.add("b", 2)
        store.commit("m2")
        
        assert len(payload) == 1
    
    def test_get_missing(self, store):
        outcome = store.get("missing")
        assert outcome.error
        assert outcome.message == "Object missing is not committed."
    
    def test_get(self, store):
        store.add("a", {"nested": [1, 2]})
        store.commit("m1")
        
        outcome = store.get("a")
        assert outcome.success
        assert outcome.message == "Found object a."
        assert outcome.payload == {"nested": [1, 2]}
    
    def test_status(self, store):
        store.add("a", 1)
        store.commit("m1")
        store.remove("a")
        store.add("b", 2)
        
        outcome = store.status()
        assert outcome.success
        assert outcome.message == (
            "On branch master\nChanges to be committed:\n\t- a\n\t+ b"
        )
        assert len(outcome.payload) == 2
    
    def test_status_clean(self, store):
        outcome = store.status()
        assert outcome.message == "On branch master\nNothing to commit, working directory clean."
        assert outcome.payload == ()


def test_unresolvable_current_branch_raises(store):
    """A dangling current branch name is a programming error."""
    store.branch_manager.current_branch_name = "ghost"
    
    with pytest.raises(BranchResolutionError):
        store.get("a")


def test_head_payload_without_commits_raises(store):
    """Building a head payload for an empty branch is a programming error."""
    with pytest.raises(BranchResolutionError):
        store._head_payload(store.branch)
