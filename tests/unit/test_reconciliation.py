"""
Tests for the Reconciler snapshot / single-flight bookkeeping.
"""
import pytest

from src.shared.application.reconciliation import CommitOutcome, Reconciler


def move_last_to_front(items):
    items = list(items)
    return [items[-1]] + items[:-1]


def fail_write(confirmed, target):
    raise RuntimeError("boom")


@pytest.fixture
def reconciler():
    r = Reconciler("Test")
    r.reset(["a", "b", "c"])
    return r


class TestApplyCommit:
    def test_apply_is_visible_before_commit(self, reconciler):
        reconciler.apply(move_last_to_front)

        assert reconciler.local == ("c", "a", "b")
        assert reconciler.confirmed == ("a", "b", "c")
        assert reconciler.has_pending_changes

    def test_commit_confirms(self, reconciler):
        snapshot = reconciler.apply(move_last_to_front)
        written = []

        outcome = reconciler.commit(snapshot, lambda confirmed, target: written.append((confirmed, target)))

        assert outcome is CommitOutcome.CONFIRMED
        assert written == [(("a", "b", "c"), ("c", "a", "b"))]
        assert reconciler.confirmed == ("c", "a", "b")
        assert not reconciler.has_pending_changes

    def test_failed_commit_restores_snapshot_and_reraises(self, reconciler):
        snapshot = reconciler.apply(move_last_to_front)

        def fail(confirmed, target):
            raise IOError("write failed")

        with pytest.raises(IOError):
            reconciler.commit(snapshot, fail)

        assert reconciler.local == ("a", "b", "c")


class TestOverlap:
    def test_older_change_is_superseded_by_newer(self, reconciler):
        first = reconciler.apply(move_last_to_front)
        second = reconciler.apply(move_last_to_front)
        writes = []

        assert reconciler.commit(first, lambda c, t: writes.append(t)) is CommitOutcome.SUPERSEDED
        assert reconciler.commit(second, lambda c, t: writes.append(t)) is CommitOutcome.CONFIRMED

        # The one write carried both changes
        assert writes == [("b", "c", "a")]

    def test_rollback_restores_state_before_that_change_only(self, reconciler):
        first = reconciler.apply(move_last_to_front)      # c a b
        reconciler.commit(first, lambda c, t: None)
        second = reconciler.apply(move_last_to_front)     # b c a

        with pytest.raises(RuntimeError):
            reconciler.commit(second, fail_write)

        assert reconciler.local == ("c", "a", "b")

    def test_rollback_makes_previous_pending_change_current_again(self, reconciler):
        first = reconciler.apply(move_last_to_front)
        second = reconciler.apply(move_last_to_front)
        writes = []

        def fail(confirmed, target):
            raise RuntimeError("boom")

        # Newest change fails and rolls back to the state after the first
        with pytest.raises(RuntimeError):
            reconciler.commit(second, fail)

        assert reconciler.local == first.after
        assert reconciler.commit(second, lambda c, t: None) is CommitOutcome.DISCARDED
        assert reconciler.commit(first, lambda c, t: writes.append(t)) is CommitOutcome.CONFIRMED
        assert writes == [first.after]
        assert reconciler.confirmed == first.after

    def test_rollback_keeps_change_acknowledged_during_the_write(self, reconciler):
        snapshot = reconciler.apply(move_last_to_front)              # c a b
        reconciler.apply_confirmed(lambda items: [i for i in items if i != "b"])

        with pytest.raises(RuntimeError):
            reconciler.commit(snapshot, fail_write)

        assert reconciler.local == ("a", "c")
        assert reconciler.confirmed == ("a", "c")
        assert not reconciler.has_pending_changes

    def test_rollback_does_not_replay_what_the_snapshot_already_holds(self, reconciler):
        first = reconciler.apply(move_last_to_front)                 # c a b
        reconciler.commit(first, lambda c, t: None)
        reconciler.apply_confirmed(lambda items: [i for i in items if i != "a"])
        second = reconciler.apply(move_last_to_front)                # b c

        with pytest.raises(RuntimeError):
            reconciler.commit(second, fail_write)

        assert reconciler.local == ("c", "b")

    def test_reset_discards_pending_changes(self, reconciler):
        snapshot = reconciler.apply(move_last_to_front)

        reconciler.reset(["x"])

        assert reconciler.commit(snapshot, lambda c, t: None) is CommitOutcome.DISCARDED
        assert reconciler.local == ("x",)


def test_apply_confirmed_updates_both_values(reconciler):
    reconciler.apply(move_last_to_front)

    reconciler.apply_confirmed(lambda items: [i for i in items if i != "b"])

    assert reconciler.local == ("c", "a")
    assert reconciler.confirmed == ("a", "c")
