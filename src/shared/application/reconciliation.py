"""
Reconciliation

Two-phase local-apply / remote-confirm bookkeeping shared by the stateful
components that mirror the record store.

A Reconciler holds two values of the same ordered collection:
- local: what callers see, including optimistic changes
- confirmed: what the record store last acknowledged

Optimistic mutations go through apply(), which stores a Snapshot of the
local value immediately before the change, then commit(), which performs the
remote write. Writes are single-flight: one commit runs at a time per
reconciler. A commit whose change has been overtaken by a newer local change
skips its write (the newer commit carries everything still unconfirmed). A
failed write restores the snapshot taken immediately before that specific
change, replays onto it any change the record store acknowledged in the
meantime, and re-raises. Changes applied after it are discarded with it,
while the change just before it is current again and can still be written.

Non-optimistic mutations (write first, then apply) use exclusive() around the
remote call and apply_confirmed() once it succeeded.
"""
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Callable, Generic, Iterator, List, Sequence, Tuple, TypeVar

from src.utils.message import Log

T = TypeVar('T')

Mutation = Callable[[Tuple[T, ...]], Sequence[T]]


class CommitOutcome(Enum):
    """What happened to an optimistic change when it was committed."""
    CONFIRMED = auto()   # Written and acknowledged by the record store
    SUPERSEDED = auto()  # A newer local change will carry it
    DISCARDED = auto()   # Thrown away by the rollback of an earlier change


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """Local value immediately before (and after) one optimistic change."""
    before: Tuple[T, ...]
    after: Tuple[T, ...]
    token: int
    taken_at: datetime = field(default_factory=datetime.now)


class Reconciler(Generic[T]):
    """
    Snapshot and single-flight write discipline for one mirrored collection.

    Thread-safe. Lock order is always write lock, then state lock.
    """

    def __init__(self, name: str):
        self.name = name
        self._state_lock = threading.RLock()
        self._write_lock = threading.Lock()
        self._local: Tuple[T, ...] = ()
        self._confirmed: Tuple[T, ...] = ()
        self._sequence = 0
        # Token of the change the local value currently shows
        self._current = 0
        # Inclusive token ranges thrown away by rollbacks and resets
        self._discarded: List[Tuple[int, int]] = []
        # Acknowledged mutations, tagged with the sequence number they landed
        # after, for replay by rollbacks of earlier snapshots
        self._acknowledged: List[Tuple[int, Mutation]] = []

    @property
    def local(self) -> Tuple[T, ...]:
        with self._state_lock:
            return self._local

    @property
    def confirmed(self) -> Tuple[T, ...]:
        with self._state_lock:
            return self._confirmed

    @property
    def has_pending_changes(self) -> bool:
        with self._state_lock:
            return self._local != self._confirmed

    def reset(self, items: Sequence[T]) -> None:
        """
        Replace both values with a freshly fetched collection.

        Any optimistic change not yet committed is discarded.
        """
        with self._state_lock:
            if self._sequence:
                self._discarded = [(1, self._sequence)]
            self._current = self._sequence
            self._local = tuple(items)
            self._acknowledged.clear()
            self._confirmed = self._local

    def apply(self, mutate: Mutation) -> Snapshot[T]:
        """
        Apply an optimistic change to the local value.

        Args:
            mutate: Function from the current local value to the new one

        Returns:
            Snapshot to pass to commit()
        """
        with self._state_lock:
            before = self._local
            after = tuple(mutate(before))
            self._sequence += 1
            self._current = self._sequence
            self._local = after
            return Snapshot(before=before, after=after, token=self._sequence)

    def commit(
        self,
        snapshot: Snapshot[T],
        write: Callable[[Tuple[T, ...], Tuple[T, ...]], None],
    ) -> CommitOutcome:
        """
        Submit the local value to the record store.

        Args:
            snapshot: Snapshot returned by apply()
            write: Called as write(confirmed, target); raises on failure

        Returns:
            CommitOutcome

        Raises:
            Whatever write() raised, after the local value has been rolled
            back to snapshot.before
        """
        with self._write_lock:
            with self._state_lock:
                if self._is_discarded(snapshot.token):
                    Log.warning(f"{self.name}: Change {snapshot.token} was discarded by an earlier rollback")
                    return CommitOutcome.DISCARDED
                if snapshot.token != self._current:
                    Log.debug(f"{self.name}: Change {snapshot.token} superseded by {self._current}, skipping write")
                    return CommitOutcome.SUPERSEDED
                confirmed, target = self._confirmed, self._local

            try:
                write(confirmed, target)
            except Exception:
                self._rollback(snapshot)
                raise

            with self._state_lock:
                self._confirmed = target
                # Only rollbacks of later changes can still need these
                self._acknowledged = [(seq, m) for seq, m in self._acknowledged if seq > snapshot.token]
            return CommitOutcome.CONFIRMED

    def _is_discarded(self, token: int) -> bool:
        return any(low <= token <= high for low, high in self._discarded)

    def _rollback(self, snapshot: Snapshot[T]) -> None:
        # Everything applied from this change on is undone; the change just
        # before it is showing again
        with self._state_lock:
            restored = snapshot.before
            for seq, mutate in self._acknowledged:
                if seq >= snapshot.token:
                    restored = tuple(mutate(restored))
            self._discarded.append((snapshot.token, self._sequence))
            self._current = snapshot.token - 1
            self._local = restored
        Log.warning(f"{self.name}: Rolled back change {snapshot.token} ({len(restored)} item(s) restored)")

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the write lock around a non-optimistic remote call."""
        with self._write_lock:
            yield

    def apply_confirmed(self, mutate: Mutation) -> Tuple[T, ...]:
        """
        Apply a change the record store has already acknowledged.

        The change is applied to both the local and the confirmed value.

        Returns:
            The new local value
        """
        with self._state_lock:
            self._confirmed = tuple(mutate(self._confirmed))
            self._acknowledged.append((self._sequence, mutate))
            self._local = tuple(mutate(self._local))
            return self._local
