"""Month-keyed snapshot history backed by a key-value blob store."""

import json
import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, Tuple

from fintrack.config import HISTORY_STORAGE_KEY, RECENT_HISTORY_LIMIT
from fintrack.domain import Snapshot
from fintrack.functional import Either, Maybe, Nothing, Right, Some, rejection
from fintrack.normalizer import normalize_snapshot, now_ms

logger = logging.getLogger(__name__)


def most_recent_first(snapshots: Iterable[Snapshot]) -> Tuple[Snapshot, ...]:
    # "YYYY-MM" sorts correctly as a plain string
    return tuple(sorted(snapshots, key=lambda s: (s.month, s.created_at), reverse=True))


class HistoryStore:
    """Owns the snapshot collection; at most one snapshot per month.

    Every mutation serializes the whole resulting collection to the store
    before the in-memory state changes, so a failed write leaves both as
    they were.
    """

    def __init__(self, store, key: str = HISTORY_STORAGE_KEY, clock: Callable[[], int] = now_ms):
        self._store = store
        self.key = key
        self._clock = clock
        self._snapshots: Dict[str, Snapshot] = {}
        # stored array still holds records load() dropped
        self._stale_blob = False

    @classmethod
    def open(cls, store, key: str = HISTORY_STORAGE_KEY) -> "HistoryStore":
        history = cls(store, key)
        history.load()
        return history

    def __len__(self) -> int:
        return len(self._snapshots)

    def load(self) -> Tuple[Snapshot, ...]:
        self._snapshots = {}
        self._stale_blob = False
        try:
            raw = self._store.get(self.key)
        except OSError as e:
            logger.error(f"Could not read history '{self.key}': {e}")
            return ()
        except ValueError:
            # undecodable bytes are as corrupt as unparseable text
            parsed = None
        else:
            if not raw:
                return ()
            try:
                parsed = json.loads(raw)
            except (ValueError, RecursionError):
                parsed = None
        if not isinstance(parsed, list):
            logger.warning(f"History '{self.key}' is not a JSON array, resetting it")
            self._persist({})
            return ()

        now = self._clock()
        dropped = 0
        for item in parsed:
            snapshot = normalize_snapshot(item, now=now).filter(lambda s: bool(s.month))
            if snapshot.is_none():
                dropped += 1
                continue
            self._keep_latest(snapshot.get_or_else(None))
        if dropped:
            self._stale_blob = True
            logger.warning(f"Dropped {dropped} malformed snapshot record(s) from '{self.key}'")
        return self.ordered_most_recent()

    def _keep_latest(self, snapshot: Snapshot) -> None:
        current = self._snapshots.get(snapshot.month)
        if current is None or snapshot.created_at > current.created_at:
            self._snapshots[snapshot.month] = snapshot

    def _persist(self, snapshots: Dict[str, Snapshot]) -> bool:
        payload = json.dumps([s.to_record() for s in most_recent_first(snapshots.values())])
        try:
            self._store.set(self.key, payload)
        except OSError as e:
            logger.error(f"Could not write history '{self.key}': {e}")
            return False
        self._stale_blob = False
        return True

    def find_by_month(self, month: str) -> Maybe[Snapshot]:
        snapshot = self._snapshots.get(month)
        return Some(snapshot) if snapshot is not None else Nothing()

    def save(self, snapshot: Snapshot, overwrite: bool = False) -> Either[dict, Snapshot]:
        """Insert ``snapshot`` or replace the one stored for its month.

        Replacing needs ``overwrite=True``; without it an existing month comes
        back as a ``duplicate_month`` Left and nothing changes. The replaced
        snapshot's id is kept.
        """
        if not snapshot.month:
            return rejection("save_rejected", "Please select a month before saving a snapshot.")

        existing = self._snapshots.get(snapshot.month)
        if existing is not None and not overwrite:
            return rejection(
                "duplicate_month",
                f"A snapshot for {snapshot.month} already exists. Overwrite it?",
                month=snapshot.month,
                existing_id=existing.id,
            )

        stored = replace(snapshot, id=existing.id) if existing is not None else snapshot
        updated = {**self._snapshots, stored.month: stored}
        if not self._persist(updated):
            return rejection("persist_failed", "Could not save the snapshot.", month=stored.month)

        self._snapshots = updated
        logger.info(f"{'Overwrote' if existing else 'Saved'} snapshot for {stored.month}")
        return Right(stored)

    def delete(self, snapshot_id: str) -> bool:
        remaining = {m: s for m, s in self._snapshots.items() if s.id != snapshot_id}
        if len(remaining) == len(self._snapshots) or not self._persist(remaining):
            return False
        self._snapshots = remaining
        logger.info(f"Deleted snapshot {snapshot_id}")
        return True

    def clear(self) -> bool:
        """Empty the history; an empty one is only rewritten if its blob held dropped records."""
        if not self._snapshots and not self._stale_blob:
            return False
        if not self._persist({}):
            return False
        self._snapshots = {}
        logger.info("Cleared snapshot history")
        return True

    def ordered_most_recent(self) -> Tuple[Snapshot, ...]:
        return most_recent_first(self._snapshots.values())

    def recent(self, limit: int = RECENT_HISTORY_LIMIT) -> Tuple[Snapshot, ...]:
        return self.ordered_most_recent()[: max(0, limit)]

    def snapshots(self) -> Tuple[Snapshot, ...]:
        return tuple(self._snapshots.values())
