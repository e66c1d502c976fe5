"""Live queue positions.

Ranks are derived from the current entry set on every read and never stored.
Ordering is by creation `timestamp`; `sorted()` is stable, so entries created
within the same clock tick keep the store's creation order. The ticket
`position` field plays no part here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .models import QueueEntry, QueueStatus
from .wait_time import estimated_wait_minutes

# Rank reported to a customer who is currently being served.
IN_PROGRESS_RANK = 0


@dataclass(frozen=True)
class QueuePosition:
    rank: int
    waiting_count: int

    def to_message(self) -> dict[str, int]:
        return {"rank": self.rank, "waiting_count": self.waiting_count}


def waiting_entries(entries: Iterable[QueueEntry]) -> list[QueueEntry]:
    """Waiting entries of one salon, oldest first."""
    waiting = [e for e in entries if e.status == QueueStatus.WAITING]
    return sorted(waiting, key=lambda e: e.timestamp)


def rank_waiting(entries: Iterable[QueueEntry]) -> dict[str, int]:
    """Map entry id -> 1-based rank for every waiting entry."""
    return {e.id: i for i, e in enumerate(waiting_entries(entries), start=1)}


def salon_wait_minutes(entries: Iterable[QueueEntry]) -> int:
    return estimated_wait_minutes(waiting_count=len(waiting_entries(entries)))


def live_position(entries: Iterable[QueueEntry], entry: QueueEntry) -> QueuePosition | None:
    """Rank of `entry` among `entries` (its salon's list).

    Returns None for entries that are neither waiting nor in progress.
    """
    ranks = rank_waiting(entries)
    if entry.status == QueueStatus.IN_PROGRESS:
        return QueuePosition(rank=IN_PROGRESS_RANK, waiting_count=len(ranks))
    rank = ranks.get(entry.id)
    if rank is None:
        return None
    return QueuePosition(rank=rank, waiting_count=len(ranks))


def position_for_customer(entries: Iterable[QueueEntry], customer_id: str) -> QueuePosition | None:
    """Live position of a customer's active entry, or None if they have none."""
    entries = list(entries)
    mine = [e for e in entries if e.customer_id == customer_id and e.is_active]
    if not mine:
        return None
    # At most one active entry per customer and salon; prefer the one being served.
    mine.sort(key=lambda e: e.status != QueueStatus.IN_PROGRESS)
    return live_position(entries, mine[0])
