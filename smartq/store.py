from __future__ import annotations

# In-memory persistence for queue entries and the records around them.
#
# Each `RecordStore` keeps its records in insertion order, so
# `list_by_salon()` returns them in stable creation order. One lock guards
# one store: a single call is atomic, a sequence of calls is not.

import dataclasses
import threading
from typing import Any, Callable, Generic, Iterable, TypeVar

from .models import Offer, QueueEntry, Review, Salon, Service

T = TypeVar("T")


class RecordStore(Generic[T]):
    """CRUD over one record type. Records must have `id` and `salon_id`."""

    def __init__(self, *, frozen_fields: Iterable[str] = ("id",)) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, T] = {}
        self._frozen = frozenset(frozen_fields)

    def get(self, record_id: str) -> T | None:
        with self._lock:
            return self._records.get(record_id)

    def list_all(self) -> list[T]:
        with self._lock:
            return list(self._records.values())

    def list_by_salon(self, salon_id: str) -> list[T]:
        return self.list_where(lambda r: getattr(r, "salon_id", None) == salon_id)

    def list_where(self, predicate: Callable[[T], bool]) -> list[T]:
        with self._lock:
            return [r for r in self._records.values() if predicate(r)]

    def create(self, record: T) -> T:
        record_id = getattr(record, "id")
        with self._lock:
            if record_id in self._records:
                raise ValueError(f"duplicate id {record_id}")
            self._records[record_id] = record
        return record

    def update(self, record_id: str, **patch: Any) -> T | None:
        """Replace fields of a record. Returns the new record, or None if absent."""
        blocked = self._frozen.intersection(patch)
        if blocked:
            raise ValueError(f"read-only fields: {', '.join(sorted(blocked))}")
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return None
            updated = dataclasses.replace(current, **patch)
            self._records[record_id] = updated
            return updated

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def delete_where(self, predicate: Callable[[T], bool]) -> int:
        with self._lock:
            doomed = [rid for rid, r in self._records.items() if predicate(r)]
            for rid in doomed:
                del self._records[rid]
            return len(doomed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class Store:
    """All record stores of one SmartQ deployment, with cascading deletes."""

    def __init__(self) -> None:
        # Ticket numbers and ownership never change once written.
        self.entries: RecordStore[QueueEntry] = RecordStore(
            frozen_fields=("id", "salon_id", "customer_id", "position", "timestamp")
        )
        self.salons: RecordStore[Salon] = RecordStore(frozen_fields=("id", "owner_id"))
        self.services: RecordStore[Service] = RecordStore(frozen_fields=("id", "salon_id"))
        self.offers: RecordStore[Offer] = RecordStore(frozen_fields=("id", "salon_id"))
        self.reviews: RecordStore[Review] = RecordStore(frozen_fields=("id", "salon_id"))

    def delete_salon(self, salon_id: str) -> bool:
        if not self.salons.delete(salon_id):
            return False
        for records in (self.entries, self.services, self.offers, self.reviews):
            records.delete_where(lambda r: r.salon_id == salon_id)
        return True

    def delete_service(self, service_id: str) -> bool:
        if not self.services.delete(service_id):
            return False
        self.entries.delete_where(lambda e: e.service_id == service_id)
        return True

    def delete_customer(self, customer_id: str) -> int:
        """Drop everything a removed customer left behind. Returns entries removed."""
        self.reviews.delete_where(lambda r: r.customer_id == customer_id)
        return self.entries.delete_where(lambda e: e.customer_id == customer_id)
