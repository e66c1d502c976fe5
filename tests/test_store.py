from datetime import datetime
from decimal import Decimal

import pytest

from smartq.models import Offer, QueueEntry, QueueStatus, Review, Salon, Service
from smartq.store import Store


def _seed():
    store = Store()
    salon = store.salons.create(Salon(owner_id="o", name="S", location="L"))
    service = store.services.create(Service(salon_id=salon.id, name="cut", duration=30, price=Decimal("10")))
    entries = [
        store.entries.create(QueueEntry(salon_id=salon.id, customer_id=c, service_id=service.id, position=i))
        for i, c in enumerate(["A", "B", "C"], start=1)
    ]
    return store, salon, service, entries


def test_list_by_salon_keeps_creation_order():
    store, salon, _, entries = _seed()
    store.entries.create(QueueEntry(salon_id="other", customer_id="Z", service_id="x", position=1))
    assert [e.id for e in store.entries.list_by_salon(salon.id)] == [e.id for e in entries]


def test_update_replaces_fields_and_protects_ticket():
    store, _, _, entries = _seed()
    updated = store.entries.update(entries[0].id, status=QueueStatus.IN_PROGRESS)
    assert updated.status is QueueStatus.IN_PROGRESS
    assert store.entries.get(entries[0].id).status is QueueStatus.IN_PROGRESS

    with pytest.raises(ValueError):
        store.entries.update(entries[0].id, position=9)
    assert store.entries.update("missing", status=QueueStatus.COMPLETED) is None


def test_duplicate_ids_rejected():
    store, _, _, entries = _seed()
    with pytest.raises(ValueError):
        store.entries.create(entries[0])


def test_delete_salon_cascades():
    store, salon, service, _ = _seed()
    store.offers.create(Offer(salon_id=salon.id, title="t", discount=Decimal("5"), valid_until=datetime(2030, 1, 1)))
    store.reviews.create(Review(salon_id=salon.id, customer_id="A", rating=5))

    assert store.delete_salon(salon.id)
    assert len(store.entries) == 0
    assert store.services.get(service.id) is None
    assert store.offers.list_by_salon(salon.id) == []
    assert store.reviews.list_by_salon(salon.id) == []
    assert not store.delete_salon(salon.id)


def test_delete_customer_removes_their_entries_only():
    store, salon, _, _ = _seed()
    assert store.delete_customer("B") == 1
    assert [e.customer_id for e in store.entries.list_by_salon(salon.id)] == ["A", "C"]
