from datetime import datetime
from decimal import Decimal

from smartq.analytics import compute_analytics, reconcile_rating
from smartq.models import QueueEntry, QueueStatus, Review, Service

NOW = datetime(2024, 5, 6, 15, 30)


def _entry(service_id, status=QueueStatus.WAITING, when=NOW, wait=None):
    return QueueEntry(
        salon_id="S",
        customer_id="C",
        service_id=service_id,
        position=1,
        status=status,
        estimated_wait_time=wait,
        timestamp=when,
    )


def _service(sid, price):
    return Service(salon_id="S", name=sid, duration=30, price=Decimal(price), id=sid)


def test_empty_salon_defaults():
    snap = compute_analytics(entries=[], services=[], reviews=[], now=NOW)
    assert snap.customers_today == 0
    assert snap.total_customers == 0
    assert snap.avg_wait_time == 0
    assert snap.rating == 0
    assert snap.show_rate == 100
    assert snap.revenue == Decimal("0")
    assert snap.popular_services == []


def test_revenue_and_show_rate():
    services = [_service("cut", "25.00")]
    entries = [_entry("cut", QueueStatus.COMPLETED), _entry("cut", QueueStatus.NO_SHOW)]
    snap = compute_analytics(entries=entries, services=services, reviews=[], now=NOW)
    assert snap.revenue == Decimal("25.00")
    assert snap.show_rate == 50


def test_show_rate_is_completed_share():
    entries = [_entry("cut", QueueStatus.COMPLETED)] * 3 + [_entry("cut")] * 5
    snap = compute_analytics(entries=entries, services=[], reviews=[], now=NOW)
    assert snap.show_rate == 100 * 3 / 8


def test_completed_entry_of_deleted_service_earns_nothing():
    entries = [_entry("gone", QueueStatus.COMPLETED), _entry("cut", QueueStatus.COMPLETED)]
    snap = compute_analytics(entries=entries, services=[_service("cut", "10.50")], reviews=[], now=NOW)
    assert snap.revenue == Decimal("10.50")


def test_customers_today_uses_calendar_day():
    entries = [
        _entry("cut", when=datetime(2024, 5, 6, 0, 0)),
        _entry("cut", when=datetime(2024, 5, 5, 23, 59)),
        _entry("cut", when=NOW),
    ]
    snap = compute_analytics(entries=entries, services=[], reviews=[], now=NOW)
    assert snap.customers_today == 2
    assert snap.total_customers == 3


def test_avg_wait_defaults_missing_or_zero_estimates_to_fifteen():
    entries = [_entry("cut", wait=0), _entry("cut", wait=45), _entry("cut")]
    snap = compute_analytics(entries=entries, services=[], reviews=[], now=NOW)
    assert snap.avg_wait_time == 25


def test_popular_services_sorted_and_stable():
    services = [_service("a", "1"), _service("b", "1"), _service("c", "1"), _service("d", "1")]
    entries = [_entry("c"), _entry("c"), _entry("a"), _entry("d")]
    snap = compute_analytics(entries=entries, services=services, reviews=[], now=NOW)
    assert [(p.service.id, p.bookings) for p in snap.popular_services] == [("c", 2), ("a", 1), ("d", 1), ("b", 0)]
    assert snap.to_message()["popular_services"][0]["bookings"] == 2


def test_rating_mean_and_reconciled_cache():
    reviews = [Review(salon_id="S", customer_id=c, rating=r) for c, r in (("x", 5), ("y", 4), ("z", 4))]
    snap = compute_analytics(entries=[], services=[], reviews=reviews, now=NOW)
    assert snap.rating == 13 / 3
    assert reconcile_rating(reviews) == 4.3
    assert reconcile_rating([]) == 0.0
