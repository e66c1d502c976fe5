"""Salon performance snapshot.

Everything here is a pure function of the records passed in. Missing nested
data (a service that was deleted, an entry without a wait estimate) degrades
to zero or to the default estimate instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from .models import QueueEntry, QueueStatus, Review, Service
from .wait_time import MINUTES_PER_CUSTOMER


@dataclass(frozen=True)
class PopularService:
    service: Service
    bookings: int

    def to_message(self) -> dict[str, Any]:
        msg = self.service.to_message()
        msg["bookings"] = self.bookings
        return msg


@dataclass(frozen=True)
class AnalyticsSnapshot:
    customers_today: int
    total_customers: int
    avg_wait_time: float
    rating: float
    show_rate: float
    revenue: Decimal
    popular_services: list[PopularService] = field(default_factory=list)

    def to_message(self) -> dict[str, Any]:
        return {
            "customers_today": self.customers_today,
            "total_customers": self.total_customers,
            "avg_wait_time": self.avg_wait_time,
            "rating": self.rating,
            "show_rate": self.show_rate,
            "revenue": str(self.revenue),
            "popular_services": [p.to_message() for p in self.popular_services],
        }


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def mean_rating(reviews: Iterable[Review]) -> float:
    ratings = [r.rating for r in reviews]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def reconcile_rating(reviews: Iterable[Review]) -> float:
    """Value cached on the salon record: the mean rounded to one decimal."""
    return round(mean_rating(reviews), 1)


def compute_analytics(
    *,
    entries: Iterable[QueueEntry],
    services: Iterable[Service],
    reviews: Iterable[Review],
    now: datetime,
) -> AnalyticsSnapshot:
    entries = list(entries)
    services = list(services)
    total = len(entries)

    today = start_of_day(now)
    customers_today = sum(1 for e in entries if e.timestamp >= today)

    if total:
        # A zero estimate (first in line) counts as unknown, same as None.
        waits = [e.estimated_wait_time or MINUTES_PER_CUSTOMER for e in entries]
        avg_wait = sum(waits) / total
    else:
        avg_wait = 0.0

    completed = [e for e in entries if e.status == QueueStatus.COMPLETED]
    # No entries yet counts as a perfect show rate.
    show_rate = len(completed) / total * 100 if total else 100.0

    prices = {s.id: s.price for s in services}
    revenue = sum((prices.get(e.service_id, Decimal("0")) for e in completed), Decimal("0"))

    bookings: dict[str, int] = {}
    for e in entries:
        bookings[e.service_id] = bookings.get(e.service_id, 0) + 1
    popular = sorted(
        (PopularService(service=s, bookings=bookings.get(s.id, 0)) for s in services),
        key=lambda p: p.bookings,
        reverse=True,
    )

    return AnalyticsSnapshot(
        customers_today=customers_today,
        total_customers=total,
        avg_wait_time=float(avg_wait),
        rating=mean_rating(reviews),
        show_rate=float(show_rate),
        revenue=revenue,
        popular_services=popular,
    )
