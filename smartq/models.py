from __future__ import annotations

# Record types shared by the store, the manager and the wire adapter.
#
# All records are plain dataclasses. `to_message()` turns a record into a
# JSON-friendly dict (the shape that goes over MQTT).

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def new_id() -> str:
    return uuid.uuid4().hex


class QueueStatus(str, Enum):
    WAITING = "waiting"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    NO_SHOW = "no-show"


# A customer may hold at most one entry in these states per salon.
ACTIVE_STATUSES = frozenset({QueueStatus.WAITING, QueueStatus.IN_PROGRESS})


class Role(str, Enum):
    CUSTOMER = "customer"
    SALON_OWNER = "salon_owner"


@dataclass(frozen=True)
class Caller:
    """Authenticated identity, as handed to us by the auth layer."""

    user_id: str
    role: Role = Role.CUSTOMER


@dataclass
class QueueEntry:
    """One customer's ticket at a salon for a given service.

    `position` is the ticket number handed out at creation time. It is never
    renumbered; the live rank is computed by `smartq.position`.
    """

    salon_id: str
    customer_id: str
    service_id: str
    position: int
    status: QueueStatus = QueueStatus.WAITING
    estimated_wait_time: int | None = None  # minutes, advisory
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def to_message(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "salon_id": self.salon_id,
            "customer_id": self.customer_id,
            "service_id": self.service_id,
            "status": self.status.value,
            "position": self.position,
            "estimated_wait_time": self.estimated_wait_time,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class Salon:
    owner_id: str
    name: str
    location: str
    description: str | None = None
    rating: float = 0.0  # denormalised mean of reviews
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def to_message(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "location": self.location,
            "description": self.description,
            "rating": self.rating,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Service:
    salon_id: str
    name: str
    duration: int  # minutes
    price: Decimal
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def to_message(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "salon_id": self.salon_id,
            "name": self.name,
            "duration": self.duration,
            "price": str(self.price),
            "description": self.description,
        }


@dataclass
class Offer:
    salon_id: str
    title: str
    discount: Decimal  # percentage
    valid_until: datetime
    description: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def to_message(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "salon_id": self.salon_id,
            "title": self.title,
            "description": self.description,
            "discount": str(self.discount),
            "valid_until": self.valid_until.isoformat(),
            "is_active": self.is_active,
        }


@dataclass
class Review:
    salon_id: str
    customer_id: str
    rating: int
    comment: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def to_message(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "salon_id": self.salon_id,
            "customer_id": self.customer_id,
            "rating": self.rating,
            "comment": self.comment,
            "created_at": self.created_at.isoformat(),
        }
