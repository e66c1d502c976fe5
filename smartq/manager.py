from __future__ import annotations

# The salon queue manager is the authoritative brain of SmartQ.
#
# IMPORTANT: This file contains two layers:
# 1) `SalonQueueManager` (pure logic over a `Store`, easy to unit test)
# 2) `MqttSalonQueueService` + `main()` (integration with the MQTT broker)
#
# The business layer raises `QueueError`s. The MQTT adapter is the operation
# boundary and turns them into error envelopes.

import argparse
import logging
import time
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Callable

from .analytics import AnalyticsSnapshot, compute_analytics, reconcile_rating
from .broadcast import BroadcastNotifier, NotAuthenticated, TopicRegistry, queue_update_message
from .errors import (
    BadRequest,
    DuplicateActiveEntry,
    ErrorResponse,
    InvalidTransition,
    NotAuthorized,
    NotFound,
    QueueError,
)
from .models import Caller, Offer, QueueEntry, QueueStatus, Review, Role, Salon, Service
from .position import live_position, position_for_customer, QueuePosition, salon_wait_minutes, waiting_entries
from .store import Store
from .transitions import check_transition, parse_status
from .wait_time import estimated_wait_minutes

if TYPE_CHECKING:
    from .mqtt_client import MqttClient

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

OFFER_FIELDS = frozenset({"title", "description", "discount", "valid_until", "is_active"})
SALON_FIELDS = frozenset({"name", "location", "description"})


def parse_role(value: str | Role) -> Role:
    try:
        return Role(value)
    except ValueError as e:
        raise BadRequest(f"unknown role {value!r}") from e


def parse_decimal(value: Any, name: str) -> Decimal:
    try:
        number = Decimal(str(value))
    except InvalidOperation as e:
        raise BadRequest(f"{name} must be a number") from e
    if not number.is_finite():
        raise BadRequest(f"{name} must be a number")
    return number


class SalonQueueManager:
    """Core business logic (testable without MQTT)."""

    def __init__(
        self,
        *,
        store: Store | None = None,
        notifier: BroadcastNotifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.store = store if store is not None else Store()
        self.notifier = notifier
        self._clock = clock

    # -------------------- lookups --------------------

    def _salon(self, salon_id: str) -> Salon:
        salon = self.store.salons.get(salon_id)
        if salon is None:
            raise NotFound(f"salon {salon_id} not found")
        return salon

    def _owned_salon(self, salon_id: str, requester_id: str) -> Salon:
        salon = self._salon(salon_id)
        if salon.owner_id != requester_id:
            raise NotAuthorized("not the owner of this salon")
        return salon

    def _entry(self, entry_id: str) -> QueueEntry:
        entry = self.store.entries.get(entry_id)
        if entry is None:
            raise NotFound(f"queue entry {entry_id} not found")
        return entry

    # -------------------- salons, services, offers --------------------

    def create_salon(self, caller: Caller, *, name: str, location: str, description: str | None = None) -> Salon:
        if caller.role != Role.SALON_OWNER:
            raise NotAuthorized("only salon owners can create salons")
        if not name or not location:
            raise BadRequest("name and location required")
        salon = Salon(
            owner_id=caller.user_id,
            name=name,
            location=location,
            description=description,
            created_at=self._clock(),
        )
        return self.store.salons.create(salon)

    def update_salon(self, requester_id: str, salon_id: str, **patch: Any) -> Salon:
        self._owned_salon(salon_id, requester_id)
        unknown = set(patch) - SALON_FIELDS
        if unknown:
            raise BadRequest(f"cannot update {', '.join(sorted(unknown))}")
        for key in ("name", "location"):
            if key in patch and (not isinstance(patch[key], str) or not patch[key]):
                raise BadRequest(f"{key} must be a non-empty string")
        if patch.get("description") is not None and not isinstance(patch["description"], str):
            raise BadRequest("description must be a string")
        updated = self.store.salons.update(salon_id, **patch)
        if updated is None:
            raise NotFound(f"salon {salon_id} not found")
        logger.info("salon %s updated (%s)", salon_id, ", ".join(sorted(patch)))
        return updated

    def add_service(
        self,
        requester_id: str,
        salon_id: str,
        *,
        name: str,
        duration: int,
        price: Any,
        description: str | None = None,
    ) -> Service:
        self._owned_salon(salon_id, requester_id)
        price = parse_decimal(price, "price")
        if not name:
            raise BadRequest("name required")
        if duration <= 0:
            raise BadRequest("duration must be > 0")
        if price < 0:
            raise BadRequest("price must be >= 0")
        service = Service(
            salon_id=salon_id,
            name=name,
            duration=duration,
            price=price,
            description=description,
            created_at=self._clock(),
        )
        return self.store.services.create(service)

    def create_offer(
        self,
        requester_id: str,
        salon_id: str,
        *,
        title: str,
        discount: Any,
        valid_until: datetime,
        description: str = "",
        is_active: bool = True,
    ) -> Offer:
        self._owned_salon(salon_id, requester_id)
        offer = Offer(
            salon_id=salon_id,
            title=title,
            discount=self._check_discount(discount),
            valid_until=valid_until,
            description=description,
            is_active=is_active,
            created_at=self._clock(),
        )
        return self.store.offers.create(offer)

    def update_offer(self, requester_id: str, offer_id: str, **patch: Any) -> Offer:
        offer = self.store.offers.get(offer_id)
        if offer is None:
            raise NotFound(f"offer {offer_id} not found")
        self._owned_salon(offer.salon_id, requester_id)
        unknown = set(patch) - OFFER_FIELDS
        if unknown:
            raise BadRequest(f"cannot update {', '.join(sorted(unknown))}")
        if "title" in patch and (not isinstance(patch["title"], str) or not patch["title"]):
            raise BadRequest("title must be a non-empty string")
        if "description" in patch and not isinstance(patch["description"], str):
            raise BadRequest("description must be a string")
        if "is_active" in patch and not isinstance(patch["is_active"], bool):
            raise BadRequest("is_active must be true or false")
        if "valid_until" in patch and not isinstance(patch["valid_until"], datetime):
            raise BadRequest("valid_until must be a timestamp")
        if "discount" in patch:
            patch["discount"] = self._check_discount(patch["discount"])
        updated = self.store.offers.update(offer_id, **patch)
        if updated is None:
            raise NotFound(f"offer {offer_id} not found")
        return updated

    def delete_offer(self, requester_id: str, offer_id: str) -> None:
        offer = self.store.offers.get(offer_id)
        if offer is None:
            raise NotFound(f"offer {offer_id} not found")
        self._owned_salon(offer.salon_id, requester_id)
        self.store.offers.delete(offer_id)

    def list_active_offers(self) -> list[Offer]:
        return self.store.offers.list_where(lambda o: o.is_active)

    def salon_offers(self, salon_id: str, requester_id: str) -> list[Offer]:
        """Every offer of a salon, inactive ones included. Owner only."""
        self._owned_salon(salon_id, requester_id)
        return self.store.offers.list_by_salon(salon_id)

    @staticmethod
    def _check_discount(value: Any) -> Decimal:
        discount = parse_decimal(value, "discount")
        if not Decimal("0") <= discount <= Decimal("100"):
            raise BadRequest("discount must be a percentage between 0 and 100")
        return discount

    def _salon_summary(self, salon: Salon) -> dict[str, Any]:
        entries = self.store.entries.list_by_salon(salon.id)
        msg = salon.to_message()
        msg["services"] = [s.to_message() for s in self.store.services.list_by_salon(salon.id)]
        msg["offers"] = [o.to_message() for o in self.store.offers.list_by_salon(salon.id) if o.is_active]
        msg["queue_count"] = len(waiting_entries(entries))
        msg["estimated_wait_time"] = salon_wait_minutes(entries)
        return msg

    def list_salons(self, location: str | None = None) -> list[dict[str, Any]]:
        """All salons with live queue figures; salons running an offer come first."""
        if location:
            needle = location.casefold()
            salons = self.store.salons.list_where(lambda s: needle in s.location.casefold())
        else:
            salons = self.store.salons.list_all()
        summaries = [self._salon_summary(s) for s in salons]
        summaries.sort(key=lambda s: not s["offers"])
        return summaries

    def get_salon(self, salon_id: str) -> dict[str, Any]:
        msg = self._salon_summary(self._salon(salon_id))
        msg["reviews"] = [r.to_message() for r in self.store.reviews.list_by_salon(salon_id)]
        return msg

    # -------------------- queue operations --------------------

    def join_queue(self, customer_id: str, salon_id: str, service_id: str) -> QueueEntry:
        self._salon(salon_id)
        service = self.store.services.get(service_id)
        if service is None or service.salon_id != salon_id:
            raise NotFound(f"service {service_id} not offered by salon {salon_id}")

        entries = self.store.entries.list_by_salon(salon_id)
        if any(e.customer_id == customer_id and e.is_active for e in entries):
            raise DuplicateActiveEntry("already in queue for this salon")

        # Ticket number only; concurrent joins may draw the same one.
        waiting = len(waiting_entries(entries))
        entry = QueueEntry(
            salon_id=salon_id,
            customer_id=customer_id,
            service_id=service_id,
            position=waiting + 1,
            estimated_wait_time=estimated_wait_minutes(waiting_count=waiting),
            timestamp=self._clock(),
        )
        self.store.entries.create(entry)
        logger.info("customer %s joined salon %s (ticket %d)", customer_id, salon_id, entry.position)
        self._broadcast(salon_id)
        return entry

    def update_status(
        self,
        entry_id: str,
        requester_id: str,
        requester_role: str | Role,
        new_status: str | QueueStatus,
    ) -> QueueEntry:
        """Owner-side status change. Customers leave through `leave_queue`."""
        entry = self._entry(entry_id)
        role = parse_role(requester_role)
        salon = self.store.salons.get(entry.salon_id)
        if role != Role.SALON_OWNER or salon is None or salon.owner_id != requester_id:
            raise NotAuthorized("only the salon owner can change an entry's status")

        status = parse_status(new_status)
        check_transition(entry.status, status)
        updated = self.store.entries.update(entry_id, status=status)
        if updated is None:
            raise NotFound(f"queue entry {entry_id} not found")
        logger.info("entry %s: %s -> %s", entry_id, entry.status.value, status.value)
        self._broadcast(entry.salon_id)
        return updated

    def leave_queue(self, entry_id: str, requester_id: str) -> None:
        entry = self._entry(entry_id)
        if entry.customer_id != requester_id:
            raise NotAuthorized("not your queue entry")
        if entry.status != QueueStatus.WAITING:
            raise InvalidTransition(f"cannot leave while {entry.status.value}")
        if not self.store.entries.delete(entry_id):
            raise NotFound(f"queue entry {entry_id} not found")
        logger.info("customer %s left salon %s", requester_id, entry.salon_id)
        self._broadcast(entry.salon_id)

    def get_my_position(self, customer_id: str, salon_id: str) -> QueuePosition | None:
        return position_for_customer(self.store.entries.list_by_salon(salon_id), customer_id)

    def my_queues(self, customer_id: str) -> list[dict[str, Any]]:
        """Every entry of a customer, with its live rank where it still has one."""
        result = []
        for entry in self.store.entries.list_where(lambda e: e.customer_id == customer_id):
            salon_entries = self.store.entries.list_by_salon(entry.salon_id)
            live = live_position(salon_entries, entry)
            salon = self.store.salons.get(entry.salon_id)
            service = self.store.services.get(entry.service_id)

            msg = entry.to_message()
            msg["position"] = live.rank if live is not None else entry.position
            msg["total_in_queue"] = len(waiting_entries(salon_entries))
            msg["salon"] = salon.to_message() if salon else None
            msg["service"] = service.to_message() if service else None
            result.append(msg)
        return result

    def salon_queue(self, salon_id: str, requester_id: str) -> list[QueueEntry]:
        self._owned_salon(salon_id, requester_id)
        return self.store.entries.list_by_salon(salon_id)

    def _broadcast(self, salon_id: str) -> None:
        if self.notifier is None:
            return
        # Re-read after the write so listeners see the committed list.
        entries = [e.to_message() for e in self.store.entries.list_by_salon(salon_id)]
        self.notifier.publish(salon_id, queue_update_message(salon_id, entries))

    # -------------------- reviews & analytics --------------------

    def add_review(self, customer_id: str, salon_id: str, rating: int, comment: str | None = None) -> Review:
        self._salon(salon_id)
        if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
            raise BadRequest(f"rating must be an integer between {MIN_RATING} and {MAX_RATING}")
        review = Review(
            salon_id=salon_id,
            customer_id=customer_id,
            rating=rating,
            comment=comment,
            created_at=self._clock(),
        )
        self.store.reviews.create(review)
        self.reconcile_salon_rating(salon_id)
        return review

    def reconcile_salon_rating(self, salon_id: str) -> float:
        """Refresh the salon's cached rating from its reviews.

        Runs after the review write, not atomically with it.
        """
        rating = reconcile_rating(self.store.reviews.list_by_salon(salon_id))
        self.store.salons.update(salon_id, rating=rating)
        return rating

    def get_analytics(self, salon_id: str, requester_id: str) -> AnalyticsSnapshot:
        self._owned_salon(salon_id, requester_id)
        return compute_analytics(
            entries=self.store.entries.list_by_salon(salon_id),
            services=self.store.services.list_by_salon(salon_id),
            reviews=self.store.reviews.list_by_salon(salon_id),
            now=self._clock(),
        )


def _str_field(msg: dict[str, Any], key: str) -> str:
    value = msg.get(key)
    if not isinstance(value, str) or not value:
        raise BadRequest(f"{key} required")
    return value


def _int_field(msg: dict[str, Any], key: str) -> int:
    value = msg.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"{key} must be an integer")
    return value


def _datetime_field(msg: dict[str, Any], key: str) -> datetime:
    try:
        return datetime.fromisoformat(_str_field(msg, key))
    except ValueError as e:
        raise BadRequest(f"{key} must be an ISO timestamp") from e


def _bool_field(msg: dict[str, Any], key: str, default: bool) -> bool:
    value = msg.get(key, default)
    if not isinstance(value, bool):
        raise BadRequest(f"{key} must be true or false")
    return value


def _optional_str_field(msg: dict[str, Any], key: str) -> str | None:
    value = msg.get(key)
    if value is not None and not isinstance(value, str):
        raise BadRequest(f"{key} must be a string")
    return value


class MqttSalonQueueService:
    """MQTT adapter around the SalonQueueManager business logic."""

    def __init__(self, *, mqtt: MqttClient, namespace: str = "smartq/v1", store: Store | None = None) -> None:
        # Local imports so unit tests can import SalonQueueManager without paho-mqtt.
        from .mqtt_topics import channel_requests, queue_requests, user_updates

        self._queue_requests = queue_requests(namespace)
        self._channel_requests = channel_requests(namespace)
        self._user_updates = user_updates

        self.mqtt = mqtt
        self.namespace = namespace
        self.registry = TopicRegistry()
        self.notifier = BroadcastNotifier(registry=self.registry, deliver=self._deliver)
        self.manager = SalonQueueManager(store=store, notifier=self.notifier)

        self._requests: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
            "create_salon": self._create_salon,
            "list_salons": self._list_salons,
            "get_salon": self._get_salon,
            "update_salon": self._update_salon,
            "add_service": self._add_service,
            "create_offer": self._create_offer,
            "update_offer": self._update_offer,
            "delete_offer": self._delete_offer,
            "salon_offers": self._salon_offers,
            "list_offers": self._list_offers,
            "join_queue": self._join_queue,
            "update_status": self._update_status,
            "leave_queue": self._leave_queue,
            "my_position": self._my_position,
            "my_queues": self._my_queues,
            "salon_queue": self._salon_queue,
            "add_review": self._add_review,
            "analytics": self._analytics,
        }

    def start(self) -> None:
        self.mqtt.subscribe(self._queue_requests)
        self.mqtt.subscribe(self._channel_requests)
        self.mqtt.add_handler(self._handle_message)

    def _deliver(self, user_id: str, payload: dict[str, Any]) -> None:
        self.mqtt.publish(self._user_updates(user_id, self.namespace), payload)

    def _reply(self, reply_to: str, corr_id: str | None, message: dict[str, Any]) -> None:
        msg = dict(message)
        if corr_id is not None:
            msg["corr_id"] = corr_id
        self.mqtt.publish(reply_to, msg)

    def _handle_message(self, topic: str, msg: dict[str, Any]) -> None:
        corr_id = msg.get("corr_id") if isinstance(msg.get("corr_id"), str) else None
        reply_to = msg.get("reply_to") if isinstance(msg.get("reply_to"), str) else None

        response = self.handle(topic, msg)
        if reply_to and response is not None:
            self._reply(reply_to, corr_id, response)

    def handle(self, topic: str, msg: dict[str, Any]) -> dict[str, Any] | None:
        """Process one decoded message and return the reply (None if there is none)."""
        if topic == self._channel_requests:
            return self._handle_channel(msg)
        if topic == self._queue_requests:
            return self._handle_request(msg)
        return None

    def _handle_request(self, msg: dict[str, Any]) -> dict[str, Any]:
        mtype = msg.get("type")
        handler = self._requests.get(mtype) if isinstance(mtype, str) else None
        if handler is None:
            return ErrorResponse("bad_request", f"unknown request type {mtype!r}").to_message()
        try:
            return handler(msg)
        except QueueError as e:
            logger.info("%s rejected: %s", mtype, e.code)
            return e.to_response().to_message()

    def _handle_channel(self, msg: dict[str, Any]) -> dict[str, Any] | None:
        mtype = msg.get("type")
        user_id = msg.get("user_id")
        if not isinstance(user_id, str) or not user_id:
            logger.warning("channel message %r without user_id", mtype)
            return ErrorResponse("bad_request", "user_id required").to_message()

        if mtype == "authenticate":
            self.registry.authenticate(user_id)
            logger.info("user %s authenticated on channel", user_id)
            return {"type": "authenticated", "user_id": user_id}

        if mtype == "disconnect":
            self.registry.disconnect(user_id)
            return None

        salon_id = msg.get("salon_id")
        if not isinstance(salon_id, str) or not salon_id:
            return ErrorResponse("bad_request", "salon_id required").to_message()

        if mtype == "subscribe":
            if self.manager.store.salons.get(salon_id) is None:
                return NotFound(f"salon {salon_id} not found").to_response().to_message()
            try:
                self.registry.subscribe(salon_id, user_id)
            except NotAuthenticated:
                return ErrorResponse("not_authenticated", "authenticate first").to_message()
            logger.info("user %s subscribed to salon %s", user_id, salon_id)
            return {"type": "subscribed", "salon_id": salon_id}

        if mtype == "unsubscribe":
            self.registry.unsubscribe(salon_id, user_id)
            return {"type": "unsubscribed", "salon_id": salon_id}

        return ErrorResponse("bad_request", f"unknown channel message {mtype!r}").to_message()

    # -------- request handlers --------
    # Identity fields (`user_id`, `role`) are filled in by the auth layer.

    def _caller(self, msg: dict[str, Any]) -> Caller:
        return Caller(user_id=_str_field(msg, "user_id"), role=parse_role(msg.get("role", Role.CUSTOMER.value)))

    def _create_salon(self, msg: dict[str, Any]) -> dict[str, Any]:
        salon = self.manager.create_salon(
            self._caller(msg),
            name=_str_field(msg, "name"),
            location=_str_field(msg, "location"),
            description=msg.get("description"),
        )
        return {"type": "salon", "salon": salon.to_message()}

    def _list_salons(self, msg: dict[str, Any]) -> dict[str, Any]:
        location = msg.get("location")
        return {"type": "salons", "salons": self.manager.list_salons(location if isinstance(location, str) else None)}

    def _get_salon(self, msg: dict[str, Any]) -> dict[str, Any]:
        return {"type": "salon", "salon": self.manager.get_salon(_str_field(msg, "salon_id"))}

    def _update_salon(self, msg: dict[str, Any]) -> dict[str, Any]:
        patch: dict[str, Any] = {}
        for key in ("name", "location"):
            if key in msg:
                patch[key] = _str_field(msg, key)
        if "description" in msg:
            patch["description"] = _optional_str_field(msg, "description")
        salon = self.manager.update_salon(self._caller(msg).user_id, _str_field(msg, "salon_id"), **patch)
        return {"type": "salon", "salon": salon.to_message()}

    def _add_service(self, msg: dict[str, Any]) -> dict[str, Any]:
        service = self.manager.add_service(
            self._caller(msg).user_id,
            _str_field(msg, "salon_id"),
            name=_str_field(msg, "name"),
            duration=_int_field(msg, "duration"),
            price=msg.get("price"),
            description=msg.get("description"),
        )
        return {"type": "service", "service": service.to_message()}

    def _create_offer(self, msg: dict[str, Any]) -> dict[str, Any]:
        offer = self.manager.create_offer(
            self._caller(msg).user_id,
            _str_field(msg, "salon_id"),
            title=_str_field(msg, "title"),
            discount=msg.get("discount"),
            valid_until=_datetime_field(msg, "valid_until"),
            description=str(msg.get("description") or ""),
            is_active=_bool_field(msg, "is_active", True),
        )
        return {"type": "offer", "offer": offer.to_message()}

    def _update_offer(self, msg: dict[str, Any]) -> dict[str, Any]:
        patch: dict[str, Any] = {}
        if "title" in msg:
            patch["title"] = _str_field(msg, "title")
        if "description" in msg:
            patch["description"] = _optional_str_field(msg, "description") or ""
        if "discount" in msg:
            patch["discount"] = msg["discount"]
        if "valid_until" in msg:
            patch["valid_until"] = _datetime_field(msg, "valid_until")
        if "is_active" in msg:
            patch["is_active"] = _bool_field(msg, "is_active", True)
        offer = self.manager.update_offer(self._caller(msg).user_id, _str_field(msg, "offer_id"), **patch)
        return {"type": "offer", "offer": offer.to_message()}

    def _delete_offer(self, msg: dict[str, Any]) -> dict[str, Any]:
        offer_id = _str_field(msg, "offer_id")
        self.manager.delete_offer(self._caller(msg).user_id, offer_id)
        return {"type": "offer_deleted", "offer_id": offer_id}

    def _list_offers(self, msg: dict[str, Any]) -> dict[str, Any]:
        return {"type": "offers", "offers": [o.to_message() for o in self.manager.list_active_offers()]}

    def _salon_offers(self, msg: dict[str, Any]) -> dict[str, Any]:
        offers = self.manager.salon_offers(_str_field(msg, "salon_id"), self._caller(msg).user_id)
        return {"type": "offers", "offers": [o.to_message() for o in offers]}

    def _join_queue(self, msg: dict[str, Any]) -> dict[str, Any]:
        entry = self.manager.join_queue(
            self._caller(msg).user_id,
            _str_field(msg, "salon_id"),
            _str_field(msg, "service_id"),
        )
        return {"type": "joined", "entry": entry.to_message()}

    def _update_status(self, msg: dict[str, Any]) -> dict[str, Any]:
        caller = self._caller(msg)
        entry = self.manager.update_status(
            _str_field(msg, "entry_id"),
            caller.user_id,
            caller.role,
            _str_field(msg, "status"),
        )
        return {"type": "entry", "entry": entry.to_message()}

    def _leave_queue(self, msg: dict[str, Any]) -> dict[str, Any]:
        entry_id = _str_field(msg, "entry_id")
        self.manager.leave_queue(entry_id, self._caller(msg).user_id)
        return {"type": "left", "entry_id": entry_id}

    def _my_position(self, msg: dict[str, Any]) -> dict[str, Any]:
        salon_id = _str_field(msg, "salon_id")
        pos = self.manager.get_my_position(self._caller(msg).user_id, salon_id)
        return {"type": "position", "salon_id": salon_id, "position": pos.to_message() if pos else None}

    def _my_queues(self, msg: dict[str, Any]) -> dict[str, Any]:
        return {"type": "queues", "queues": self.manager.my_queues(self._caller(msg).user_id)}

    def _salon_queue(self, msg: dict[str, Any]) -> dict[str, Any]:
        entries = self.manager.salon_queue(_str_field(msg, "salon_id"), self._caller(msg).user_id)
        return {"type": "queues", "queues": [e.to_message() for e in entries]}

    def _add_review(self, msg: dict[str, Any]) -> dict[str, Any]:
        comment = msg.get("comment")
        review = self.manager.add_review(
            self._caller(msg).user_id,
            _str_field(msg, "salon_id"),
            _int_field(msg, "rating"),
            comment if isinstance(comment, str) else None,
        )
        return {"type": "review", "review": review.to_message()}

    def _analytics(self, msg: dict[str, Any]) -> dict[str, Any]:
        snapshot = self.manager.get_analytics(_str_field(msg, "salon_id"), self._caller(msg).user_id)
        return {"type": "analytics", "analytics": snapshot.to_message()}


def main() -> None:
    # Import MQTT dependencies only when running the real service.
    from .config import add_mqtt_args, configure_logging
    from .mqtt_client import MqttClient

    parser = argparse.ArgumentParser(description="SmartQ salon queue server (MQTT)")
    add_mqtt_args(parser)
    args = parser.parse_args()
    configure_logging(args.log_level)

    mqtt_client = MqttClient(client_id="smartq-server", host=args.mqtt_host, port=args.mqtt_port)
    mqtt_client.start()

    service = MqttSalonQueueService(mqtt=mqtt_client, namespace=args.namespace)
    service.start()

    print(f"[smartq-server] connected to MQTT {args.mqtt_host}:{args.mqtt_port}, namespace={args.namespace}")

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        mqtt_client.stop()


if __name__ == "__main__":
    main()
