from __future__ import annotations

# Per-salon fan-out of queue updates.
#
# Two layers, like the manager:
# 1) `TopicRegistry` - who listens to which salon (pure bookkeeping)
# 2) `BroadcastNotifier` - pushes one payload to every listener of a salon
#
# Delivery is best-effort and at-most-once: no acks, no retries, nothing is
# kept for listeners that show up later (they re-fetch through a request).

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Called with (user_id, payload). May raise; the notifier skips that recipient.
Deliver = Callable[[str, dict[str, Any]], None]


class NotAuthenticated(Exception):
    pass


class TopicRegistry:
    """Subscriber sets keyed by salon id, members keyed by user identity.

    A user must complete the `authenticate` handshake before subscribing.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._authenticated: set[str] = set()
        self._topics: dict[str, set[str]] = {}

    def authenticate(self, user_id: str) -> None:
        with self._lock:
            self._authenticated.add(user_id)

    def is_authenticated(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._authenticated

    def subscribe(self, salon_id: str, user_id: str) -> None:
        with self._lock:
            if user_id not in self._authenticated:
                raise NotAuthenticated(user_id)
            self._topics.setdefault(salon_id, set()).add(user_id)

    def unsubscribe(self, salon_id: str, user_id: str) -> None:
        with self._lock:
            members = self._topics.get(salon_id)
            if not members:
                return
            members.discard(user_id)
            if not members:
                del self._topics[salon_id]

    def disconnect(self, user_id: str) -> None:
        """Forget a user entirely (connection closed)."""
        with self._lock:
            self._authenticated.discard(user_id)
            for salon_id in list(self._topics):
                members = self._topics[salon_id]
                members.discard(user_id)
                if not members:
                    del self._topics[salon_id]

    def subscribers(self, salon_id: str) -> list[str]:
        """Snapshot of a salon's subscribers, in a stable order."""
        with self._lock:
            return sorted(self._topics.get(salon_id, ()))


class BroadcastNotifier:
    def __init__(self, *, registry: TopicRegistry, deliver: Deliver) -> None:
        self.registry = registry
        self._deliver = deliver

    def publish(self, salon_id: str, payload: dict[str, Any]) -> int:
        """Send `payload` to every subscriber of `salon_id`.

        Returns how many deliveries went through. Failures are logged and
        skipped; they never propagate to the caller.
        """
        delivered = 0
        recipients = self.registry.subscribers(salon_id)
        for user_id in recipients:
            try:
                self._deliver(user_id, payload)
            except Exception:
                logger.warning("dropping queue update for %s (salon %s)", user_id, salon_id, exc_info=True)
                continue
            delivered += 1
        logger.debug("salon %s update delivered to %d/%d subscribers", salon_id, delivered, len(recipients))
        return delivered


def queue_update_message(salon_id: str, entries: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": "queue_update", "salon_id": salon_id, "data": {"queues": entries}}
