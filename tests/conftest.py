from datetime import datetime, timedelta

import pytest

from smartq.broadcast import BroadcastNotifier, TopicRegistry
from smartq.manager import SalonQueueManager
from smartq.models import Caller, Role


class FakeClock:
    """Starts at 09:00 and moves five minutes forward on every read."""

    def __init__(self, start=datetime(2024, 5, 6, 9, 0), step=timedelta(minutes=5)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


class RecordingDeliver:
    def __init__(self):
        self.sent = []

    def __call__(self, user_id, payload):
        self.sent.append((user_id, payload))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sent():
    return RecordingDeliver()


@pytest.fixture
def manager(clock, sent):
    notifier = BroadcastNotifier(registry=TopicRegistry(), deliver=sent)
    return SalonQueueManager(notifier=notifier, clock=clock)


@pytest.fixture
def salon(manager):
    return manager.create_salon(Caller("owner-1", Role.SALON_OWNER), name="Cut&Go", location="Pune, MH")


@pytest.fixture
def haircut(manager, salon):
    return manager.add_service("owner-1", salon.id, name="Haircut", duration=30, price="25.00")
