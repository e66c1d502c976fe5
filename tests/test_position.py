from datetime import datetime

from smartq.models import QueueEntry, QueueStatus
from smartq.position import live_position, position_for_customer, rank_waiting, salon_wait_minutes


def _entry(customer, minute, status=QueueStatus.WAITING, ticket=1):
    return QueueEntry(
        salon_id="S",
        customer_id=customer,
        service_id="SV",
        position=ticket,
        status=status,
        timestamp=datetime(2024, 5, 6, 9, minute),
    )


def test_ranks_are_contiguous_in_timestamp_order():
    # Store order differs from creation time; tickets are deliberately misleading.
    entries = [
        _entry("C", 10, ticket=1),
        _entry("A", 0, ticket=3),
        _entry("X", 2, status=QueueStatus.COMPLETED),
        _entry("B", 5, ticket=3),
    ]
    ranks = rank_waiting(entries)
    by_customer = {e.customer_id: ranks[e.id] for e in entries if e.id in ranks}
    assert by_customer == {"A": 1, "B": 2, "C": 3}
    assert sorted(ranks.values()) == [1, 2, 3]


def test_equal_timestamps_keep_store_order():
    first = _entry("A", 0)
    second = _entry("B", 0)
    ranks = rank_waiting([first, second])
    assert ranks[first.id] == 1
    assert ranks[second.id] == 2


def test_in_progress_customer_reports_rank_zero():
    a = _entry("A", 0, status=QueueStatus.IN_PROGRESS)
    b = _entry("B", 5)
    pos = position_for_customer([a, b], "A")
    assert (pos.rank, pos.waiting_count) == (0, 1)
    pos = position_for_customer([a, b], "B")
    assert (pos.rank, pos.waiting_count) == (1, 1)


def test_finished_entries_have_no_position():
    done = _entry("A", 0, status=QueueStatus.NO_SHOW)
    assert live_position([done], done) is None
    assert position_for_customer([done], "A") is None
    assert position_for_customer([], "A") is None


def test_empty_salon():
    assert rank_waiting([]) == {}
    assert salon_wait_minutes([]) == 0


def test_salon_wait_is_fifteen_minutes_per_waiting_customer():
    entries = [_entry("A", 0), _entry("B", 1), _entry("C", 2, status=QueueStatus.IN_PROGRESS)]
    assert salon_wait_minutes(entries) == 30
