from __future__ import annotations

# Wait-time helpers.
#
# Policy in use everywhere:
#   estimated_wait_minutes = waiting_count * MINUTES_PER_CUSTOMER
#
# The duration-based variant sums the actual service durations of the people
# ahead. It is not wired into any operation; it exists so the two estimates
# can be compared.

from typing import Iterable

MINUTES_PER_CUSTOMER = 15


def estimated_wait_minutes(*, waiting_count: int, minutes_per_customer: int = MINUTES_PER_CUSTOMER) -> int:
    """Wait for a newcomer when `waiting_count` customers are ahead.

    Args:
        waiting_count: customers currently waiting (>= 0).
        minutes_per_customer: assumed service time per customer (>= 0).
    """
    if waiting_count < 0:
        raise ValueError("waiting_count must be >= 0")
    if minutes_per_customer < 0:
        raise ValueError("minutes_per_customer must be >= 0")

    return waiting_count * minutes_per_customer


def duration_based_wait_minutes(durations: Iterable[int | None]) -> int:
    """Sum of the service durations ahead; unknown durations count as the policy constant."""
    total = 0
    for d in durations:
        if d is None:
            total += MINUTES_PER_CUSTOMER
        elif d < 0:
            raise ValueError("duration must be >= 0")
        else:
            total += d
    return total
