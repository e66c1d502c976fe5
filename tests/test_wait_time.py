import pytest

from smartq.wait_time import duration_based_wait_minutes, estimated_wait_minutes


def test_estimated_wait_minutes():
    assert estimated_wait_minutes(waiting_count=0) == 0
    assert estimated_wait_minutes(waiting_count=3) == 45
    assert estimated_wait_minutes(waiting_count=2, minutes_per_customer=20) == 40


def test_estimated_wait_minutes_rejects_negative():
    with pytest.raises(ValueError):
        estimated_wait_minutes(waiting_count=-1)


def test_duration_based_wait_minutes():
    assert duration_based_wait_minutes([30, None, 45]) == 90
    assert duration_based_wait_minutes([]) == 0
    with pytest.raises(ValueError):
        duration_based_wait_minutes([-5])
