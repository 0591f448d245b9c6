# tests/test_streak.py
from datetime import date, datetime, timedelta

import pytest

from mindspace.errors import OrderingError
from mindspace.models import StreakState
from mindspace.streak import (
    MILESTONES, record_event, next_milestone, get_streak_message, get_streak_color, today,
)

DAY_1 = date(2025, 3, 1)


def _run(days, user_id="ana"):
    """Feed events for the given calendar days, returning every update."""
    state = None
    updates = []
    for day in days:
        update = record_event(state, day, user_id=user_id)
        updates.append(update)
        state = update.new_state
    return updates


def test_first_event_starts_streak_at_one():
    update = record_event(None, DAY_1, user_id="ana")
    assert update.new_state == StreakState("ana", 1, DAY_1, 1)
    assert update.milestone_crossed is False


def test_first_event_requires_user_id():
    with pytest.raises(ValueError):
        record_event(None, DAY_1)


def test_consecutive_days_count_up():
    """N events on N consecutive days give a streak of exactly N."""
    for n in (1, 2, 5, 31, 120):
        days = [DAY_1 + timedelta(days=i) for i in range(n)]
        assert _run(days)[-1].new_state.current_count == n


def test_same_day_repeat_is_noop():
    prior = StreakState("ana", 4, DAY_1, 9)
    state = prior
    for _ in range(5):
        update = record_event(state, DAY_1)
        assert update.new_state == prior
        assert update.milestone_crossed is False
        state = update.new_state


def test_gap_resets_to_one():
    prior = StreakState("ana", 12, DAY_1, 12)
    for gap in (2, 3, 40):
        update = record_event(prior, DAY_1 + timedelta(days=gap))
        assert update.new_state.current_count == 1
        assert update.new_state.last_event_date == DAY_1 + timedelta(days=gap)


def test_reset_keeps_longest_count():
    prior = StreakState("ana", 12, DAY_1, 12)
    update = record_event(prior, DAY_1 + timedelta(days=5))
    assert update.new_state.longest_count == 12


def test_skip_a_day_scenario():
    """Day 1 and 2 make a streak of 2; skipping day 3 resets on day 4."""
    updates = _run([DAY_1, DAY_1 + timedelta(days=1)])
    assert updates[-1].new_state.current_count == 2
    update = record_event(updates[-1].new_state, DAY_1 + timedelta(days=3))
    assert update.new_state.current_count == 1


def test_out_of_order_event_raises():
    prior = StreakState("ana", 3, DAY_1, 3)
    with pytest.raises(OrderingError) as exc:
        record_event(prior, DAY_1 - timedelta(days=1))
    assert exc.value.last_event_date == DAY_1
    assert prior.current_count == 3


def test_ordering_error_is_value_error():
    with pytest.raises(ValueError):
        record_event(StreakState("ana", 1, DAY_1, 1), DAY_1 - timedelta(days=3))


def test_datetime_reduced_to_calendar_day():
    prior = StreakState("ana", 2, DAY_1, 2)
    late_same_day = datetime(2025, 3, 1, 23, 59)
    assert record_event(prior, late_same_day).new_state == prior
    next_morning = datetime(2025, 3, 2, 0, 1)
    assert record_event(prior, next_morning).new_state.current_count == 3


def test_milestones_fire_once_each():
    days = [DAY_1 + timedelta(days=i) for i in range(100)]
    updates = _run(days)
    crossed = [u.milestone for u in updates if u.milestone_crossed]
    assert crossed == list(MILESTONES)


def test_milestone_not_fired_on_same_day_repeat():
    updates = _run([DAY_1, DAY_1 + timedelta(days=1), DAY_1 + timedelta(days=2)])
    assert updates[-1].milestone_crossed is True
    again = record_event(updates[-1].new_state, DAY_1 + timedelta(days=2))
    assert again.milestone_crossed is False
    assert again.milestone is None


def test_milestone_fires_again_on_new_run():
    updates = _run([DAY_1 + timedelta(days=i) for i in range(4)])
    assert updates[2].milestone == 3
    state = updates[-1].new_state
    assert state.current_count == 4

    restart = DAY_1 + timedelta(days=10)
    crossed = []
    for i in range(3):
        update = record_event(state, restart + timedelta(days=i))
        if update.milestone_crossed:
            crossed.append(update.milestone)
        state = update.new_state
    assert crossed == [3]
    assert state.current_count == 3
    assert state.longest_count == 4


def test_next_milestone():
    assert next_milestone(0) == 3
    assert next_milestone(3) == 7
    assert next_milestone(29) == 30
    assert next_milestone(100) is None


def test_streak_messages():
    assert get_streak_message(7) == "Fantastic! One week of consistent self-care."
    assert get_streak_message(5) == "Keep it up! You're doing great."
    assert get_streak_message(20) == "Excellent consistency! You're on fire."
    assert get_streak_message(150) == "You're a true mental health warrior! Keep going!"


def test_streak_color_bands():
    assert get_streak_color(1) == "orange3"
    assert get_streak_color(10) == "red"
    assert get_streak_color(99) == "purple"
    assert get_streak_color(100) == "blue"


def test_today_uses_given_clock():
    assert today(lambda: datetime(2025, 6, 1, 23, 30)) == date(2025, 6, 1)
