"""Daily mood-log streak tracking."""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from mindspace.errors import OrderingError
from mindspace.models import StreakState

MILESTONES = (3, 7, 14, 30, 60, 100)


@dataclass(frozen=True)
class StreakUpdate:
    new_state: StreakState
    milestone_crossed: bool = False
    milestone: Optional[int] = None


def today(clock: Optional[Callable[[], datetime]] = None) -> date:
    """Calendar day of the server's local wall clock (midnight to midnight)."""
    now = clock() if clock else datetime.now()
    return now.date()


def _as_day(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def record_event(
    prior_state: Optional[StreakState],
    event_date: date,
    user_id: Optional[str] = None,
) -> StreakUpdate:
    """Fold one mood event into the streak.

    Args:
        prior_state: Stored streak, or None if the user never logged a mood.
        event_date: Calendar day the event belongs to. The caller decides
            which clock defines the day.
        user_id: Owner of the streak; required when prior_state is None.

    Returns:
        StreakUpdate with the new state and whether a milestone was crossed.

    Raises:
        OrderingError: event_date is before prior_state.last_event_date.
    """
    event_date = _as_day(event_date)

    if prior_state is None:
        if user_id is None:
            raise ValueError("user_id is required for a first event")
        new_state = StreakState(
            user_id=user_id, current_count=1, last_event_date=event_date, longest_count=1,
        )
        return _with_milestone(0, new_state)

    gap = (event_date - prior_state.last_event_date).days
    if gap < 0:
        raise OrderingError(event_date, prior_state.last_event_date)
    if gap == 0:
        # Same day: logging again never moves the streak
        return StreakUpdate(new_state=prior_state)

    if gap == 1:
        new_count = prior_state.current_count + 1
    else:
        new_count = 1
    new_state = StreakState(
        user_id=prior_state.user_id,
        current_count=new_count,
        last_event_date=event_date,
        longest_count=max(prior_state.longest_count, new_count),
    )
    return _with_milestone(prior_state.current_count, new_state)


def _with_milestone(previous_count: int, new_state: StreakState) -> StreakUpdate:
    count = new_state.current_count
    if count in MILESTONES and previous_count < count:
        return StreakUpdate(new_state=new_state, milestone_crossed=True, milestone=count)
    return StreakUpdate(new_state=new_state)


def next_milestone(count: int) -> Optional[int]:
    for milestone in MILESTONES:
        if milestone > count:
            return milestone
    return None


def get_streak_message(count: int) -> str:
    messages = {
        1: "Great start! You've begun your journey.",
        3: "Amazing! You're building a healthy habit.",
        7: "Fantastic! One week of consistent self-care.",
        14: "Incredible! Two weeks of dedication.",
        30: "Outstanding! A full month of mental health care.",
        60: "Phenomenal! Two months of consistency.",
        100: "Legendary! 100 days of self-care mastery.",
    }
    if count in messages:
        return messages[count]
    if count < 1:
        return "Log your mood today to start a streak."
    elif count < 7:
        return "Keep it up! You're doing great."
    elif count < 30:
        return "Excellent consistency! You're on fire."
    elif count < 100:
        return "Incredible dedication! You're a mental health champion."
    return "You're a true mental health warrior! Keep going!"


def get_streak_color(count: int) -> str:
    if count < 3:
        return "orange3"
    elif count < 7:
        return "dark_orange"
    elif count < 30:
        return "red"
    elif count < 100:
        return "purple"
    return "blue"
