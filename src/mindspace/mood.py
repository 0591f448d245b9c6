"""Mood logging and the streak it drives."""
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from mindspace.achievements import earned_achievements
from mindspace.db import (
    add_badges, count_mood_events, delete_mood_event, find_streak_state, get_mood_events,
    insert_mood_event, read_mood_event, read_streak, transaction, update_mood_event, write_streak,
)
from mindspace.errors import MoodNotFoundError, OrderingError
from mindspace.models import MOOD_LABELS, MoodEvent
from mindspace.streak import record_event, today

logger = logging.getLogger(__name__)

MAX_NOTE_LENGTH = 500


def build_mood_event(
    user_id: str,
    score: int,
    note: str = "",
    tags=(),
    label: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> MoodEvent:
    if score not in MOOD_LABELS:
        raise ValueError(f"mood score must be between 1 and 5, got {score!r}")
    expected = MOOD_LABELS[score]
    if label is not None and label != expected:
        raise ValueError(f"label {label!r} does not match score {score} ({expected})")
    note = (note or "").strip()
    if len(note) > MAX_NOTE_LENGTH:
        raise ValueError(f"note is longer than {MAX_NOTE_LENGTH} characters")
    return MoodEvent(
        user_id=user_id,
        timestamp=timestamp or datetime.now(),
        score=score,
        label=expected,
        note=note,
        tags=tuple(t.strip() for t in tags if t.strip()),
    )


def log_mood(
    db_path: str,
    user_id: str,
    score: int,
    note: str = "",
    tags=(),
    label: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    """Store a mood event and fold it into the user's streak.

    The insert, the streak read and the streak write share one transaction:
    either all of them land or none do, and a second submission from the
    same user waits for the first to finish.

    Returns:
        Dict with mood_id, streak_count, longest_streak, milestone_crossed,
        milestone and new_badges.
    """
    event = build_mood_event(user_id, score, note, tags, label, now)
    with transaction(db_path) as conn:
        mood_id = insert_mood_event(conn, event)
        prior = read_streak(conn, user_id)
        try:
            update = record_event(prior, event.timestamp.date(), user_id=user_id)
        except OrderingError:
            logger.warning("Rejected out-of-order mood event for %s", user_id)
            raise
        if update.new_state != prior:
            write_streak(conn, update.new_state, prior.last_event_date if prior else None)
        earned = earned_achievements(count_mood_events(conn, user_id), update.new_state.current_count)
        new_badges = add_badges(conn, user_id, earned, event.timestamp)

    state = update.new_state
    if prior is None or state.current_count > prior.current_count:
        logger.info("Streak for %s is now %d", user_id, state.current_count)
    elif state.current_count < prior.current_count:
        logger.info("Streak for %s reset after %d days", user_id, prior.current_count)
    if update.milestone_crossed:
        logger.info("%s reached a %d-day streak", user_id, update.milestone)
    for badge in new_badges:
        logger.info("%s unlocked %s", user_id, badge)
    return {
        "mood_id": mood_id,
        "streak_count": state.current_count,
        "longest_streak": state.longest_count,
        "milestone_crossed": update.milestone_crossed,
        "milestone": update.milestone,
        "new_badges": new_badges,
    }


def edit_mood(
    db_path: str,
    user_id: str,
    mood_id: int,
    score: Optional[int] = None,
    note: Optional[str] = None,
    tags=None,
    now: Optional[datetime] = None,
) -> MoodEvent:
    """Change the score, note or tags of one of the user's mood logs.

    Fields left as None keep their stored value. The log keeps its
    original timestamp and the streak is not recomputed.

    Raises:
        MoodNotFoundError: no log with ``mood_id`` belongs to ``user_id``.
    """
    with transaction(db_path) as conn:
        current = read_mood_event(conn, user_id, mood_id)
        if current is None:
            raise MoodNotFoundError(user_id, mood_id)
        edited = build_mood_event(
            user_id,
            current.score if score is None else score,
            current.note if note is None else note,
            current.tags if tags is None else tags,
            timestamp=current.timestamp,
        )
        update_mood_event(conn, user_id, mood_id, edited, now or datetime.now())
    logger.info("Edited mood log %d for %s", mood_id, user_id)
    return replace(edited, id=mood_id)


def delete_mood(db_path: str, user_id: str, mood_id: int) -> None:
    """Remove one of the user's mood logs. The streak is left as it is."""
    with transaction(db_path) as conn:
        if not delete_mood_event(conn, user_id, mood_id):
            raise MoodNotFoundError(user_id, mood_id)
    logger.info("Deleted mood log %d for %s", mood_id, user_id)


def get_current_streak(db_path: str, user_id: str, on: Optional[date] = None) -> int:
    """Streak as it stands on ``on``: 0 once a full day has been missed."""
    state = find_streak_state(db_path, user_id)
    if state is None:
        return 0
    on = on or today()
    if state.last_event_date < on - timedelta(days=1):
        return 0
    return state.current_count


def get_longest_streak(db_path: str, user_id: str) -> int:
    state = find_streak_state(db_path, user_id)
    return state.longest_count if state else 0


def get_mood_history(db_path: str, user_id: str, days: int = 30, limit: int = 30) -> list[MoodEvent]:
    return get_mood_events(db_path, user_id, days=days, limit=limit)


def get_mood_summary(db_path: str, user_id: str, days: int = 30) -> dict:
    """Count and average score over the last ``days`` days."""
    events = get_mood_events(db_path, user_id, days=days, limit=10_000)
    if not events:
        return {"entries": 0, "average": 0.0, "days_logged": 0}
    return {
        "entries": len(events),
        "average": round(sum(e.score for e in events) / len(events), 1),
        "days_logged": len({e.timestamp.date() for e in events}),
    }
