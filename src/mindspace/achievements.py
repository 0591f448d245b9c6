"""Badges earned from mood logging and streaks."""
from mindspace.models import Achievement

ACHIEVEMENTS = (
    Achievement("first-mood", "First Step", "Log your first mood entry", "mood", 1),
    Achievement("mood-week", "Week Warrior", "Log moods for 7 days", "mood", 7),
    Achievement("mood-month", "Monthly Master", "Log moods for 30 days", "mood", 30),
    Achievement("streak-3", "Getting Started", "Maintain a 3-day streak", "streak", 3),
    Achievement("streak-7", "Week Champion", "Maintain a 7-day streak", "streak", 7),
    Achievement("streak-30", "Consistency King", "Maintain a 30-day streak", "streak", 30),
)

_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> Achievement:
    return _BY_ID[achievement_id]


def earned_achievements(total_mood_logs: int, streak_count: int) -> list[str]:
    """Ids of every achievement the given totals satisfy, in catalog order."""
    progress = {"mood": total_mood_logs, "streak": streak_count}
    return [a.id for a in ACHIEVEMENTS if progress[a.category] >= a.requirement]
