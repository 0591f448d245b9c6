"""Exceptions raised by the engagement engine and its storage layer."""


class MindspaceError(Exception):
    """Base class for every error raised by mindspace."""


class OrderingError(MindspaceError, ValueError):
    """A mood event is dated before the last recorded event."""

    def __init__(self, event_date, last_event_date):
        super().__init__(
            f"event on {event_date.isoformat()} is before last recorded event on "
            f"{last_event_date.isoformat()}"
        )
        self.event_date = event_date
        self.last_event_date = last_event_date


class ConfigurationError(MindspaceError):
    """A breathing pattern or score band table is unusable."""


class PersistenceError(MindspaceError):
    """The storage layer failed to read or write a record."""


class StaleStreakError(PersistenceError):
    """The stored streak changed between read and write."""


class MoodNotFoundError(MindspaceError, LookupError):
    """No mood log with that id belongs to the user."""

    def __init__(self, user_id, mood_id):
        super().__init__(f"mood log {mood_id} not found for {user_id}")
        self.user_id = user_id
        self.mood_id = mood_id
