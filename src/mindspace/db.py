"""Database initialization, connection management, and record storage."""
import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

from mindspace.errors import PersistenceError, StaleStreakError
from mindspace.models import AssessmentResult, MoodEvent, StreakState

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = os.environ.get(
    "MINDSPACE_DB", str(Path.home() / ".mindspace" / "mindspace.db")
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS mood_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    score INTEGER NOT NULL CHECK (score BETWEEN 1 AND 5),
    label TEXT NOT NULL,
    note TEXT,
    tags TEXT DEFAULT '[]',
    created_at TEXT NOT NULL,
    updated_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_mood_logs_user ON mood_logs (user_id, created_at);

CREATE TABLE IF NOT EXISTS streaks (
    user_id TEXT PRIMARY KEY,
    current_count INTEGER NOT NULL DEFAULT 0,
    last_event_date TEXT NOT NULL,
    longest_count INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS assessment_results (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    total_score INTEGER NOT NULL,
    max_score INTEGER NOT NULL,
    level TEXT NOT NULL,
    answers TEXT DEFAULT '[]',
    completed_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS badges (
    user_id TEXT NOT NULL,
    badge TEXT NOT NULL,
    unlocked_at TEXT NOT NULL,
    PRIMARY KEY (user_id, badge)
);

CREATE TABLE IF NOT EXISTS user_settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    key TEXT NOT NULL UNIQUE,
    value TEXT
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


@contextmanager
def transaction(db_path: str):
    """Yield a connection holding the database write lock.

    ``BEGIN IMMEDIATE`` serializes writers, so a read-compute-write inside
    the block can't interleave with another one. Everything is rolled back
    if the block raises.
    """
    conn = get_connection(db_path)
    try:
        conn.execute("BEGIN IMMEDIATE")
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise PersistenceError(str(e)) from e
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


# -- streaks -------------------------------------------------------------


def _row_to_streak(row) -> StreakState:
    return StreakState(
        user_id=row["user_id"],
        current_count=row["current_count"],
        last_event_date=date.fromisoformat(row["last_event_date"]),
        longest_count=row["longest_count"],
    )


def read_streak(conn: sqlite3.Connection, user_id: str) -> Optional[StreakState]:
    row = conn.execute("SELECT * FROM streaks WHERE user_id = ?", (user_id,)).fetchone()
    return _row_to_streak(row) if row else None


def write_streak(
    conn: sqlite3.Connection, state: StreakState, expected_last_date: Optional[date]
) -> None:
    """Compare-and-swap the streak row on its last_event_date.

    ``expected_last_date`` is the date that was read before computing
    ``state``; None means no row existed. Raises StaleStreakError when the
    stored row no longer matches.
    """
    values = (state.current_count, state.last_event_date.isoformat(), state.longest_count)
    if expected_last_date is None:
        try:
            conn.execute(
                "INSERT INTO streaks (current_count, last_event_date, longest_count, user_id) VALUES (?, ?, ?, ?)",
                values + (state.user_id,),
            )
        except sqlite3.IntegrityError as e:
            logger.warning("Streak for %s was created by another writer", state.user_id)
            raise StaleStreakError(f"streak for {state.user_id} was created concurrently") from e
        return
    cursor = conn.execute(
        """UPDATE streaks SET current_count = ?, last_event_date = ?, longest_count = ?
        WHERE user_id = ? AND last_event_date = ?""",
        values + (state.user_id, expected_last_date.isoformat()),
    )
    if cursor.rowcount == 0:
        logger.warning("Stale streak write for %s", state.user_id)
        raise StaleStreakError(
            f"streak for {state.user_id} changed since {expected_last_date.isoformat()}"
        )


def find_streak_state(db_path: str, user_id: str) -> Optional[StreakState]:
    conn = get_connection(db_path)
    try:
        return read_streak(conn, user_id)
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()


def save_streak_state(
    db_path: str, state: StreakState, expected_last_date: Optional[date] = None
) -> None:
    with transaction(db_path) as conn:
        write_streak(conn, state, expected_last_date)


# -- mood logs -----------------------------------------------------------


def _row_to_mood(row) -> MoodEvent:
    return MoodEvent(
        id=row["id"],
        user_id=row["user_id"],
        timestamp=datetime.fromisoformat(row["created_at"]),
        score=row["score"],
        label=row["label"],
        note=row["note"] or "",
        tags=tuple(json.loads(row["tags"] or "[]")),
    )


def insert_mood_event(conn: sqlite3.Connection, event: MoodEvent) -> int:
    cursor = conn.execute(
        "INSERT INTO mood_logs (user_id, score, label, note, tags, created_at) VALUES (?, ?, ?, ?, ?, ?)",
        (
            event.user_id, event.score, event.label, event.note,
            json.dumps(list(event.tags)), event.timestamp.isoformat(),
        ),
    )
    return cursor.lastrowid


def read_mood_event(conn: sqlite3.Connection, user_id: str, mood_id: int) -> Optional[MoodEvent]:
    row = conn.execute(
        "SELECT * FROM mood_logs WHERE id = ? AND user_id = ?", (mood_id, user_id)
    ).fetchone()
    return _row_to_mood(row) if row else None


def update_mood_event(
    conn: sqlite3.Connection, user_id: str, mood_id: int, event: MoodEvent, updated_at: datetime
) -> bool:
    """Overwrite score, label, note and tags of one of the user's logs.

    Returns False when no log with that id belongs to ``user_id``.
    """
    cursor = conn.execute(
        """UPDATE mood_logs SET score = ?, label = ?, note = ?, tags = ?, updated_at = ?
        WHERE id = ? AND user_id = ?""",
        (
            event.score, event.label, event.note, json.dumps(list(event.tags)),
            updated_at.isoformat(), mood_id, user_id,
        ),
    )
    return cursor.rowcount > 0


def delete_mood_event(conn: sqlite3.Connection, user_id: str, mood_id: int) -> bool:
    cursor = conn.execute(
        "DELETE FROM mood_logs WHERE id = ? AND user_id = ?", (mood_id, user_id)
    )
    return cursor.rowcount > 0


def count_mood_events(conn: sqlite3.Connection, user_id: str) -> int:
    row = conn.execute("SELECT COUNT(*) FROM mood_logs WHERE user_id = ?", (user_id,)).fetchone()
    return row[0]


def get_mood_events(
    db_path: str, user_id: str, days: int = 30, limit: int = 30, now: Optional[datetime] = None
) -> list[MoodEvent]:
    """Most recent mood events first, within the last ``days`` days."""
    since = (now or datetime.now()) - timedelta(days=days)
    conn = get_connection(db_path)
    try:
        rows = conn.execute(
            """SELECT * FROM mood_logs
            WHERE user_id = ? AND created_at >= ?
            ORDER BY created_at DESC, id DESC
            LIMIT ?""",
            (user_id, since.isoformat(), limit),
        ).fetchall()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()
    return [_row_to_mood(r) for r in rows]


# -- badges --------------------------------------------------------------


def add_badges(
    conn: sqlite3.Connection, user_id: str, badges, unlocked_at: datetime
) -> list[str]:
    """Grant badges the user doesn't hold yet; return the newly granted ones."""
    granted = []
    for badge in badges:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO badges (user_id, badge, unlocked_at) VALUES (?, ?, ?)",
            (user_id, badge, unlocked_at.isoformat()),
        )
        if cursor.rowcount:
            granted.append(badge)
    return granted


def get_badges(db_path: str, user_id: str) -> list[str]:
    conn = get_connection(db_path)
    try:
        rows = conn.execute(
            "SELECT badge FROM badges WHERE user_id = ? ORDER BY unlocked_at, badge", (user_id,)
        ).fetchall()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()
    return [r["badge"] for r in rows]


# -- assessments ---------------------------------------------------------


def save_assessment_result(
    db_path: str, user_id: str, result: AssessmentResult, completed_at: Optional[datetime] = None
) -> int:
    answers = [
        {"question_id": a.question_id, "question": a.text, "answer": a.value}
        for a in result.answered_questions
    ]
    completed_at = completed_at or datetime.now()
    with transaction(db_path) as conn:
        cursor = conn.execute(
            """INSERT INTO assessment_results
            (user_id, total_score, max_score, level, answers, completed_at)
            VALUES (?, ?, ?, ?, ?, ?)""",
            (
                user_id, result.total_score, result.max_score, result.level,
                json.dumps(answers), completed_at.isoformat(),
            ),
        )
        row_id = cursor.lastrowid
    logger.debug("Stored assessment %d for %s", row_id, user_id)
    return row_id


def get_assessment_results(db_path: str, user_id: str, limit: int = 10) -> list[dict]:
    conn = get_connection(db_path)
    try:
        rows = conn.execute(
            """SELECT * FROM assessment_results WHERE user_id = ?
            ORDER BY completed_at DESC, id DESC LIMIT ?""",
            (user_id, limit),
        ).fetchall()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()
    results = []
    for row in rows:
        record = dict(row)
        record["answers"] = json.loads(record["answers"] or "[]")
        results.append(record)
    return results
