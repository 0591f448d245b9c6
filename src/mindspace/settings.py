"""Per-install user settings stored in the database."""
import getpass
import sqlite3

from mindspace.db import get_connection
from mindspace.errors import PersistenceError
from mindspace.patterns import DEFAULT_PATTERN, get_pattern
from mindspace.models import BreathingPattern

DEFAULT_USER = "student"


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    try:
        row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    try:
        conn.execute(
            "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
            (key, value, value),
        )
        conn.commit()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()


def get_current_user(db_path: str) -> str:
    """Identity used for every record this install writes."""
    user = get_setting(db_path, "current_user")
    if user:
        return user
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return DEFAULT_USER


def set_current_user(db_path: str, user_id: str) -> None:
    user_id = user_id.strip()
    if not user_id:
        raise ValueError("user id must not be empty")
    set_setting(db_path, "current_user", user_id)


def get_preferred_pattern(db_path: str) -> BreathingPattern:
    name = get_setting(db_path, "preferred_pattern")
    if not name:
        return DEFAULT_PATTERN
    try:
        return get_pattern(name)
    except KeyError:
        return DEFAULT_PATTERN


def set_preferred_pattern(db_path: str, name: str) -> None:
    set_setting(db_path, "preferred_pattern", get_pattern(name).name)
