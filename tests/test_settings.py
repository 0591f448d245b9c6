# tests/test_settings.py
from unittest.mock import patch

import pytest

from mindspace.errors import PersistenceError
from mindspace.patterns import BOX_BREATHING, DEFAULT_PATTERN
from mindspace.settings import (
    DEFAULT_USER, get_setting, set_setting, get_current_user, set_current_user,
    get_preferred_pattern, set_preferred_pattern,
)


def test_get_setting_default(ready_db):
    assert get_setting(ready_db, "missing") is None
    assert get_setting(ready_db, "missing", "x") == "x"


def test_set_setting_overwrites(ready_db):
    set_setting(ready_db, "k", "1")
    set_setting(ready_db, "k", "2")
    assert get_setting(ready_db, "k") == "2"


def test_current_user_falls_back_to_login(ready_db):
    with patch("mindspace.settings.getpass.getuser", return_value="sam"):
        assert get_current_user(ready_db) == "sam"


def test_current_user_fallback_without_login(ready_db):
    with patch("mindspace.settings.getpass.getuser", side_effect=OSError):
        assert get_current_user(ready_db) == DEFAULT_USER


def test_set_current_user(ready_db):
    set_current_user(ready_db, "  ana ")
    assert get_current_user(ready_db) == "ana"


def test_set_current_user_rejects_blank(ready_db):
    with pytest.raises(ValueError):
        set_current_user(ready_db, "   ")


def test_preferred_pattern(ready_db):
    assert get_preferred_pattern(ready_db) is DEFAULT_PATTERN
    set_preferred_pattern(ready_db, "box breathing")
    assert get_preferred_pattern(ready_db) is BOX_BREATHING


def test_unknown_stored_pattern_falls_back(ready_db):
    set_setting(ready_db, "preferred_pattern", "Retired Pattern")
    assert get_preferred_pattern(ready_db) is DEFAULT_PATTERN


def test_set_unknown_pattern_raises(ready_db):
    with pytest.raises(KeyError):
        set_preferred_pattern(ready_db, "nope")


def test_settings_wrap_sqlite_errors(tmp_db):
    with pytest.raises(PersistenceError):
        get_setting(tmp_db, "current_user")
    with pytest.raises(PersistenceError):
        set_setting(tmp_db, "current_user", "ana")
