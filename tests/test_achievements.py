# tests/test_achievements.py
import pytest

from mindspace.achievements import ACHIEVEMENTS, earned_achievements, get_achievement


def test_catalog_ids_are_unique():
    ids = [a.id for a in ACHIEVEMENTS]
    assert len(ids) == len(set(ids))


def test_nothing_earned_before_first_log():
    assert earned_achievements(0, 0) == []


def test_first_log_earns_first_step():
    assert earned_achievements(1, 1) == ["first-mood"]


def test_streak_and_log_totals_counted_separately():
    # Many logs, but the current run is short
    assert earned_achievements(30, 2) == ["first-mood", "mood-week", "mood-month"]
    assert earned_achievements(7, 7) == ["first-mood", "mood-week", "streak-3", "streak-7"]


def test_get_achievement():
    assert get_achievement("streak-30").title == "Consistency King"
    with pytest.raises(KeyError):
        get_achievement("explorer")
