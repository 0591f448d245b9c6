"""Tests for data model classes."""
from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from mindspace.models import (
    AssessmentResult, BreathingPattern, Phase, Question, Quiz, ScoreBand, StreakState,
)


def test_streak_state_defaults():
    s = StreakState(user_id="ana", current_count=2, last_event_date=date(2025, 1, 2))
    assert s.longest_count == 0


def test_streak_state_is_immutable():
    s = StreakState("ana", 1, date(2025, 1, 1), 1)
    with pytest.raises(FrozenInstanceError):
        s.current_count = 5


def test_pattern_durations():
    p = BreathingPattern("Test", phases=(Phase("inhale", 3), Phase("exhale", 5)), total_cycles=4)
    assert p.cycle_duration == 8
    assert p.total_duration == 32


def test_question_max_value():
    q = Question("q1", "How?", ((4, "Never"), (0, "Always")))
    assert q.max_value == 4


def test_score_band_contains_is_inclusive():
    band = ScoreBand(8, 13, "Moderate")
    assert band.contains(8)
    assert band.contains(13)
    assert not band.contains(14)


def test_quiz_max_score():
    q = Question("q1", "How?", ((0, "a"), (3, "b")))
    quiz = Quiz(id="x", title="X", questions=(q, q), bands=())
    assert quiz.max_score == 6


def test_assessment_result_level():
    band = ScoreBand(0, 7, "Low Stress")
    result = AssessmentResult(total_score=3, band=band)
    assert result.level == "Low Stress"
    assert result.answered_questions == ()
