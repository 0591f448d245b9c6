# tests/test_stress_quiz.py
import random

import pytest

from mindspace.scoring import score
from mindspace.stress_quiz import (
    STRESS_QUESTIONS, STRESS_BANDS, DEFAULT_QUESTION_COUNT, scaled_bands, create_stress_quiz,
    get_random_questions,
)


def test_question_ids_unique():
    ids = [q.id for q in STRESS_QUESTIONS]
    assert len(ids) == len(set(ids))


def test_questions_use_zero_to_four_scale():
    for q in STRESS_QUESTIONS:
        assert sorted(v for v, _ in q.options) == [0, 1, 2, 3, 4]


def test_reverse_scored_question():
    confident = next(q for q in STRESS_QUESTIONS if q.id == "q3")
    assert confident.options[0] == (4, "Never")
    nervous = next(q for q in STRESS_QUESTIONS if q.id == "q1")
    assert nervous.options[0] == (0, "Never")


def test_scaled_bands_match_five_question_table():
    assert scaled_bands(5) == STRESS_BANDS


@pytest.mark.parametrize("count", [1, 3, 5, 10, 17])
def test_scaled_bands_cover_every_total(count):
    bands = scaled_bands(count)
    assert bands[0].min_inclusive == 0
    assert bands[-1].max_inclusive == 4 * count
    for lower, upper in zip(bands, bands[1:]):
        assert upper.min_inclusive == lower.max_inclusive + 1


def test_scaled_bands_rejects_zero():
    with pytest.raises(ValueError):
        scaled_bands(0)


def test_create_stress_quiz_is_seedable():
    a = create_stress_quiz(rng=random.Random(7))
    b = create_stress_quiz(rng=random.Random(7))
    assert [q.id for q in a.questions] == [q.id for q in b.questions]
    assert len(a.questions) == DEFAULT_QUESTION_COUNT
    assert a.max_score == 20


def test_random_questions_capped_at_pool_size():
    assert len(get_random_questions(500)) == len(STRESS_QUESTIONS)


def test_full_quiz_scores_into_band():
    quiz = create_stress_quiz(10, rng=random.Random(1))
    answers = {q.id: q.max_value for q in quiz.questions}
    result = score(quiz, answers)
    assert result.total_score == 40
    assert result.level == "High Stress"
