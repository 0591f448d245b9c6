"""Stress level assessment: question pool and band table."""
import random
from typing import Optional

from mindspace.models import Question, Quiz, ScoreBand

DEFAULT_QUESTION_COUNT = 5

_FREQUENCY = ("Never", "Almost never", "Sometimes", "Fairly often", "Very often")


def _frequency_question(qid: str, text: str, reverse: bool = False) -> Question:
    # Reverse-scored items describe coping well, so "Never" scores highest
    values = (4, 3, 2, 1, 0) if reverse else (0, 1, 2, 3, 4)
    return Question(id=qid, text=text, options=tuple(zip(values, _FREQUENCY)))


STRESS_QUESTIONS = (
    _frequency_question("q1", "How often have you felt nervous or stressed in the past week?"),
    _frequency_question("q2", "How often have you felt unable to control important things in your life?"),
    _frequency_question("q3", "How often have you felt confident about handling personal problems?", reverse=True),
    _frequency_question("q4", "How often have you felt that things were going your way?", reverse=True),
    _frequency_question("q5", "How often have you felt difficulties piling up so high you couldn't overcome them?"),
    _frequency_question("q6", "How often have you felt overwhelmed by your responsibilities?"),
    _frequency_question("q7", "How often have you had trouble falling asleep or staying asleep?"),
    _frequency_question("q8", "How often have you felt irritable or easily annoyed?"),
    _frequency_question("q9", "How often have you felt physically tense or on edge?"),
    _frequency_question("q10", "How often have you felt like you could not cope with all the things you had to do?"),
    _frequency_question("q11", "How often have you felt that problems were accumulating and you could not overcome them?"),
    _frequency_question("q12", "How often have you felt that you were on top of things?", reverse=True),
    _frequency_question("q13", "How often have you felt angry because of things that were outside of your control?"),
    _frequency_question(
        "q14",
        "How often have you felt that you were effectively coping with important changes in your life?",
        reverse=True,
    ),
    _frequency_question("q15", "How often have you felt that you were able to control irritations in your life?", reverse=True),
    _frequency_question("q16", "How often do you take breaks during stressful periods?", reverse=True),
    _frequency_question("q17", "How often do you feel like you need a break from everything?"),
)

LOW = "Low Stress"
MODERATE = "Moderate Stress"
HIGH = "High Stress"

_DESCRIPTIONS = {
    LOW: "You're managing stress well. Keep up the good work with your current coping strategies.",
    MODERATE: "You're experiencing some stress. Consider incorporating stress-reduction techniques into your routine.",
    HIGH: "You're experiencing significant stress. It may be helpful to speak with a counselor or mental health professional.",
}

# Band table for the five-question assessment (totals 0-20)
STRESS_BANDS = (
    ScoreBand(0, 7, LOW, _DESCRIPTIONS[LOW], "green"),
    ScoreBand(8, 13, MODERATE, _DESCRIPTIONS[MODERATE], "yellow"),
    ScoreBand(14, 20, HIGH, _DESCRIPTIONS[HIGH], "red"),
)


def scaled_bands(question_count: int) -> tuple:
    """Stretch the five-question band table over 0..4*question_count.

    Boundaries keep the same proportions, and the bands stay contiguous, so
    every reachable total falls in exactly one band.
    """
    if question_count < 1:
        raise ValueError("question_count must be at least 1")
    low_max = (7 * question_count) // 5
    moderate_max = (13 * question_count) // 5
    return (
        ScoreBand(0, low_max, LOW, _DESCRIPTIONS[LOW], "green"),
        ScoreBand(low_max + 1, moderate_max, MODERATE, _DESCRIPTIONS[MODERATE], "yellow"),
        ScoreBand(moderate_max + 1, 4 * question_count, HIGH, _DESCRIPTIONS[HIGH], "red"),
    )


def get_random_questions(count: int = DEFAULT_QUESTION_COUNT, rng: Optional[random.Random] = None) -> tuple:
    rng = rng or random.Random()
    count = min(count, len(STRESS_QUESTIONS))
    return tuple(rng.sample(STRESS_QUESTIONS, count))


def create_stress_quiz(question_count: int = DEFAULT_QUESTION_COUNT, rng: Optional[random.Random] = None) -> Quiz:
    """Build a stress assessment from a random draw of the question pool."""
    questions = get_random_questions(question_count, rng)
    return Quiz(
        id="stress-assessment",
        title="Stress Level Assessment",
        description="This brief assessment can help you understand your current stress levels.",
        questions=questions,
        bands=scaled_bands(len(questions)),
    )
