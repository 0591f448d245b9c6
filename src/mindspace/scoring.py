"""Stress assessment scoring and band classification."""
from mindspace.errors import ConfigurationError
from mindspace.models import AnsweredQuestion, AssessmentResult, Question, Quiz, ScoreBand


def validate_answer(question: Question, value: int) -> int:
    allowed = {v for v, _ in question.options}
    if value not in allowed:
        raise ValueError(
            f"{value!r} is not an option for question {question.id} (expected one of {sorted(allowed)})"
        )
    return value


def match_band(bands, total: int) -> ScoreBand:
    """Return the first band, in declared order, whose range holds total.

    Declared order decides between overlapping bands; numeric position of
    the ranges is never considered.
    """
    for band in bands:
        if band.contains(total):
            return band
    raise ConfigurationError(f"no score band covers a total of {total}")


def score(quiz: Quiz, answers: dict) -> AssessmentResult:
    """Total the chosen option values and classify the total.

    Questions without an entry in ``answers`` count as 0. Entries for ids
    that are not part of the quiz are ignored.
    """
    answered = []
    total = 0
    for question in quiz.questions:
        if question.id not in answers:
            continue
        value = validate_answer(question, answers[question.id])
        total += value
        answered.append(AnsweredQuestion(question.id, question.text, value))
    return AssessmentResult(
        total_score=total,
        band=match_band(quiz.bands, total),
        answered_questions=tuple(answered),
        max_score=quiz.max_score,
    )
