"""Stress assessment sessions: score a finished quiz and keep the result."""
import logging
from datetime import datetime
from typing import Optional

from mindspace.db import get_assessment_results, save_assessment_result
from mindspace.models import AssessmentResult, Quiz
from mindspace.scoring import score

logger = logging.getLogger(__name__)


def complete_assessment(
    db_path: str, user_id: str, quiz: Quiz, answers: dict, completed_at: Optional[datetime] = None
) -> AssessmentResult:
    """Score the answers and store the result.

    Scoring happens before anything is written, so a bad band table or an
    invalid answer leaves no record behind.
    """
    result = score(quiz, answers)
    save_assessment_result(db_path, user_id, result, completed_at)
    logger.info(
        "Assessment for %s: %d/%d (%s)", user_id, result.total_score, result.max_score, result.level
    )
    return result


def get_assessment_history(db_path: str, user_id: str, limit: int = 10) -> list[dict]:
    return get_assessment_results(db_path, user_id, limit=limit)


def get_latest_level(db_path: str, user_id: str) -> str | None:
    history = get_assessment_results(db_path, user_id, limit=1)
    return history[0]["level"] if history else None
