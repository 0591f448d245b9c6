"""Data classes for the engagement engine domain model."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

PHASE_KINDS = ("inhale", "hold", "exhale", "rest")

MOOD_LABELS = {
    1: "very-sad",
    2: "sad",
    3: "neutral",
    4: "happy",
    5: "very-happy",
}


@dataclass(frozen=True)
class MoodEvent:
    user_id: str
    timestamp: datetime
    score: int
    label: str = ""
    note: str = ""
    tags: tuple = ()
    id: Optional[int] = None


@dataclass(frozen=True)
class StreakState:
    user_id: str
    current_count: int
    last_event_date: date
    longest_count: int = 0


@dataclass(frozen=True)
class Phase:
    kind: str
    duration_seconds: int
    instruction: str = ""


@dataclass(frozen=True)
class BreathingPattern:
    name: str
    phases: tuple
    total_cycles: int
    description: str = ""

    @property
    def cycle_duration(self) -> int:
        """Seconds needed for one pass over every phase."""
        return sum(p.duration_seconds for p in self.phases)

    @property
    def total_duration(self) -> int:
        return self.cycle_duration * self.total_cycles


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: tuple  # ((value, label), ...)

    @property
    def max_value(self) -> int:
        return max((value for value, _ in self.options), default=0)


@dataclass(frozen=True)
class ScoreBand:
    min_inclusive: int
    max_inclusive: int
    label: str
    description: str = ""
    color: str = ""

    def contains(self, score: int) -> bool:
        return self.min_inclusive <= score <= self.max_inclusive


@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    questions: tuple
    bands: tuple
    description: str = ""

    @property
    def max_score(self) -> int:
        return sum(q.max_value for q in self.questions)


@dataclass(frozen=True)
class AnsweredQuestion:
    question_id: str
    text: str
    value: int


@dataclass(frozen=True)
class AssessmentResult:
    total_score: int
    band: ScoreBand
    answered_questions: tuple = field(default_factory=tuple)
    max_score: int = 0

    @property
    def level(self) -> str:
        return self.band.label


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    category: str
    requirement: int
