"""Guided breathing session state machine.

The session never keeps time itself. A host calls ``tick()`` once per second
while the session is running; every transition happens inside ``tick()`` or
one of the user commands, so tests can drive a whole session without timers.
"""
import logging
from typing import Callable, Optional

from mindspace.errors import ConfigurationError
from mindspace.models import PHASE_KINDS, BreathingPattern, Phase
from mindspace.patterns import DEFAULT_PATTERN

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"
COMPLETED = "completed"

PHASE_COLORS = {
    "inhale": "blue",
    "hold": "purple",
    "exhale": "green",
    "rest": "grey50",
}


def validate_pattern(pattern: BreathingPattern) -> None:
    """Raise ConfigurationError if the pattern can't drive a session."""
    if not pattern.phases:
        raise ConfigurationError(f"pattern {pattern.name!r} has no phases")
    if pattern.total_cycles < 1:
        raise ConfigurationError(
            f"pattern {pattern.name!r} needs at least one cycle, got {pattern.total_cycles}"
        )
    for phase in pattern.phases:
        if phase.duration_seconds <= 0:
            raise ConfigurationError(
                f"pattern {pattern.name!r} has a {phase.kind} phase of {phase.duration_seconds}s"
            )
        if phase.kind not in PHASE_KINDS:
            raise ConfigurationError(f"pattern {pattern.name!r} has unknown phase {phase.kind!r}")


class BreathingSession:
    """One user's active breathing exercise.

    ``generation`` increases on every ``select_pattern`` and ``reset``. A host
    that captured the generation when it started its timer passes it back to
    ``tick()``; ticks carrying an older generation are dropped, so a timer
    left over from a previous pattern can't touch the new session.
    """

    def __init__(
        self,
        pattern: BreathingPattern = DEFAULT_PATTERN,
        on_phase_change: Optional[Callable[["BreathingSession", Phase], None]] = None,
        on_completed: Optional[Callable[["BreathingSession"], None]] = None,
    ):
        self.on_phase_change = on_phase_change
        self.on_completed = on_completed
        self.generation = 0
        self.select_pattern(pattern)

    # -- commands --------------------------------------------------------

    def select_pattern(self, pattern: BreathingPattern) -> None:
        validate_pattern(pattern)
        self.pattern = pattern
        self.reset()

    def start(self) -> None:
        if self.running or self.completed:
            return
        self.running = True
        self.started = True

    def pause(self) -> None:
        if self.running:
            self.running = False

    def reset(self) -> None:
        self.generation += 1
        self.cycle_index = 0
        self.phase_index = 0
        self.remaining_seconds = self.pattern.phases[0].duration_seconds
        self.running = False
        self.started = False
        self.completed = False

    def tick(self, generation: Optional[int] = None) -> bool:
        """Advance one second. Returns False when the tick was ignored."""
        if generation is not None and generation != self.generation:
            return False
        if not self.running:
            return False

        if self.remaining_seconds > 1:
            self.remaining_seconds -= 1
            return True

        phases = self.pattern.phases
        if self.phase_index + 1 < len(phases):
            self.phase_index += 1
        elif self.cycle_index + 1 < self.pattern.total_cycles:
            self.cycle_index += 1
            self.phase_index = 0
        else:
            self.remaining_seconds = 0
            self.running = False
            self.completed = True
            logger.info(
                "Completed %d cycles of %s", self.pattern.total_cycles, self.pattern.name
            )
            if self.on_completed:
                self.on_completed(self)
            return True

        self.remaining_seconds = phases[self.phase_index].duration_seconds
        if self.on_phase_change:
            self.on_phase_change(self, self.current_phase)
        return True

    # -- read-only views -------------------------------------------------

    @property
    def state(self) -> str:
        if self.completed:
            return COMPLETED
        if self.running:
            return RUNNING
        if self.started:
            return PAUSED
        return IDLE

    @property
    def current_phase(self) -> Phase:
        return self.pattern.phases[self.phase_index]

    @property
    def total_seconds(self) -> int:
        return self.pattern.total_duration

    @property
    def elapsed_in_cycle(self) -> int:
        done = sum(p.duration_seconds for p in self.pattern.phases[: self.phase_index])
        return done + self.current_phase.duration_seconds - self.remaining_seconds

    @property
    def elapsed_seconds(self) -> int:
        return self.cycle_index * self.pattern.cycle_duration + self.elapsed_in_cycle

    @property
    def cycle_progress(self) -> float:
        return 100 * self.elapsed_in_cycle / self.pattern.cycle_duration

    @property
    def overall_progress(self) -> float:
        return 100 * self.elapsed_seconds / self.total_seconds

    @property
    def phase_color(self) -> str:
        return PHASE_COLORS.get(self.current_phase.kind, "grey50")

    @property
    def circle_scale(self) -> float:
        """Relative size of the breathing circle: grows on inhale, shrinks on exhale."""
        phase = self.current_phase
        fraction = (phase.duration_seconds - self.remaining_seconds) / phase.duration_seconds
        if phase.kind == "inhale":
            return 1 + fraction * 0.5
        elif phase.kind == "exhale":
            return 1.5 - fraction * 0.5
        return 1.5 if phase.kind == "hold" else 1.0

    @property
    def completion_message(self) -> str:
        return (
            f"Great job! You've completed {self.pattern.total_cycles} cycles of "
            f"{self.pattern.name}. Take a moment to notice how you feel."
        )
