"""Catalog of guided breathing patterns."""
from mindspace.models import BreathingPattern, Phase

FOUR_SEVEN_EIGHT = BreathingPattern(
    name="4-7-8 Technique",
    description="A calming technique that helps reduce anxiety and promote sleep",
    phases=(
        Phase("inhale", 4, "Breathe in through your nose"),
        Phase("hold", 7, "Hold your breath"),
        Phase("exhale", 8, "Exhale slowly through your mouth"),
        Phase("rest", 2, "Rest and prepare for the next cycle"),
    ),
    total_cycles=4,
)

BOX_BREATHING = BreathingPattern(
    name="Box Breathing",
    description="A simple technique used by Navy SEALs to stay calm under pressure",
    phases=(
        Phase("inhale", 4, "Breathe in slowly"),
        Phase("hold", 4, "Hold your breath"),
        Phase("exhale", 4, "Exhale slowly"),
        Phase("hold", 4, "Hold empty"),
    ),
    total_cycles=5,
)

SIMPLE_BREATHING = BreathingPattern(
    name="Simple Breathing",
    description="Basic breathing exercise for beginners",
    phases=(
        Phase("inhale", 4, "Breathe in deeply"),
        Phase("exhale", 6, "Breathe out slowly"),
        Phase("rest", 2, "Relax"),
    ),
    total_cycles=6,
)

PATTERNS = (FOUR_SEVEN_EIGHT, BOX_BREATHING, SIMPLE_BREATHING)

DEFAULT_PATTERN = FOUR_SEVEN_EIGHT


def pattern_names() -> list[str]:
    return [p.name for p in PATTERNS]


def get_pattern(name: str) -> BreathingPattern:
    """Look up a pattern by name, ignoring case and surrounding whitespace."""
    wanted = name.strip().lower()
    for pattern in PATTERNS:
        if pattern.name.lower() == wanted:
            return pattern
    raise KeyError(name)
