# tests/test_patterns.py
import pytest

from mindspace.patterns import PATTERNS, DEFAULT_PATTERN, get_pattern, pattern_names


def test_pattern_names():
    assert pattern_names() == ["4-7-8 Technique", "Box Breathing", "Simple Breathing"]


def test_get_pattern_ignores_case():
    assert get_pattern("  BOX breathing ").name == "Box Breathing"


def test_get_pattern_unknown():
    with pytest.raises(KeyError):
        get_pattern("Lion's Breath")


def test_default_pattern_in_catalog():
    assert DEFAULT_PATTERN in PATTERNS


def test_478_totals():
    p = get_pattern("4-7-8 Technique")
    assert [ph.duration_seconds for ph in p.phases] == [4, 7, 8, 2]
    assert p.total_cycles == 4
    assert p.total_duration == 84
