"""
Tests for modifier classification and the transition catalog.
"""

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from hotrefactor.refactoring.accessibility import (
    AccessibilityState,
    analyze_modifiers,
)
from hotrefactor.refactoring.transitions import (
    ONLY_SUFFIX,
    REDUNDANT_SUFFIX,
    compute_transitions,
)
from hotrefactor.syntax import Token

MAIN = ["public", "protected", "internal", "private"]


def tokens(source: str):
    return [Token(word, word) for word in source.split()]


def titles(source: str):
    return [t.title for t in compute_transitions(analyze_modifiers(tokens(source)))]


class TestAnalyzeModifiers:
    """Tests for analyze_modifiers."""

    def test_ignores_other_modifiers(self):
        analysis = analyze_modifiers(tokens("public static sealed"))
        assert analysis.main_modifier_count == 1
        assert analysis.state is AccessibilityState.PUBLIC
        assert not analysis.is_redundant

    def test_protected_internal(self):
        analysis = analyze_modifiers(tokens("internal protected"))
        assert analysis.has_protected_internal
        assert analysis.state is AccessibilityState.PROTECTED_INTERNAL
        assert not analysis.is_redundant

    def test_redundant_lists(self):
        assert analyze_modifiers(tokens("public private")).is_redundant
        assert analyze_modifiers(tokens("protected internal public")).is_redundant
        assert analyze_modifiers(tokens("public public")).state is AccessibilityState.MALFORMED

    def test_no_main_modifier_is_not_applicable(self):
        analysis = analyze_modifiers(tokens("static"))
        assert not analysis.is_applicable
        assert compute_transitions(analysis) == []


class TestAccessibilityState:
    """Tests for AccessibilityState helpers."""

    def test_keywords(self):
        assert AccessibilityState.PROTECTED_INTERNAL.keywords == ("protected", "internal")
        assert AccessibilityState.MALFORMED.keywords == ()

    def test_display_name(self):
        assert AccessibilityState.PROTECTED_INTERNAL.display_name == "Protected Internal"

    def test_from_keyword(self):
        assert AccessibilityState.from_keyword(" Internal ") is AccessibilityState.INTERNAL
        with pytest.raises(ValueError):
            AccessibilityState.from_keyword("malformed")
        with pytest.raises(ValueError):
            AccessibilityState.from_keyword("friend")


class TestComputeTransitions:
    """Tests for the offered titles per modifier list."""

    @pytest.mark.parametrize(
        "modifiers,expected",
        [
            ("public", ["To Protected", "To Internal", "To Private", "To Protected Internal"]),
            ("protected", ["To Public", "To Internal", "To Private", "To Protected Internal"]),
            ("internal", ["To Public", "To Protected", "To Private", "To Protected Internal"]),
            ("private", ["To Public", "To Protected", "To Internal", "To Protected Internal"]),
            (
                "protected internal",
                ["To Public", "To Protected (only)", "To Internal (only)", "To Private"],
            ),
            ("static public", ["To Protected", "To Internal", "To Private", "To Protected Internal"]),
        ],
    )
    def test_titles(self, modifiers, expected):
        assert titles(modifiers) == expected

    def test_redundant_offers_every_target(self):
        assert titles("public private") == [
            "To Public" + REDUNDANT_SUFFIX,
            "To Protected" + REDUNDANT_SUFFIX,
            "To Internal" + REDUNDANT_SUFFIX,
            "To Private" + REDUNDANT_SUFFIX,
            "To Protected Internal" + REDUNDANT_SUFFIX,
        ]

    def test_redundant_protected_internal_offers_protected_internal(self):
        offered = titles("protected internal private")
        assert "To Protected Internal" + REDUNDANT_SUFFIX in offered
        assert not any(title.endswith(ONLY_SUFFIX) for title in offered)

    def test_targets_follow_titles(self):
        transitions = compute_transitions(analyze_modifiers(tokens("public")))
        assert [t.target for t in transitions] == [
            AccessibilityState.PROTECTED,
            AccessibilityState.INTERNAL,
            AccessibilityState.PRIVATE,
            AccessibilityState.PROTECTED_INTERNAL,
        ]
        assert transitions[-1].keywords == ("protected", "internal")

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.lists(st.sampled_from(MAIN), min_size=1, max_size=4))
    def test_current_state_never_offered_unless_redundant(self, words):
        analysis = analyze_modifiers(tokens(" ".join(words)))
        targets = [t.target for t in compute_transitions(analysis)]
        if analysis.is_redundant:
            assert len(targets) == 5
        else:
            assert analysis.state not in targets
            assert len(targets) == 4
