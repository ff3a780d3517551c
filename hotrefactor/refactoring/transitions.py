"""
Catalog of accessibility transitions offered for a modifier list.

Each target is checked on its own, so several actions are usually offered at
once. A target that matches the current state without redundancy is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .accessibility import AccessibilityState, ModifierAnalysis

__all__ = [
    "REDUNDANT_SUFFIX",
    "ONLY_SUFFIX",
    "ModifierTransition",
    "compute_transitions",
]

REDUNDANT_SUFFIX = " (Remove redundant modifiers)"
ONLY_SUFFIX = " (only)"


@dataclass(frozen=True)
class ModifierTransition:
    """Edit descriptor: the target accessibility and the title offering it."""

    title: str
    target: AccessibilityState

    @property
    def keywords(self) -> Tuple[str, ...]:
        return self.target.keywords


def _title(target: AccessibilityState, analysis: ModifierAnalysis, narrows: bool = False) -> str:
    title = f"To {target.display_name}"
    if analysis.is_redundant:
        title += REDUNDANT_SUFFIX
    elif narrows and analysis.has_protected_internal:
        title += ONLY_SUFFIX
    return title


def compute_transitions(analysis: ModifierAnalysis) -> List[ModifierTransition]:
    """Return the offerable transitions in menu order."""
    if not analysis.is_applicable:
        return []

    several = analysis.main_modifier_count > 1
    offered: List[Tuple[AccessibilityState, bool]] = []

    if several or not analysis.has_public:
        offered.append((AccessibilityState.PUBLIC, False))

    if several or not analysis.has_protected or analysis.has_internal:
        offered.append((AccessibilityState.PROTECTED, True))

    if several or not analysis.has_internal or analysis.has_protected:
        offered.append((AccessibilityState.INTERNAL, True))

    if several or not analysis.has_private:
        offered.append((AccessibilityState.PRIVATE, False))

    if analysis.main_modifier_count > 2 or not analysis.has_protected_internal:
        offered.append((AccessibilityState.PROTECTED_INTERNAL, False))

    return [
        ModifierTransition(title=_title(target, analysis, narrows), target=target)
        for target, narrows in offered
    ]
