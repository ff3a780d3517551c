"""Classification of a declaration's accessibility modifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from ..syntax import Token, is_main_modifier

__all__ = ["AccessibilityState", "ModifierAnalysis", "analyze_modifiers"]


class AccessibilityState(Enum):
    """Normalized accessibility of a modifier list."""

    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PRIVATE = "private"
    PROTECTED_INTERNAL = "protected internal"
    MALFORMED = "malformed"

    @property
    def keywords(self) -> Tuple[str, ...]:
        """Keywords spelling this state, in source order."""
        if self is AccessibilityState.MALFORMED:
            return ()
        return tuple(self.value.split())

    @property
    def display_name(self) -> str:
        return self.value.title()

    @classmethod
    def from_keyword(cls, keyword: str) -> "AccessibilityState":
        state = cls(keyword.strip().lower())
        if state is cls.MALFORMED:
            raise ValueError("'malformed' is not an accessibility keyword")
        return state


@dataclass(frozen=True)
class ModifierAnalysis:
    """What the main modifiers of a declaration look like."""

    main_modifier_count: int
    has_public: bool
    has_protected: bool
    has_internal: bool
    has_private: bool

    @property
    def is_applicable(self) -> bool:
        # No accessibility keyword at all: nothing to anchor an edit on.
        return self.main_modifier_count > 0

    @property
    def has_protected_internal(self) -> bool:
        return self.has_protected and self.has_internal

    @property
    def is_redundant(self) -> bool:
        if self.has_protected_internal:
            return self.main_modifier_count > 2
        return self.main_modifier_count > 1

    @property
    def state(self) -> AccessibilityState:
        if self.main_modifier_count == 1:
            if self.has_public:
                return AccessibilityState.PUBLIC
            if self.has_protected:
                return AccessibilityState.PROTECTED
            if self.has_internal:
                return AccessibilityState.INTERNAL
            return AccessibilityState.PRIVATE
        if self.main_modifier_count == 2 and self.has_protected_internal:
            return AccessibilityState.PROTECTED_INTERNAL
        return AccessibilityState.MALFORMED


def analyze_modifiers(modifiers: Iterable[Token]) -> ModifierAnalysis:
    """Count and classify the accessibility keywords among ``modifiers``."""
    main = [token.text for token in modifiers if is_main_modifier(token)]
    return ModifierAnalysis(
        main_modifier_count=len(main),
        has_public="public" in main,
        has_protected="protected" in main,
        has_internal="internal" in main,
        has_private="private" in main,
    )
