"""
Refactoring module for HotRefactor

Provides the cursor-triggered refactorings:
- Accessibility analysis and the catalog of modifier transitions
- Minimal, trivia-preserving modifier rewrites
- Blank-line separation between using-directive groups
- Providers that expose both as named actions
"""

__all__ = [
    "AccessibilityState",
    "ModifierAnalysis",
    "analyze_modifiers",
    "ModifierTransition",
    "compute_transitions",
    "ModifierRewriter",
    "UsingGroupEdit",
    "find_missing_separators",
    "add_separators",
    "ADD_NEWLINE_TITLE",
    "InvocationContext",
    "RefactoringAction",
    "RefactoringProvider",
    "ChangeModifierProvider",
    "AddNewlineBetweenUsingGroupsProvider",
]


def __getattr__(name: str):
    if name in {"AccessibilityState", "ModifierAnalysis", "analyze_modifiers"}:
        from . import accessibility

        return getattr(accessibility, name)

    if name in {"ModifierTransition", "compute_transitions"}:
        from . import transitions

        return getattr(transitions, name)

    if name == "ModifierRewriter":
        from .modifier_rewriter import ModifierRewriter

        return ModifierRewriter

    if name in {"UsingGroupEdit", "find_missing_separators", "add_separators", "ADD_NEWLINE_TITLE"}:
        from . import using_groups

        return getattr(using_groups, name)

    if name in {"InvocationContext", "RefactoringAction"}:
        from . import actions

        return getattr(actions, name)

    if name in {
        "RefactoringProvider",
        "ChangeModifierProvider",
        "AddNewlineBetweenUsingGroupsProvider",
    }:
        from . import providers

        return getattr(providers, name)

    raise AttributeError(name)
