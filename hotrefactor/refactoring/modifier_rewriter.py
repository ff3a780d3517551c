"""
Token-level rewrite of a declaration's accessibility modifiers.

The edit is kept minimal: extra accessibility keywords are dropped together
with their trivia, the first one is overwritten by the target keyword(s), and
every other token of the file is left untouched.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..syntax import (
    ClassDeclaration,
    SyntaxTree,
    Token,
    TypeDeclaration,
    is_main_modifier,
    whitespace,
)
from .accessibility import AccessibilityState

logger = logging.getLogger(__name__)

__all__ = ["ModifierRewriter", "replacement_tokens", "rewrite_modifiers"]

DEFAULT_DIRECT_TARGETS = (AccessibilityState.INTERNAL, AccessibilityState.PRIVATE)


def replacement_tokens(anchor: Token, keywords: Sequence[str]) -> List[Token]:
    """Tokens spelling ``keywords`` in the place of ``anchor``.

    The first new token inherits the anchor's leading trivia, the last one its
    trailing trivia; consecutive keywords are separated by a single space.
    """
    if not keywords:
        raise ValueError("At least one keyword is required")
    tokens = []
    last = len(keywords) - 1
    for index, keyword in enumerate(keywords):
        tokens.append(
            Token(
                kind=keyword,
                text=keyword,
                leading=anchor.leading if index == 0 else (),
                trailing=anchor.trailing if index == last else (whitespace(" "),),
            )
        )
    return tokens


def rewrite_modifiers(modifiers: Sequence[Token], keywords: Sequence[str]) -> Tuple[Token, ...]:
    """Collapse the accessibility keywords of ``modifiers`` into ``keywords``."""
    result: List[Token] = []
    replaced = False
    for token in modifiers:
        if not is_main_modifier(token):
            result.append(token)
        elif not replaced:
            result.extend(replacement_tokens(token, keywords))
            replaced = True
        # Later accessibility keywords are deleted along with their trivia.
    return tuple(result)


class ModifierRewriter:
    """Applies an accessibility transition to a type declaration."""

    def __init__(self, direct_replacement_targets: Optional[Iterable[AccessibilityState]] = None):
        if direct_replacement_targets is None:
            direct_replacement_targets = DEFAULT_DIRECT_TARGETS
        self.direct_replacement_targets = frozenset(direct_replacement_targets)

    def rewrite(
        self,
        tree: SyntaxTree,
        declaration: TypeDeclaration,
        target: AccessibilityState,
    ) -> SyntaxTree:
        """Return a new tree with ``declaration`` switched to ``target``."""
        keywords = target.keywords
        if not keywords:
            raise ValueError(f"Cannot rewrite to {target.name}")

        modifiers = declaration.modifiers
        main = [token for token in modifiers if is_main_modifier(token)]
        if not main:
            logger.debug("Declaration has no accessibility modifier; leaving it unchanged")
            return tree

        if self._replaces_in_place(declaration, target, main):
            logger.debug(f"Replacing '{main[0].text}' with '{target.value}' in place")
            return tree.replace_token(main[0], replacement_tokens(main[0], keywords))

        logger.debug(
            f"Rewriting {len(main)} accessibility modifier(s) of "
            f"{declaration.name or declaration.kind} to '{target.value}'"
        )
        new_declaration = declaration.with_modifiers(rewrite_modifiers(modifiers, keywords))
        return tree.replace_node(declaration, new_declaration)

    def _replaces_in_place(
        self,
        declaration: TypeDeclaration,
        target: AccessibilityState,
        main: Sequence[Token],
    ) -> bool:
        # Only a lone accessibility keyword on a class can be swapped directly;
        # redundant lists always go through the collapse.
        return (
            isinstance(declaration, ClassDeclaration)
            and target in self.direct_replacement_targets
            and len(target.keywords) == 1
            and len(main) == 1
        )
