"""
Blank-line separation between groups of ``using`` directives.

Directives are grouped by the leftmost segment of their imported name, so
``System`` and ``System.Text`` form one group while ``Microsoft`` starts
another. Between two adjacent groups a blank line is expected.

Boundary rule: the boundary between directives ``i-1`` and ``i`` is everything
from the trailing trivia of the last token of ``i-1`` up to the leading trivia
of the first token of ``i``. Tokens of nodes sitting in between, such as
``#region`` lines, are part of it and count as content. The boundary is
separated when, after the first line terminator, the next non-whitespace
element is another line terminator. Comments therefore count as content too:
a comment directly under a directive means the blank line is missing. The
rule reads the same whether the tree was edited in place or re-parsed from
the edited text.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..syntax import (
    CompilationUnit,
    Node,
    SyntaxTree,
    Token,
    Trivia,
    TriviaKind,
    UsingDirective,
    end_of_line,
    whitespace,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ADD_NEWLINE_TITLE",
    "UsingGroupEdit",
    "tokens_between",
    "boundary_trivia",
    "is_separated",
    "find_missing_separators",
    "detect_line_terminator",
    "add_separators",
]

ADD_NEWLINE_TITLE = "Add newline betweeen using groups"

LINE_TERMINATORS = {"lf": "\n", "crlf": "\r\n"}


@dataclass(frozen=True)
class UsingGroupEdit:
    """Edit descriptor: indices of directives that need a blank line after them."""

    title: str
    boundaries: Tuple[int, ...]


_BLANK_TEXT = re.compile(r"\r\n|\r|\n|[^\S\r\n]+")


def _token_as_trivia(token: Token) -> List[Trivia]:
    # Tokens that are pure whitespace (a directive's closing newline) read as
    # trivia; anything else is content.
    if not token.text:
        return []
    if token.text.isspace():
        return [
            end_of_line(piece) if piece in ("\r\n", "\r", "\n") else whitespace(piece)
            for piece in _BLANK_TEXT.findall(token.text)
        ]
    return [Trivia(TriviaKind.SKIPPED, token.text)]


def tokens_between(root: Node, previous: UsingDirective, current: UsingDirective) -> List[Token]:
    """Tokens strictly between the last token of ``previous`` and the first of ``current``."""
    last = previous.last_token()
    first = current.first_token()
    between: List[Token] = []
    inside = False
    for token in root.tokens():
        if token is first:
            break
        if inside:
            between.append(token)
        elif token is last:
            inside = True
    return between


def boundary_trivia(
    previous: UsingDirective,
    current: UsingDirective,
    between: Sequence[Token] = (),
) -> List[Trivia]:
    """Everything separating two directives, as one trivia sequence."""
    last = previous.last_token()
    first = current.first_token()
    trivia = list(last.trailing if last else ())
    for token in between:
        trivia.extend(token.leading)
        trivia.extend(_token_as_trivia(token))
        trivia.extend(token.trailing)
    trivia.extend(first.leading if first else ())
    return trivia


def is_separated(trivia: Sequence[Trivia]) -> bool:
    seen_line_end = False
    for item in trivia:
        if not seen_line_end:
            seen_line_end = item.is_end_of_line
        elif item.is_end_of_line:
            return True
        elif not item.is_whitespace:
            return False
    return False


def find_missing_separators(unit: CompilationUnit) -> List[int]:
    """Indices of directives followed by a different group without a blank line."""
    usings = unit.usings
    missing = []
    for index in range(1, len(usings)):
        previous, current = usings[index - 1], usings[index]
        if previous.top_level_namespace == current.top_level_namespace:
            continue
        between = tokens_between(unit, previous, current)
        if not is_separated(boundary_trivia(previous, current, between)):
            missing.append(index - 1)
    return missing


def detect_line_terminator(tree: SyntaxTree, preference: str = "auto") -> str:
    """Resolve the terminator to insert.

    ``auto`` reuses the first terminator found in the file and falls back to
    the platform's line separator for single-line sources.
    """
    if preference in LINE_TERMINATORS:
        return LINE_TERMINATORS[preference]
    for token in tree.tokens():
        for item in token.leading + token.trailing:
            if item.is_end_of_line:
                return item.text
    return os.linesep


def add_separators(
    tree: SyntaxTree, boundaries: Sequence[int], line_terminator: str
) -> SyntaxTree:
    """Append line terminators after the directives listed in ``boundaries``."""
    root = tree.root
    if not isinstance(root, CompilationUnit):
        return tree

    usings = root.usings
    mapping: Dict[int, Tuple[Token, ...]] = {}
    for index in boundaries:
        if not 0 <= index < len(usings) - 1:
            logger.debug(f"Ignoring out-of-range using boundary {index}")
            continue
        last = usings[index].last_token()
        if last is None:
            continue
        # Trailing trivia ends at the first line terminator when there is one;
        # otherwise the next element shares the line and needs a break first.
        count = 1 if any(item.is_end_of_line for item in last.trailing) else 2
        trailing = last.trailing + (end_of_line(line_terminator),) * count
        mapping[id(last)] = (last.with_trailing(trailing),)

    if not mapping:
        return tree
    logger.debug(f"Separating {len(mapping)} using group boundary(ies)")
    return tree.replace_tokens(mapping)
