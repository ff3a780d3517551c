"""
Lossless, immutable syntax tree model.

Every token keeps its leading and trailing trivia (whitespace, line
terminators, comments), so concatenating the full text of all tokens in
document order reproduces the source byte-for-byte.

Trees are values: edits never mutate a node, they return a new tree that
shares every untouched subtree with the old one. Replacement is keyed on
object identity, which is why tokens and nodes compare by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import cached_property
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

__all__ = [
    "TriviaKind",
    "Trivia",
    "TextSpan",
    "Token",
    "Node",
    "SyntaxElement",
    "SyntaxTree",
    "end_of_line",
    "whitespace",
]


class TriviaKind(Enum):
    """Kinds of non-semantic source text."""

    WHITESPACE = "whitespace"
    END_OF_LINE = "end_of_line"
    SINGLE_LINE_COMMENT = "single_line_comment"
    MULTI_LINE_COMMENT = "multi_line_comment"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Trivia:
    """A run of non-semantic text attached to a token."""

    kind: TriviaKind
    text: str

    @property
    def is_end_of_line(self) -> bool:
        return self.kind is TriviaKind.END_OF_LINE

    @property
    def is_whitespace(self) -> bool:
        return self.kind is TriviaKind.WHITESPACE


def end_of_line(text: str = "\n") -> Trivia:
    return Trivia(TriviaKind.END_OF_LINE, text)


def whitespace(text: str = " ") -> Trivia:
    return Trivia(TriviaKind.WHITESPACE, text)


@dataclass(frozen=True)
class TextSpan:
    """Half-open character range ``[start, start + length)``."""

    start: int
    length: int = 0

    def __post_init__(self) -> None:
        if self.start < 0 or self.length < 0:
            raise ValueError(f"Invalid span: start={self.start}, length={self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def within(self, start: int, end: int) -> bool:
        """Whether this span lies inside ``[start, end)``.

        An empty span sitting exactly on ``end`` belongs to whatever follows,
        so it is not considered inside.
        """
        if self.is_empty:
            return start <= self.start < end
        return start <= self.start and self.end <= end


@dataclass(frozen=True, eq=False)
class Token:
    """A lexical token together with its trivia."""

    kind: str
    text: str
    leading: Tuple[Trivia, ...] = ()
    trailing: Tuple[Trivia, ...] = ()

    @property
    def full_text(self) -> str:
        return (
            "".join(t.text for t in self.leading)
            + self.text
            + "".join(t.text for t in self.trailing)
        )

    @cached_property
    def full_width(self) -> int:
        return len(self.full_text)

    @property
    def leading_width(self) -> int:
        return sum(len(t.text) for t in self.leading)

    def with_leading(self, leading: Sequence[Trivia]) -> "Token":
        return replace(self, leading=tuple(leading))

    def with_trailing(self, trailing: Sequence[Trivia]) -> "Token":
        return replace(self, trailing=tuple(trailing))

    def with_text(self, text: str, kind: Optional[str] = None) -> "Token":
        return replace(self, text=text, kind=kind if kind is not None else self.kind)

    def __repr__(self) -> str:
        return f"Token({self.kind!r}, {self.text!r})"


@dataclass(frozen=True, eq=False)
class Node:
    """An interior tree node holding an ordered sequence of nodes and tokens."""

    kind: str
    children: Tuple["SyntaxElement", ...] = ()

    @cached_property
    def full_width(self) -> int:
        return sum(child.full_width for child in self.children)

    @property
    def full_text(self) -> str:
        return "".join(token.full_text for token in self.tokens())

    def tokens(self) -> Iterator[Token]:
        """Yield every descendant token in document order."""
        for child in self.children:
            if isinstance(child, Token):
                yield child
            else:
                yield from child.tokens()

    def child_nodes(self) -> Iterator["Node"]:
        for child in self.children:
            if isinstance(child, Node):
                yield child

    def first_token(self) -> Optional[Token]:
        return next(self.tokens(), None)

    def last_token(self) -> Optional[Token]:
        last = None
        for last in self.tokens():
            pass
        return last

    def with_children(self, children: Sequence["SyntaxElement"]) -> "Node":
        return replace(self, children=tuple(children))

    def replace_elements(
        self, replacements: Dict[int, Sequence["SyntaxElement"]]
    ) -> "Node":
        """Rebuild the subtree, swapping elements keyed by ``id()``.

        Each replaced element is substituted by zero or more new elements.
        Subtrees without replacements are returned as-is.
        """
        if not replacements:
            return self
        changed = False
        children: List[SyntaxElement] = []
        for child in self.children:
            substitute = replacements.get(id(child))
            if substitute is not None:
                children.extend(substitute)
                changed = True
            elif isinstance(child, Node):
                updated = child.replace_elements(replacements)
                changed = changed or updated is not child
                children.append(updated)
            else:
                children.append(child)
        return self.with_children(children) if changed else self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind!r}, children={len(self.children)})"


SyntaxElement = Union[Node, Token]


@dataclass(frozen=True, eq=False)
class SyntaxTree:
    """Immutable snapshot of a source file."""

    root: Node

    @property
    def text(self) -> str:
        return self.root.full_text

    def tokens(self) -> Iterator[Token]:
        return self.root.tokens()

    def find_path(self, span: TextSpan) -> List[Node]:
        """Nodes from the root down to the innermost node containing ``span``.

        Token ranges include their trivia, so a position inside indentation or
        a comment resolves to the node owning the neighbouring token.
        """
        path = [self.root]
        node = self.root
        offset = 0
        while True:
            for child in node.children:
                width = child.full_width
                if span.within(offset, offset + width):
                    if isinstance(child, Node):
                        path.append(child)
                        node = child
                        break
                    return path
                offset += width
            else:
                return path

    def find_node(self, span: TextSpan) -> Optional[Node]:
        path = self.find_path(span)
        return path[-1] if path else None

    def find_token(self, span: TextSpan) -> Optional[Token]:
        """The token whose full range, trivia included, contains ``span``."""
        node = self.root
        offset = 0
        while True:
            for child in node.children:
                width = child.full_width
                if span.within(offset, offset + width):
                    if isinstance(child, Token):
                        return child
                    node = child
                    break
                offset += width
            else:
                return None

    def ancestors(self, target: Node) -> List[Node]:
        """Ancestors of ``target``, innermost first. Empty if not in the tree."""

        def walk(node: Node, trail: List[Node]) -> Optional[List[Node]]:
            if node is target:
                return trail
            for child in node.child_nodes():
                found = walk(child, trail + [node])
                if found is not None:
                    return found
            return None

        trail = walk(self.root, [])
        return list(reversed(trail)) if trail else []

    def span_of(self, element: SyntaxElement) -> Optional[TextSpan]:
        """Span of ``element`` without its outer trivia, or None if absent."""
        first = element if isinstance(element, Token) else element.first_token()
        last = element if isinstance(element, Token) else element.last_token()
        if first is None or last is None:
            return None
        offset = 0
        start = None
        for token in self.tokens():
            if token is first:
                start = offset + token.leading_width
            if token is last and start is not None:
                end = offset + token.leading_width + len(token.text)
                return TextSpan(start, end - start)
            offset += token.full_width
        return None

    def replace_node(self, old: Node, new: Node) -> "SyntaxTree":
        if old is self.root:
            return SyntaxTree(new)
        return SyntaxTree(self.root.replace_elements({id(old): (new,)}))

    def replace_token(self, old: Token, new: Sequence[Token]) -> "SyntaxTree":
        """Replace ``old`` with zero or more tokens. An empty list deletes it."""
        return SyntaxTree(self.root.replace_elements({id(old): tuple(new)}))

    def replace_tokens(self, mapping: Dict[int, Sequence[Token]]) -> "SyntaxTree":
        """Apply several token replacements, keyed by ``id(old_token)``, at once."""
        return SyntaxTree(self.root.replace_elements(mapping))
