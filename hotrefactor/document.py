"""Document values exchanged with the host."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .syntax import SyntaxTree


@dataclass(frozen=True)
class Document:
    """Source text plus, once parsed, the tree it was parsed into.

    Documents are never edited in place; applying a refactoring yields a new
    document wrapping the edited tree.
    """

    text: str
    path: Optional[str] = None
    tree: Optional[SyntaxTree] = field(default=None, compare=False, repr=False)

    def with_tree(self, tree: SyntaxTree) -> "Document":
        return replace(self, text=tree.text, tree=tree)
