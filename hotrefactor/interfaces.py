"""
Interfaces between HotRefactor and the environment hosting it.

The host owns parsing and persistence; refactoring providers only see the
interfaces below and the immutable trees they hand out.
"""

from typing import TYPE_CHECKING, Any, List, Optional, Protocol

from .cancellation import CancellationToken
from .document import Document
from .syntax import Node, SyntaxTree, TextSpan

if TYPE_CHECKING:
    from .refactoring.actions import InvocationContext, RefactoringAction


class SyntaxHostProtocol(Protocol):
    """Services a host provides to refactoring providers."""

    async def get_syntax_tree(
        self, document: Document, cancellation_token: Optional[CancellationToken] = None
    ) -> SyntaxTree:
        """Return the tree for ``document``; may suspend and may be cancelled."""
        ...

    def find_node(self, tree: SyntaxTree, span: TextSpan) -> Optional[Node]:
        """Return the innermost node containing ``span``."""
        ...


class RefactoringProviderProtocol(Protocol):
    """A source of refactoring actions for one kind of transformation."""

    name: str

    async def compute_actions(self, invocation: "InvocationContext") -> List["RefactoringAction"]:
        """Compute the actions offered at the invocation span."""
        ...

    async def apply(
        self,
        invocation: "InvocationContext",
        edit: Any,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Document:
        """Apply ``edit`` to a fresh snapshot of the invocation's document."""
        ...
