"""
Main API interface for HotRefactor

Provides a unified facade over the refactoring providers and the bundled
syntax host, for library users and the command-line interface.
"""

import asyncio
import difflib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .cancellation import CancellationToken
from .config import HotRefactorConfig
from .document import Document
from .errors import ActionNotFoundError
from .host import CSharpSyntaxHost
from .interfaces import SyntaxHostProtocol
from .refactoring.actions import InvocationContext, RefactoringAction
from .refactoring.providers import (
    AddNewlineBetweenUsingGroupsProvider,
    ChangeModifierProvider,
    RefactoringProvider,
)
from .syntax import NamespaceDeclaration, TextSpan, TypeDeclaration

logger = logging.getLogger(__name__)

PROVIDER_CLASSES = {
    ChangeModifierProvider.name: ChangeModifierProvider,
    AddNewlineBetweenUsingGroupsProvider.name: AddNewlineBetweenUsingGroupsProvider,
}


@dataclass
class RefactoringResult:
    """Standardized refactoring result structure."""

    success: bool
    title: str
    original_text: str
    new_text: str
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return self.original_text != self.new_text

    def diff(self, path: str = "source") -> str:
        """Unified diff between the original and the refactored text."""
        return "".join(
            difflib.unified_diff(
                self.original_text.splitlines(keepends=True),
                self.new_text.splitlines(keepends=True),
                fromfile=f"a/{path}",
                tofile=f"b/{path}",
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "title": self.title,
            "changed": self.changed,
            "new_text": self.new_text,
            "errors": self.errors,
            "metadata": self.metadata,
        }


class HotRefactor:
    """
    Main API class for HotRefactor.

    Owns one instance of every enabled provider and routes invocations to
    them. Each call works on an immutable snapshot, so one instance can serve
    any number of documents.
    """

    def __init__(
        self,
        config: Optional[HotRefactorConfig] = None,
        host: Optional[SyntaxHostProtocol] = None,
    ):
        """
        Initialize HotRefactor with optional configuration.

        Args:
            config: Optional configuration object. If None, uses default configuration.
            host: Syntax host to read trees from. Defaults to the tree-sitter C# host.
        """
        self.config = config or HotRefactorConfig.default()
        self.host = host or CSharpSyntaxHost(self.config.host_settings)
        self.providers: List[RefactoringProvider] = [
            PROVIDER_CLASSES[name](self.host, self.config)
            for name in self.config.provider_settings.enabled_providers
        ]
        logger.debug(f"HotRefactor initialized with providers: {[p.name for p in self.providers]}")

    def open_document(self, text: str, path: Optional[str] = None) -> Document:
        """Wrap source text; it is parsed on first use."""
        return Document(text=text, path=path)

    async def compute_actions(
        self,
        document: Document,
        span: TextSpan,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> List[RefactoringAction]:
        """Collect the actions every enabled provider offers at ``span``."""
        token = cancellation_token or CancellationToken()
        document = await self._parsed(document, token)
        invocation = InvocationContext(document=document, span=span, cancellation_token=token)

        actions: List[RefactoringAction] = []
        for provider in self.providers:
            actions.extend(await provider.compute_actions(invocation))
        return actions

    async def apply_action(
        self,
        document: Document,
        span: TextSpan,
        title: str,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> RefactoringResult:
        """Apply the action titled ``title`` at ``span``.

        Raises:
            ActionNotFoundError: If no provider offers ``title`` at ``span``.
        """
        actions = await self.compute_actions(document, span, cancellation_token)
        action = next((a for a in actions if a.title == title), None)
        if action is None:
            raise ActionNotFoundError(title, [a.title for a in actions])

        new_document = await action.apply(cancellation_token)
        return RefactoringResult(
            success=True,
            title=title,
            original_text=document.text,
            new_text=new_document.text,
            metadata={
                "provider": action.provider.name,
                "path": document.path,
                "position": span.start,
            },
        )

    async def describe_target(
        self,
        document: Document,
        span: TextSpan,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Qualified name of the type declaration at ``span``, if any."""
        token = cancellation_token or CancellationToken()
        document = await self._parsed(document, token)
        tree = document.tree
        node = self.host.find_node(tree, span)
        if not isinstance(node, TypeDeclaration):
            return None

        parts = [node.name or "?"]
        for ancestor in tree.ancestors(node):
            if isinstance(ancestor, TypeDeclaration):
                parts.append(ancestor.name or "?")
            elif isinstance(ancestor, NamespaceDeclaration):
                parts.append(ancestor.name)
        return ".".join(reversed(parts))

    def list_titles(self, text: str, position: int, path: Optional[str] = None) -> List[str]:
        """Synchronous helper: titles offered at ``position`` in ``text``."""
        document = self.open_document(text, path)
        actions = asyncio.run(self.compute_actions(document, TextSpan(position)))
        return [action.title for action in actions]

    def refactor_source(
        self, text: str, position: int, title: str, path: Optional[str] = None
    ) -> RefactoringResult:
        """Synchronous helper: apply ``title`` at ``position`` in ``text``."""
        document = self.open_document(text, path)
        return asyncio.run(self.apply_action(document, TextSpan(position), title))

    async def _parsed(self, document: Document, token: CancellationToken) -> Document:
        if document.tree is not None:
            return document
        tree = await self.host.get_syntax_tree(document, token)
        return document.with_tree(tree)
