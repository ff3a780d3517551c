"""
Refactoring providers.

A provider inspects the tree at the invocation span and offers named actions;
applying an action re-reads a fresh snapshot of the document and returns a
new document. Providers hold no state between invocations.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional

from ..cancellation import CancellationToken
from ..config import HotRefactorConfig
from ..document import Document
from ..interfaces import SyntaxHostProtocol
from ..syntax import CompilationUnit, SyntaxTree, TypeDeclaration
from .accessibility import AccessibilityState, analyze_modifiers
from .actions import InvocationContext, RefactoringAction
from .modifier_rewriter import ModifierRewriter
from .transitions import ModifierTransition, compute_transitions
from .using_groups import (
    ADD_NEWLINE_TITLE,
    UsingGroupEdit,
    add_separators,
    detect_line_terminator,
    find_missing_separators,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RefactoringProvider",
    "ChangeModifierProvider",
    "AddNewlineBetweenUsingGroupsProvider",
]


class RefactoringProvider(ABC):
    """Base class for refactoring providers."""

    name: ClassVar[str] = ""

    def __init__(self, host: SyntaxHostProtocol, config: Optional[HotRefactorConfig] = None):
        self.host = host
        self.config = config or HotRefactorConfig.default()

    @abstractmethod
    async def compute_actions(self, invocation: InvocationContext) -> List[RefactoringAction]:
        """Compute the actions offered at the invocation span."""

    @abstractmethod
    async def apply(
        self,
        invocation: InvocationContext,
        edit,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Document:
        """Apply ``edit`` and return the new document."""

    async def _get_tree(
        self, document: Document, cancellation_token: Optional[CancellationToken]
    ) -> SyntaxTree:
        token = cancellation_token or CancellationToken()
        tree = await self.host.get_syntax_tree(document, token)
        token.throw_if_cancellation_requested()
        return tree

    def _declaration_at(self, tree: SyntaxTree, invocation: InvocationContext) -> Optional[TypeDeclaration]:
        node = self.host.find_node(tree, invocation.span)
        return node if isinstance(node, TypeDeclaration) else None


class ChangeModifierProvider(RefactoringProvider):
    """Offers accessibility changes for class, struct, interface and enum declarations."""

    name = "change_modifier"

    def __init__(self, host: SyntaxHostProtocol, config: Optional[HotRefactorConfig] = None):
        super().__init__(host, config)
        self.rewriter = ModifierRewriter(
            AccessibilityState.from_keyword(keyword)
            for keyword in self.config.modifier_settings.direct_replacement_targets
        )

    async def compute_actions(self, invocation: InvocationContext) -> List[RefactoringAction]:
        tree = await self._get_tree(invocation.document, invocation.cancellation_token)
        declaration = self._declaration_at(tree, invocation)
        if declaration is None:
            return []

        analysis = analyze_modifiers(declaration.modifiers)
        transitions = compute_transitions(analysis)
        logger.debug(
            f"{declaration.name or declaration.kind}: state={analysis.state.name}, "
            f"redundant={analysis.is_redundant}, offering {len(transitions)} action(s)"
        )
        return [
            RefactoringAction(title=t.title, provider=self, invocation=invocation, edit=t)
            for t in transitions
        ]

    async def apply(
        self,
        invocation: InvocationContext,
        edit: ModifierTransition,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Document:
        tree = await self._get_tree(invocation.document, cancellation_token)
        declaration = self._declaration_at(tree, invocation)
        if declaration is None:
            return invocation.document

        new_tree = self.rewriter.rewrite(tree, declaration, edit.target)
        logger.info(f"Applied '{edit.title}' to {declaration.name or declaration.kind}")
        return invocation.document.with_tree(new_tree)


class AddNewlineBetweenUsingGroupsProvider(RefactoringProvider):
    """Offers a blank line between adjacent groups of using directives."""

    name = "using_groups"

    async def compute_actions(self, invocation: InvocationContext) -> List[RefactoringAction]:
        tree = await self._get_tree(invocation.document, invocation.cancellation_token)
        root = tree.root
        if not isinstance(root, CompilationUnit) or len(root.usings) < 2:
            return []

        boundaries = find_missing_separators(root)
        if not boundaries:
            return []

        logger.debug(f"Found {len(boundaries)} unseparated using group boundary(ies)")
        edit = UsingGroupEdit(title=ADD_NEWLINE_TITLE, boundaries=tuple(boundaries))
        return [RefactoringAction(title=edit.title, provider=self, invocation=invocation, edit=edit)]

    async def apply(
        self,
        invocation: InvocationContext,
        edit: UsingGroupEdit,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Document:
        tree = await self._get_tree(invocation.document, cancellation_token)
        terminator = detect_line_terminator(
            tree, self.config.using_group_settings.line_terminator
        )
        new_tree = add_separators(tree, edit.boundaries, terminator)
        logger.info(f"Applied '{edit.title}' at {len(edit.boundaries)} boundary(ies)")
        return invocation.document.with_tree(new_tree)
