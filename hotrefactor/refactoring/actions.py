"""Values passed between the host, the providers and the apply step."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..cancellation import CancellationToken
from ..document import Document
from ..interfaces import RefactoringProviderProtocol
from ..syntax import TextSpan

__all__ = ["InvocationContext", "RefactoringAction"]


@dataclass(frozen=True)
class InvocationContext:
    """Where a refactoring was requested: the document and the cursor span."""

    document: Document
    span: TextSpan
    cancellation_token: CancellationToken = field(
        default_factory=CancellationToken, compare=False, repr=False
    )


@dataclass(frozen=True)
class RefactoringAction:
    """A named, not yet applied refactoring.

    ``edit`` is the provider-specific edit descriptor; it is handed back to the
    provider together with the invocation when the action is applied.
    """

    title: str
    provider: RefactoringProviderProtocol = field(compare=False, repr=False)
    invocation: InvocationContext = field(repr=False)
    edit: Any = None

    async def apply(self, cancellation_token: Optional[CancellationToken] = None) -> Document:
        token = cancellation_token or self.invocation.cancellation_token
        return await self.provider.apply(self.invocation, self.edit, token)
