"""
Shared fixtures for HotRefactor tests.
"""

from typing import List

import pytest

from hotrefactor.api import HotRefactor
from hotrefactor.cancellation import CancellationToken
from hotrefactor.host import CSharpSyntaxHost
from hotrefactor.refactoring.actions import InvocationContext, RefactoringAction
from hotrefactor.refactoring.providers import (
    AddNewlineBetweenUsingGroupsProvider,
    ChangeModifierProvider,
)
from hotrefactor.syntax import TextSpan


class RefactoringVerifier:
    """Runs one provider over a source and checks the resulting text."""

    def __init__(self, provider, host: CSharpSyntaxHost):
        self.provider = provider
        self.host = host

    async def actions(self, source: str, position: int = 0) -> List[RefactoringAction]:
        document = self.host.open_document(source)
        invocation = InvocationContext(document=document, span=TextSpan(position))
        return await self.provider.compute_actions(invocation)

    async def titles(self, source: str, position: int = 0) -> List[str]:
        return [action.title for action in await self.actions(source, position)]

    async def apply(self, source: str, position: int, title: str) -> str:
        actions = await self.actions(source, position)
        matching = [action for action in actions if action.title == title]
        assert matching, f"{title!r} not offered; got {[a.title for a in actions]}"
        document = await matching[0].apply(CancellationToken())
        return document.text

    async def verify(self, old_source: str, new_source: str, position: int, title: str) -> None:
        assert await self.apply(old_source, position, title) == new_source


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in (
        "HOTREFACTOR_DIRECT_TARGETS",
        "HOTREFACTOR_LINE_TERMINATOR",
        "HOTREFACTOR_ENABLED_PROVIDERS",
        "HOTREFACTOR_MAX_FILE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def host():
    """Tree-sitter backed C# host."""
    return CSharpSyntaxHost()


@pytest.fixture
def hotrefactor():
    """Facade with default configuration."""
    return HotRefactor()


@pytest.fixture
def change_modifier(host):
    """Verifier for the accessibility refactoring."""
    return RefactoringVerifier(ChangeModifierProvider(host), host)


@pytest.fixture
def using_groups(host):
    """Verifier for the using-group refactoring."""
    return RefactoringVerifier(AddNewlineBetweenUsingGroupsProvider(host), host)


@pytest.fixture
def class_source():
    """Build ``<modifier> class Class1`` with an empty body."""

    def build(modifier: str, newline: str = "\n") -> str:
        return f"{modifier} class Class1{newline}{{{newline}}}"

    return build
