"""
Typed node variants that the refactorings look at.

Each declaration kind answers "what are my modifiers" itself, so callers never
switch over node kinds. Parsers pick the class for a node through
``NODE_CLASSES``; anything not listed stays a plain ``Node``.
"""

from __future__ import annotations

import re
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Type

from .model import Node, Token

__all__ = [
    "MAIN_MODIFIERS",
    "HasModifiers",
    "TypeDeclaration",
    "ClassDeclaration",
    "StructDeclaration",
    "InterfaceDeclaration",
    "EnumDeclaration",
    "NamespaceDeclaration",
    "UsingDirective",
    "CompilationUnit",
    "NODE_CLASSES",
    "is_main_modifier",
]

# Accessibility keywords; every other modifier is left alone by the refactorings.
MAIN_MODIFIERS = frozenset({"public", "protected", "internal", "private"})

_IDENTIFIER = re.compile(r"@?[A-Za-z_][A-Za-z0-9_]*")
_USING_PREFIX_KEYWORDS = frozenset({"global", "using", "static", "unsafe"})


def is_main_modifier(token: Token) -> bool:
    return token.text in MAIN_MODIFIERS


class HasModifiers(Node):
    """A declaration that carries a modifier list before its keyword."""

    keyword: ClassVar[str] = ""

    def _keyword_index(self) -> Optional[int]:
        for index, child in enumerate(self.children):
            if isinstance(child, Token) and child.text == self.keyword:
                return index
        return None

    @property
    def modifiers(self) -> Tuple[Token, ...]:
        index = self._keyword_index()
        if index is None:
            return ()
        return tuple(c for c in self.children[:index] if isinstance(c, Token))

    def with_modifiers(self, modifiers: Sequence[Token]) -> "HasModifiers":
        """Return a copy whose modifier list is ``modifiers``.

        Attribute lists ahead of the modifiers keep their position.
        """
        index = self._keyword_index()
        if index is None:
            return self
        prefix = [c for c in self.children[:index] if isinstance(c, Node)]
        return self.with_children(prefix + list(modifiers) + list(self.children[index:]))


class TypeDeclaration(HasModifiers):
    """Base for class, struct, interface and enum declarations."""

    @property
    def name(self) -> Optional[str]:
        index = self._keyword_index()
        if index is None:
            return None
        for child in self.children[index + 1:]:
            if isinstance(child, Token) and _IDENTIFIER.fullmatch(child.text):
                return child.text
        return None


class ClassDeclaration(TypeDeclaration):
    keyword = "class"


class StructDeclaration(TypeDeclaration):
    keyword = "struct"


class InterfaceDeclaration(TypeDeclaration):
    keyword = "interface"


class EnumDeclaration(TypeDeclaration):
    keyword = "enum"


class NamespaceDeclaration(Node):
    """Block or file-scoped namespace."""

    @property
    def name(self) -> str:
        parts: List[str] = []
        seen_keyword = False
        for token in self.tokens():
            if not seen_keyword:
                seen_keyword = token.text == "namespace"
                continue
            if token.text in ("{", ";"):
                break
            parts.append(token.text)
        return "".join(parts)


class UsingDirective(Node):
    """A ``using`` directive at compilation-unit level."""

    @property
    def top_level_namespace(self) -> Optional[str]:
        """Leftmost identifier of the imported name.

        ``using System.Text;`` -> ``System``; for an alias
        ``using T = System.Text;`` the aliased name counts, and
        ``global::System`` is read past the ``::``.
        """
        texts = [t.text for t in self.tokens()]
        while texts and texts[0] in _USING_PREFIX_KEYWORDS:
            texts.pop(0)
        if "=" in texts:
            texts = texts[texts.index("=") + 1:]
        if "::" in texts:
            texts = texts[texts.index("::") + 1:]
        for text in texts:
            if _IDENTIFIER.fullmatch(text):
                return text
        return None


class CompilationUnit(Node):
    """Root of a source file."""

    @property
    def usings(self) -> Tuple[UsingDirective, ...]:
        return tuple(c for c in self.children if isinstance(c, UsingDirective))


NODE_CLASSES: Dict[str, Type[Node]] = {
    "compilation_unit": CompilationUnit,
    "using_directive": UsingDirective,
    "class_declaration": ClassDeclaration,
    "struct_declaration": StructDeclaration,
    "interface_declaration": InterfaceDeclaration,
    "enum_declaration": EnumDeclaration,
    "namespace_declaration": NamespaceDeclaration,
    "file_scoped_namespace_declaration": NamespaceDeclaration,
}
