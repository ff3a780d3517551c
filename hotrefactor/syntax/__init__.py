"""
Syntax model for HotRefactor.

Provides the immutable, lossless tree the refactorings read and rewrite:
- Tokens with leading/trailing trivia
- Generic and typed nodes (declarations, using directives)
- Tree snapshots with span lookup and structural replacement
"""

from .model import (
    Node,
    SyntaxElement,
    SyntaxTree,
    TextSpan,
    Token,
    Trivia,
    TriviaKind,
    end_of_line,
    whitespace,
)
from .declarations import (
    MAIN_MODIFIERS,
    NODE_CLASSES,
    ClassDeclaration,
    CompilationUnit,
    EnumDeclaration,
    HasModifiers,
    InterfaceDeclaration,
    NamespaceDeclaration,
    StructDeclaration,
    TypeDeclaration,
    UsingDirective,
    is_main_modifier,
)

__all__ = [
    "Node",
    "SyntaxElement",
    "SyntaxTree",
    "TextSpan",
    "Token",
    "Trivia",
    "TriviaKind",
    "end_of_line",
    "whitespace",
    "MAIN_MODIFIERS",
    "NODE_CLASSES",
    "ClassDeclaration",
    "CompilationUnit",
    "EnumDeclaration",
    "HasModifiers",
    "InterfaceDeclaration",
    "NamespaceDeclaration",
    "StructDeclaration",
    "TypeDeclaration",
    "UsingDirective",
    "is_main_modifier",
]
