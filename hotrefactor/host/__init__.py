"""
Syntax host adapters.

The refactoring core only depends on ``SyntaxHostProtocol``; this package
ships a tree-sitter based implementation for C# sources.
"""

from .tree_sitter_host import CSharpSyntaxHost, split_trivia

__all__ = ["CSharpSyntaxHost", "split_trivia"]
