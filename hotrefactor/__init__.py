"""
HotRefactor - cursor-triggered, text-preserving refactorings for C# sources

Offers access-modifier changes on type declarations and blank-line separation
between using-directive groups, applied as minimal edits over a lossless
syntax tree.
"""

__version__ = "0.1.0"
__author__ = "HotRefactor Team"

__all__ = [
    "__version__",
    "__author__",
    # Main API
    "HotRefactor",
    "RefactoringResult",
    "HotRefactorConfig",
    "load_config",
    # Host and documents
    "CSharpSyntaxHost",
    "Document",
    "CancellationToken",
    # Errors
    "HotRefactorError",
    "ConfigurationError",
    "ActionNotFoundError",
    "OperationCancelledError",
    "SourceTooLargeError",
]


def __getattr__(name):
    """Lazy loading of main API classes to keep the tree-sitter import off package import."""
    if name in {"HotRefactor", "RefactoringResult"}:
        from .api import HotRefactor, RefactoringResult
        return {"HotRefactor": HotRefactor, "RefactoringResult": RefactoringResult}[name]

    if name in {"HotRefactorConfig", "load_config"}:
        from .config import HotRefactorConfig, load_config
        return {"HotRefactorConfig": HotRefactorConfig, "load_config": load_config}[name]

    if name == "CSharpSyntaxHost":
        from .host import CSharpSyntaxHost
        return CSharpSyntaxHost

    if name == "Document":
        from .document import Document
        return Document

    if name == "CancellationToken":
        from .cancellation import CancellationToken
        return CancellationToken

    if name in {
        "HotRefactorError",
        "ConfigurationError",
        "ActionNotFoundError",
        "OperationCancelledError",
        "SourceTooLargeError",
    }:
        from . import errors
        return getattr(errors, name)

    raise AttributeError(f"module 'hotrefactor' has no attribute '{name}'")
