"""Exception hierarchy for HotRefactor."""


class HotRefactorError(Exception):
    """Base class for all HotRefactor errors."""

    pass


class ConfigurationError(HotRefactorError):
    """Raised when configuration validation fails."""

    pass


class ActionNotFoundError(HotRefactorError):
    """Raised when a requested refactoring title is not offered at the position."""

    def __init__(self, title: str, available=()):
        self.title = title
        self.available = list(available)
        offered = ", ".join(repr(t) for t in self.available) or "none"
        super().__init__(f"Refactoring {title!r} is not available here (offered: {offered})")


class OperationCancelledError(HotRefactorError):
    """Raised when the host cancels an operation before it produced a result."""

    pass


class SourceTooLargeError(HotRefactorError):
    """Raised when a source file exceeds the configured size limit."""

    pass
