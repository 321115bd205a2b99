"""Custom exceptions for taskpath."""


class TaskpathError(Exception):
    """Base exception for all taskpath errors."""

    pass


class ValidationError(TaskpathError):
    """Raised when validation fails."""

    pass


class CircularDependencyError(ValidationError):
    """Raised when a circular dependency is detected and the cycle policy forbids it."""

    def __init__(self, message: str, cycles: list[list[str]] | None = None):
        super().__init__(message)
        self.cycles = cycles or []


class MissingReferenceError(ValidationError):
    """Raised when a referenced task ID does not exist."""

    pass


class ParseError(TaskpathError):
    """Raised when YAML parsing fails."""

    pass
