from typing import Optional, Type


class AutoMockError(Exception):
    """Base exception for dependency resolution and mock synthesis errors.

    Attributes:
        cls: The type the error is about.
        reason: Optional reason for the failure.
    """

    def __init__(self, cls: Type, reason: Optional[str] = None) -> None:
        self.cls = cls
        self.reason = reason
        message = f"{self._summary} for type: {_type_name(cls)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)

    _summary = "Automatic mocking failed"


class NoConstructorFoundError(AutoMockError):
    """Raised when a type exposes no constructor that can be walked.

    This occurs when:
    - The constructor signature cannot be inspected (builtins implemented in C).
    - Every constructor has a required parameter without a type hint.
    """

    _summary = "No usable constructor found"


class GraphTooLargeError(AutoMockError):
    """Raised when the dependency graph grows past the configured node ceiling.

    Usually means a cyclic or explosively wide constructor graph.

    Attributes:
        limit: The node ceiling that was exceeded.
    """

    _summary = "Dependency graph too large"

    def __init__(self, cls: Type, limit: int) -> None:
        self.limit = limit
        super().__init__(cls, f"more than {limit} nodes, check for a constructor cycle")


class SynthesisFailedError(AutoMockError):
    """Raised when the mock factory cannot produce an implementation or a control handle."""

    _summary = "Mock synthesis failed"


class ConstructionFailedError(AutoMockError):
    """Raised when a real constructor raises or returns no instance."""

    _summary = "Construction failed"


class DependencyNotFoundError(AutoMockError):
    """Raised when a construction result holds no record for the requested type."""

    _summary = "No dependency recorded"


class NotMockedError(AutoMockError):
    """Raised when a control handle is requested for a type that was not mocked."""

    _summary = "Dependency was not mocked"


def _type_name(cls: Type) -> str:
    return getattr(cls, "__name__", repr(cls))
