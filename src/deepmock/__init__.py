"""
deepmock: Automatic construction of systems under test with mocked collaborators.

Public API exports for the deepmock package.
"""

# Application exports
from deepmock.application.auto_mocker import AutoMocker, resolve, shared_reflection_cache
from deepmock.application.mock_factory import AutospecMockFactory, MockHandle
from deepmock.application.reflection_cache import ReflectionCache
from deepmock.application.result import ConstructionResult

# Domain exports
from deepmock.domain.enums import DefaultValue, Strategy
from deepmock.domain.exceptions import (
    AutoMockError,
    ConstructionFailedError,
    DependencyNotFoundError,
    GraphTooLargeError,
    NoConstructorFoundError,
    NotMockedError,
    SynthesisFailedError,
)
from deepmock.domain.models import AutoMockSettings

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "AutoMocker",
    "resolve",
    "shared_reflection_cache",
    "ConstructionResult",
    "ReflectionCache",
    "AutospecMockFactory",
    "MockHandle",
    # Configuration
    "AutoMockSettings",
    # Enums
    "Strategy",
    "DefaultValue",
    # Exceptions
    "AutoMockError",
    "NoConstructorFoundError",
    "GraphTooLargeError",
    "SynthesisFailedError",
    "ConstructionFailedError",
    "DependencyNotFoundError",
    "NotMockedError",
]
