"""
Domain layer - Core models of dependency resolution.

This layer contains the types, errors and collaborator interfaces of the
automatic mocker. It has no dependencies on other layers.
"""

from .enums import DefaultValue, Strategy
from .exceptions import (
    AutoMockError,
    ConstructionFailedError,
    DependencyNotFoundError,
    GraphTooLargeError,
    NoConstructorFoundError,
    NotMockedError,
    SynthesisFailedError,
)
from .interfaces import IConstructionObserver, IMockFactory
from .models import (
    AutoMockSettings,
    ConstructionRecord,
    Constructor,
    ConstructorParameter,
    DependencyNode,
)

# Rebuild Pydantic models to resolve forward references
DependencyNode.model_rebuild()

__all__ = [
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
    # Interfaces
    "IMockFactory",
    "IConstructionObserver",
    # Models
    "AutoMockSettings",
    "ConstructorParameter",
    "Constructor",
    "DependencyNode",
    "ConstructionRecord",
]
