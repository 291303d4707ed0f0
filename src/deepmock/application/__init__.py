"""
Application layer - Resolution and synthesis use cases.

This layer walks constructor graphs, synthesizes mocks and assembles instances.
It depends only on the Domain layer.
"""

from .auto_mocker import AutoMocker, resolve, shared_reflection_cache
from .constructor_selector import ConstructorSelector
from .graph_builder import DependencyGraphBuilder
from .instance_builder import InstanceBuilder
from .introspection import TypeIntrospector
from .mock_factory import AutospecMockFactory, MockHandle
from .mock_synthesizer import MockSynthesizer
from .reflection_cache import ReflectionCache
from .result import ConstructionResult
from .type_classifier import TypeClassifier

__all__ = [
    "AutoMocker",
    "resolve",
    "shared_reflection_cache",
    "ConstructionResult",
    "ReflectionCache",
    "TypeIntrospector",
    "TypeClassifier",
    "ConstructorSelector",
    "DependencyGraphBuilder",
    "MockSynthesizer",
    "InstanceBuilder",
    "AutospecMockFactory",
    "MockHandle",
]
