"""Application layer - Synthesis strategy classification."""

from enum import Enum
from typing import Any, Type

from deepmock.application.constructor_selector import ConstructorSelector
from deepmock.domain import Strategy


class TypeClassifier:
    """Decides how a dependency type is synthesized.

    Rules, in priority order:

    1. Primitive, string, enum or value type: ``LEAF_PRIMITIVE``.
    2. Abstract class or protocol: ``LEAF_INTERFACE``.
    3. Has a zero-argument constructor: ``LEAF_EMPTY_CONSTRUCTIBLE``.
    4. Has a constructor taking only primitives: ``LEAF_PRIMITIVE_CONSTRUCTIBLE``.
    5. Anything else: ``COMPOSITE``.

    Classification has no side effects besides filling the reflection cache.
    """

    def __init__(self, selector: ConstructorSelector) -> None:
        self._selector = selector
        self._introspector = selector.introspector

    def classify(self, dependency_type: Type) -> Strategy:
        """Classify a type.

        Args:
            dependency_type: A normalized type.

        Returns:
            The synthesis strategy for the type.
        """
        if self._introspector.is_primitive(dependency_type):
            return Strategy.LEAF_PRIMITIVE
        if self._introspector.is_interface(dependency_type):
            return Strategy.LEAF_INTERFACE
        if self._selector.has_empty_constructor(dependency_type):
            return Strategy.LEAF_EMPTY_CONSTRUCTIBLE
        if self._selector.select_primitive_constructor(dependency_type) is not None:
            return Strategy.LEAF_PRIMITIVE_CONSTRUCTIBLE
        return Strategy.COMPOSITE

    def is_leaf(self, dependency_type: Type) -> bool:
        return self.classify(dependency_type).is_leaf

    def default_value(self, dependency_type: Type) -> Any:
        """Get the canonical default value of a primitive type.

        Returns:
            ``""`` for strings, the first member for enums, the zero value for
            other value types, and None when nothing more is known.
        """
        if not self._introspector.is_primitive(dependency_type) or dependency_type in (Any, type(None)):
            return None
        if issubclass(dependency_type, Enum):
            return next(iter(dependency_type), None)
        if issubclass(dependency_type, str):
            return dependency_type("")
        return dependency_type()
