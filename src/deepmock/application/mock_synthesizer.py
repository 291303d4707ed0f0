"""Application layer - Synthesis of leaf dependencies."""

import logging

from deepmock.application.constructor_selector import ConstructorSelector
from deepmock.application.type_classifier import TypeClassifier
from deepmock.domain import (
    ConstructionFailedError,
    ConstructionRecord,
    Constructor,
    DependencyNode,
    IMockFactory,
    Strategy,
    SynthesisFailedError,
)

_log = logging.getLogger("deepmock.synthesis")


class MockSynthesizer:
    """Produces the record of a leaf node according to its strategy.

    - ``LEAF_PRIMITIVE``: the classifier default value.
    - ``LEAF_INTERFACE``: an implementation and control handle from the mock factory.
    - ``LEAF_EMPTY_CONSTRUCTIBLE``: the zero-argument constructor is called.
    - ``LEAF_PRIMITIVE_CONSTRUCTIBLE``: the primitive-only constructor is called
      with default values.

    Only interface leaves carry a control handle.
    """

    def __init__(self, classifier: TypeClassifier, selector: ConstructorSelector, mock_factory: IMockFactory) -> None:
        self._classifier = classifier
        self._selector = selector
        self._mock_factory = mock_factory

    def synthesize(self, node: DependencyNode) -> ConstructionRecord:
        """Synthesize the dependency a leaf node stands for.

        Args:
            node: A leaf node.

        Returns:
            The construction record of the node's type.

        Raises:
            SynthesisFailedError: If the mock factory cannot produce a mock.
            ConstructionFailedError: If a real constructor fails.
        """
        dependency_type = node.dependency_type

        if node.strategy is Strategy.LEAF_PRIMITIVE:
            return ConstructionRecord(
                dependency_type=dependency_type,
                implementation=self._classifier.default_value(dependency_type),
            )

        if node.strategy is Strategy.LEAF_INTERFACE:
            return self._mock(node)

        if node.strategy is Strategy.LEAF_EMPTY_CONSTRUCTIBLE:
            constructor = self._selector.select_constructor(dependency_type)
            return ConstructionRecord(
                dependency_type=dependency_type,
                implementation=invoke(constructor, []),
                constructor=constructor,
            )

        if node.strategy is Strategy.LEAF_PRIMITIVE_CONSTRUCTIBLE:
            constructor = self._selector.select_primitive_constructor(dependency_type)
            if constructor is None:
                raise ConstructionFailedError(dependency_type, "no constructor takes only primitive parameters")
            arguments = [self._classifier.default_value(t) for t in constructor.parameter_types]
            return ConstructionRecord(
                dependency_type=dependency_type,
                implementation=invoke(constructor, arguments),
                constructor=constructor,
                arguments=tuple(arguments),
            )

        raise ConstructionFailedError(dependency_type, f"cannot synthesize a {node.strategy} node")

    def _mock(self, node: DependencyNode) -> ConstructionRecord:
        dependency_type = node.dependency_type
        try:
            implementation, control_handle = self._mock_factory.create(dependency_type)
        except Exception as e:
            raise SynthesisFailedError(dependency_type, f"mock factory raised: {e}") from e

        if implementation is None:
            raise SynthesisFailedError(dependency_type, "mock factory returned no implementation")
        if control_handle is None:
            raise SynthesisFailedError(dependency_type, "mock factory returned no control handle")

        _log.debug("mocked %s", getattr(dependency_type, "__name__", dependency_type))
        return ConstructionRecord(
            dependency_type=dependency_type,
            implementation=implementation,
            control_handle=control_handle,
        )


def invoke(constructor: Constructor, arguments: list) -> object:
    """Call a constructor, turning failures into ``ConstructionFailedError``.

    Args:
        constructor: The constructor to call.
        arguments: One value per constructor parameter.

    Returns:
        The constructed instance.

    Raises:
        ConstructionFailedError: If the call raises or returns None.
    """
    try:
        instance = constructor.invoke(arguments)
    except Exception as e:
        raise ConstructionFailedError(constructor.owner, f"{constructor.describe()} raised: {e}") from e

    if instance is None:
        raise ConstructionFailedError(constructor.owner, f"{constructor.describe()} returned None")
    return instance
