"""Application layer - Dependency tree construction."""

import logging
from typing import Type

from deepmock.application.constructor_selector import ConstructorSelector
from deepmock.application.type_classifier import TypeClassifier
from deepmock.domain import DependencyNode, GraphTooLargeError, NoConstructorFoundError, Strategy

_log = logging.getLogger("deepmock.graph")

DEFAULT_MAX_NODES = 100


class _NodeBudget:
    """Counts the nodes created by one build against the ceiling."""

    def __init__(self, root_type: Type, limit: int) -> None:
        self.root_type = root_type
        self.limit = limit
        self.spent = 0

    def spend(self) -> None:
        self.spent += 1
        if self.spent > self.limit:
            raise GraphTooLargeError(self.root_type, self.limit)


class DependencyGraphBuilder:
    """Walks constructor signatures into a tree of dependency nodes.

    Leaf parameters become leaf nodes without further recursion; composite
    parameters are expanded through their preferred constructor. Children keep
    the declared parameter order, which later fixes the construction order.

    The number of nodes in one tree is bounded, which is what stops cyclic
    constructor graphs.

    Attributes:
        _classifier: Decides leaf versus composite.
        _selector: Picks the constructor to walk.
        _max_nodes: Node ceiling of a single build.
    """

    def __init__(
        self,
        classifier: TypeClassifier,
        selector: ConstructorSelector,
        max_nodes: int = DEFAULT_MAX_NODES,
    ) -> None:
        self._classifier = classifier
        self._selector = selector
        self._max_nodes = max_nodes

    def build(self, root_type: Type) -> DependencyNode:
        """Build the dependency tree of a root type.

        The root is expanded through its constructor even when it would
        classify as a constructible leaf, so the subject is always really
        constructed. Only a primitive or an interface root is a leaf, and a
        root without any usable constructor degenerates into a single mocked
        node instead of failing.

        Args:
            root_type: The system under test.

        Returns:
            The root node of the tree.

        Raises:
            GraphTooLargeError: If the tree exceeds the node ceiling.
            NoConstructorFoundError: If a composite dependency has no usable constructor.

        Example:
            >>> class Orchestrator:
            ...     def __init__(self, source: IDataSource, logger: Logger): ...
            >>> tree = builder.build(Orchestrator)
            >>> [child.dependency_type for child in tree.children]
            [IDataSource, Logger]
        """
        budget = _NodeBudget(root_type, self._max_nodes)
        try:
            tree = self._build_root(root_type, budget)
        except RecursionError as e:
            raise GraphTooLargeError(root_type, self._max_nodes) from e

        _log.debug("built dependency tree for %s with %d nodes", _name(root_type), budget.spent)
        return tree

    def _build_root(self, root_type: Type, budget: _NodeBudget) -> DependencyNode:
        strategy = self._classifier.classify(root_type)
        if strategy in (Strategy.LEAF_PRIMITIVE, Strategy.LEAF_INTERFACE):
            budget.spend()
            return DependencyNode(dependency_type=root_type, strategy=strategy, is_leaf=True, is_root=True)

        try:
            self._selector.select_constructor(root_type)
        except NoConstructorFoundError:
            _log.debug("%s has no usable constructor, mocking it as a single node", _name(root_type))
            budget.spend()
            return DependencyNode(
                dependency_type=root_type,
                strategy=Strategy.LEAF_INTERFACE,
                is_leaf=True,
                is_root=True,
            )

        return self._build_composite(root_type, budget, is_root=True)

    def _build_composite(self, dependency_type: Type, budget: _NodeBudget, is_root: bool = False) -> DependencyNode:
        budget.spend()
        constructor = self._selector.select_constructor(dependency_type)

        children = []
        for parameter_type in self._selector.parameter_types(dependency_type):
            strategy = self._classifier.classify(parameter_type)
            if strategy.is_leaf:
                budget.spend()
                children.append(DependencyNode(dependency_type=parameter_type, strategy=strategy, is_leaf=True))
            else:
                children.append(self._build_composite(parameter_type, budget))

        _log.debug("walked %s through %s", _name(dependency_type), constructor.describe())
        return DependencyNode(
            dependency_type=dependency_type,
            strategy=Strategy.COMPOSITE,
            children=tuple(children),
            parameter_names=tuple(parameter.name for parameter in constructor.parameters),
            is_root=is_root,
        )


def _name(dependency_type: Type) -> str:
    return getattr(dependency_type, "__name__", repr(dependency_type))
