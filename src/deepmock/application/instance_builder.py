"""Application layer - Bottom-up instantiation of a dependency tree."""

import collections
import logging
from typing import Dict, Iterable, List, Optional, Tuple, Type

from deepmock.application.constructor_selector import ConstructorSelector
from deepmock.application.mock_synthesizer import MockSynthesizer, invoke
from deepmock.domain import ConstructionRecord, DependencyNode, IConstructionObserver

_log = logging.getLogger("deepmock.instances")

UNSHARED_COLLECTION_TYPES: Tuple[type, ...] = (list, dict, set, bytearray, collections.deque)


class InstanceBuilder:
    """Turns a dependency tree into live instances, children before parents.

    Records are memoized by type in the running records mapping, so a
    dependency reachable through several parameters or paths is resolved
    once and every consumer receives the same object. Types listed in
    ``unshared_types`` are the exception: each occurrence gets a fresh
    instance, and the records keep the first one.

    Attributes:
        _synthesizer: Resolves leaf nodes.
        _selector: Provides the constructor of composite nodes.
        _observers: Notified of every new record, in construction order.
        _unshared_types: Types built anew for every parameter.
    """

    def __init__(
        self,
        synthesizer: MockSynthesizer,
        selector: ConstructorSelector,
        observers: Optional[Iterable[IConstructionObserver]] = None,
        unshared_types: Tuple[type, ...] = (),
    ) -> None:
        self._synthesizer = synthesizer
        self._selector = selector
        self._observers: List[IConstructionObserver] = list(observers or [])
        self._unshared_types = unshared_types

    def add_observer(self, observer: IConstructionObserver) -> None:
        self._observers.append(observer)

    def instantiate(self, tree: DependencyNode, records: Dict[Type, ConstructionRecord]) -> ConstructionRecord:
        """Resolve a tree, filling ``records`` with one record per type.

        Args:
            tree: The node to resolve.
            records: Running mapping of the resolution, updated in place.

        Returns:
            The record of the node's type.

        Raises:
            ConstructionFailedError: If a real constructor raises or returns None.
            SynthesisFailedError: If a mock cannot be produced.
        """
        if tree.dependency_type not in self._unshared_types:
            existing = records.get(tree.dependency_type)
            if existing is not None:
                return existing

        if tree.is_leaf:
            record = self._synthesizer.synthesize(tree)
        else:
            arguments = [self.instantiate(child, records).implementation for child in tree.children]
            constructor = self._selector.select_constructor(tree.dependency_type)
            record = ConstructionRecord(
                dependency_type=tree.dependency_type,
                implementation=invoke(constructor, arguments),
                constructor=constructor,
                arguments=tuple(arguments),
            )

        records.setdefault(tree.dependency_type, record)
        _log.debug(
            "constructed %s%s",
            getattr(tree.dependency_type, "__name__", tree.dependency_type),
            " (mocked)" if record.is_mocked else "",
        )
        for observer in self._observers:
            observer.on_constructed(record, tree)
        return record
