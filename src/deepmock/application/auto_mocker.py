"""Application layer - Entry point combining graph building and instantiation."""

import logging
from typing import Dict, Iterable, List, Optional, Type

from deepmock.application.constructor_selector import ConstructorSelector
from deepmock.application.graph_builder import DependencyGraphBuilder
from deepmock.application.instance_builder import UNSHARED_COLLECTION_TYPES, InstanceBuilder
from deepmock.application.introspection import TypeIntrospector
from deepmock.application.mock_factory import AutospecMockFactory
from deepmock.application.mock_synthesizer import MockSynthesizer
from deepmock.application.reflection_cache import ReflectionCache
from deepmock.application.result import ConstructionResult
from deepmock.application.type_classifier import TypeClassifier
from deepmock.domain import (
    AutoMockSettings,
    ConstructionRecord,
    DependencyNode,
    IConstructionObserver,
    IMockFactory,
)

_log = logging.getLogger("deepmock")

_shared_cache = ReflectionCache()


class AutoMocker:
    """Builds a system under test with every collaborator wired in.

    Orchestrates the graph builder and the instance builder over a shared
    reflection cache. A failed resolution leaves nothing behind: the error
    propagates, no partial result exists, and the reflection cache is cleared
    unless the settings say otherwise.

    Attributes:
        _settings: Node ceiling, mock default policy and failure policy.
        _cache: Reflection cache, shared with other mockers when passed in.
        _selector: Constructor selection.
        _classifier: Strategy classification.
        _graph_builder: Builds dependency trees.
        _synthesizer: Synthesizes leaf dependencies.
        _observers: Notified of every construction step.
    """

    def __init__(
        self,
        settings: Optional[AutoMockSettings] = None,
        cache: Optional[ReflectionCache] = None,
        mock_factory: Optional[IMockFactory] = None,
        observers: Optional[Iterable[IConstructionObserver]] = None,
    ) -> None:
        """Initialize the mocker and its components.

        Args:
            settings: Configuration; defaults to ``AutoMockSettings()``.
            cache: Reflection cache; defaults to the process-wide shared cache.
            mock_factory: Mock engine; defaults to ``AutospecMockFactory``.
            observers: Observers notified of every construction step.
        """
        self._settings = settings or AutoMockSettings()
        self._cache = cache if cache is not None else _shared_cache
        self._selector = ConstructorSelector(TypeIntrospector(), self._cache)
        self._classifier = TypeClassifier(self._selector)
        self._graph_builder = DependencyGraphBuilder(self._classifier, self._selector, self._settings.max_nodes)
        factory = mock_factory or AutospecMockFactory(self._settings.default_value, self._cache)
        self._synthesizer = MockSynthesizer(self._classifier, self._selector, factory)
        self._observers: List[IConstructionObserver] = list(observers or [])

    @property
    def settings(self) -> AutoMockSettings:
        return self._settings

    @property
    def cache(self) -> ReflectionCache:
        return self._cache

    @property
    def classifier(self) -> TypeClassifier:
        return self._classifier

    @property
    def selector(self) -> ConstructorSelector:
        return self._selector

    def add_observer(self, observer: IConstructionObserver) -> None:
        self._observers.append(observer)

    def build_graph(self, subject_type: Type) -> DependencyNode:
        """Build the dependency tree of a type without instantiating anything.

        Raises:
            GraphTooLargeError: If the tree exceeds the node ceiling.
            NoConstructorFoundError: If a composite dependency has no usable constructor.
        """
        try:
            return self._graph_builder.build(subject_type)
        except Exception as e:
            self._on_failure(subject_type, e)
            raise

    def resolve(
        self,
        subject_type: Type,
        observers: Optional[Iterable[IConstructionObserver]] = None,
    ) -> ConstructionResult:
        """Resolve a system under test and all of its dependencies.

        Args:
            subject_type: The class to build.
            observers: Extra observers for this resolution only.

        Returns:
            The construction result giving access to the subject and its mocks.

        Raises:
            AutoMockError: Any of its subclasses, when resolution fails.

        Example:
            >>> result = AutoMocker().resolve(Orchestrator)
            >>> orchestrator = result.get_subject(Orchestrator)
            >>> data_source = result.get_control_handle(IDataSource)
        """
        tree = self.build_graph(subject_type)

        records: Dict[Type, ConstructionRecord] = {}
        instance_builder = InstanceBuilder(
            self._synthesizer,
            self._selector,
            self._observers + list(observers or []),
            () if self._settings.share_collections else UNSHARED_COLLECTION_TYPES,
        )
        try:
            instance_builder.instantiate(tree, records)
        except Exception as e:
            self._on_failure(subject_type, e)
            raise

        result = ConstructionResult(records, subject_type, tree)
        _log.info(
            "resolved %s: %d dependencies, %d mocked",
            getattr(subject_type, "__name__", subject_type),
            len(result),
            len(result.mocked_types()),
        )
        return result

    def _on_failure(self, subject_type: Type, error: Exception) -> None:
        _log.warning("resolution of %s failed: %s", getattr(subject_type, "__name__", subject_type), error)
        if self._settings.clear_cache_on_failure:
            self._cache.clear()


def shared_reflection_cache() -> ReflectionCache:
    """Get the reflection cache shared by every mocker created without one."""
    return _shared_cache


def resolve(
    subject_type: Type,
    settings: Optional[AutoMockSettings] = None,
    observers: Optional[Iterable[IConstructionObserver]] = None,
) -> ConstructionResult:
    """Resolve a system under test with a default ``AutoMocker``.

    Args:
        subject_type: The class to build.
        settings: Optional configuration.
        observers: Optional observers of the construction steps.

    Returns:
        The construction result.
    """
    return AutoMocker(settings).resolve(subject_type, observers)
