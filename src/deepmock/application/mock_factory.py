"""Application layer - Mock implementations backed by ``unittest.mock``."""

import collections.abc
import inspect
import logging
from typing import Any, Callable, Dict, Generic, Optional, Tuple, Type, TypeVar, get_type_hints
from unittest.mock import create_autospec

from deepmock.application.introspection import TypeIntrospector
from deepmock.application.reflection_cache import ReflectionCache
from deepmock.domain import DefaultValue, IMockFactory

T = TypeVar("T")

_log = logging.getLogger("deepmock.mocks")

_MISSING = object()

_introspector = TypeIntrospector()


class MockHandle(Generic[T]):
    """Control handle of a synthesized interface implementation.

    Wraps the autospecced mock handed to the system under test, so tests can
    configure and verify it without reaching into the subject.

    Attributes:
        spec: The interface the mock implements.
        mock: The mock object itself.

    Example:
        >>> handle = result.get_control_handle(IDataSource)
        >>> handle.setup("fetch", return_value=[1, 2])
        >>> result.get_subject().run()
        >>> handle.verify("fetch", times=1)
    """

    def __init__(self, spec: Type[T], mock: Any) -> None:
        self.spec = spec
        self.mock = mock

    def setup(self, method: str, return_value: Any = _MISSING, side_effect: Any = _MISSING) -> Any:
        """Configure what a method returns or raises.

        Args:
            method: Name of the method on the interface.
            return_value: Value returned by the method.
            side_effect: Exception, iterable or callable, as in ``unittest.mock``.

        Returns:
            The method mock, for further configuration.
        """
        method_mock = getattr(self.mock, method)
        if return_value is not _MISSING:
            method_mock.return_value = return_value
        if side_effect is not _MISSING:
            method_mock.side_effect = side_effect
        return method_mock

    def verify(self, method: str, times: Optional[int] = None) -> None:
        """Assert that a method was called.

        Args:
            method: Name of the method on the interface.
            times: Exact number of expected calls, or None for at least once.

        Raises:
            AssertionError: If the calls do not match.
        """
        method_mock = getattr(self.mock, method)
        if times is None:
            method_mock.assert_called()
            return
        if method_mock.call_count != times:
            raise AssertionError(
                f"Expected '{method}' to be called {times} times. Called {method_mock.call_count} times."
            )

    def reset(self) -> None:
        """Forget recorded calls, keeping configured return values."""
        self.mock.reset_mock()

    def __repr__(self) -> str:
        return f"MockHandle({getattr(self.spec, '__name__', self.spec)})"


class AutospecMockFactory(IMockFactory):
    """Creates interface implementations with ``unittest.mock.create_autospec``.

    Under ``DefaultValue.EMPTY`` every method annotated to return a collection
    returns an empty one, so unconfigured calls do not feed mocks into code
    that iterates over the result.

    Attributes:
        _default_value: Policy for unconfigured methods.
        _cache: Memoization of the collection-returning methods per interface.
    """

    def __init__(
        self,
        default_value: DefaultValue = DefaultValue.EMPTY,
        cache: Optional[ReflectionCache] = None,
    ) -> None:
        self._default_value = default_value
        self._cache = cache if cache is not None else ReflectionCache()

    @property
    def default_value(self) -> DefaultValue:
        return self._default_value

    def create(self, interface_type: Type[T]) -> Tuple[Any, MockHandle[T]]:
        """Create an autospecced implementation and its control handle.

        Args:
            interface_type: The abstract class or protocol to implement.

        Returns:
            The mock and the handle wrapping it.
        """
        mock = create_autospec(interface_type, instance=True)

        if self._default_value is DefaultValue.EMPTY:
            empty_returns = self._cache.mock_spec(interface_type, collection_returning_methods)
            for method_name, empty_factory in empty_returns.items():
                getattr(mock, method_name).return_value = empty_factory()

        return mock, MockHandle(interface_type, mock)


def collection_returning_methods(interface_type: Type) -> Dict[str, Callable[[], Any]]:
    """Find the methods of an interface annotated to return a collection.

    Args:
        interface_type: The class to scan.

    Returns:
        Method name mapped to a factory of the matching empty collection.
    """
    methods: Dict[str, Callable[[], Any]] = {}
    for name, member in inspect.getmembers(interface_type, inspect.isfunction):
        if name.startswith("__"):
            continue
        try:
            annotation = get_type_hints(member).get("return")
        except (NameError, TypeError, AttributeError):
            _log.debug("cannot resolve return annotation of %s.%s", interface_type.__name__, name)
            continue
        empty_factory = _empty_collection_factory(annotation)
        if empty_factory is not None:
            methods[name] = empty_factory
    return methods


def _empty_collection_factory(annotation: Any) -> Optional[Callable[[], Any]]:
    # Optional[List[int]] and Annotated[List[int], ...] reduce to list.
    origin = _introspector.normalize(annotation)
    if origin is Any or not isinstance(origin, type):
        return None
    if issubclass(origin, (str, bytes, bytearray, collections.abc.Iterator)):
        return None
    if not issubclass(origin, collections.abc.Iterable):
        return None

    if not inspect.isabstract(origin) and origin.__module__ in ("builtins", "collections"):
        return origin
    if issubclass(origin, collections.abc.Mapping):
        return dict
    if issubclass(origin, collections.abc.Set):
        return set
    return list
