"""Application layer - Shared memoization of reflection work."""

import logging
import threading
from typing import Any, Callable, Dict, Type, TypeVar

V = TypeVar("V")

_log = logging.getLogger("deepmock.cache")


class ReflectionCache:
    """Thread-safe memoization of constructor discovery and mock specs.

    One instance is meant to be shared by every resolution in a process (or a
    test session). Values are computed outside the lock and inserted
    first-writer-wins, so concurrent callers always read the same entry and a
    reader never sees a half-written one. ``clear()`` wipes every table at once.

    Attributes:
        _constructors: Discovered constructors per type.
        _preferred_constructors: Selected constructor per type.
        _parameter_types: Parameter types of the selected constructor per type.
        _mock_specs: Empty-collection return values per interface type.
        _lock: Guards inserts and clears.
    """

    def __init__(self) -> None:
        """Initialize the cache with empty tables."""
        self._constructors: Dict[Type, Any] = {}
        self._preferred_constructors: Dict[Type, Any] = {}
        self._parameter_types: Dict[Type, Any] = {}
        self._mock_specs: Dict[Type, Any] = {}
        self._lock = threading.RLock()

    def _get_or_add(self, table: Dict[Type, Any], key: Type, factory: Callable[[Type], V]) -> V:
        try:
            return table[key]
        except KeyError:
            pass

        value = factory(key)
        with self._lock:
            return table.setdefault(key, value)

    def constructors(self, dependency_type: Type, factory: Callable[[Type], V]) -> V:
        """Get or compute the discovered constructors of a type."""
        return self._get_or_add(self._constructors, dependency_type, factory)

    def preferred_constructor(self, dependency_type: Type, factory: Callable[[Type], V]) -> V:
        """Get or compute the constructor selected for a type."""
        return self._get_or_add(self._preferred_constructors, dependency_type, factory)

    def parameter_types(self, dependency_type: Type, factory: Callable[[Type], V]) -> V:
        """Get or compute the parameter types of the constructor selected for a type."""
        return self._get_or_add(self._parameter_types, dependency_type, factory)

    def mock_spec(self, interface_type: Type, factory: Callable[[Type], V]) -> V:
        """Get or compute the default return values of an interface's methods."""
        return self._get_or_add(self._mock_specs, interface_type, factory)

    def clear(self) -> None:
        """Drop every cached entry.

        Called after a failed resolution so that no malformed entry leaks into
        later, unrelated resolutions.
        """
        with self._lock:
            self._constructors.clear()
            self._preferred_constructors.clear()
            self._parameter_types.clear()
            self._mock_specs.clear()
        _log.debug("reflection cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return (
                len(self._constructors)
                + len(self._preferred_constructors)
                + len(self._parameter_types)
                + len(self._mock_specs)
            )
