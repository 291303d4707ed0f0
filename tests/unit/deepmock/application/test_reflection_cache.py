"""Unit tests for ReflectionCache."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from deepmock.application.reflection_cache import ReflectionCache


class Service:
    pass


class Repository:
    pass


class TestReflectionCache:
    """Test cases for ReflectionCache."""

    def test_factory_is_called_once_per_key(self):
        """Test that a cached value is computed once."""
        cache = ReflectionCache()
        calls = []

        def factory(key):
            calls.append(key)
            return ("ctor", key)

        first = cache.preferred_constructor(Service, factory)
        second = cache.preferred_constructor(Service, factory)

        assert first is second
        assert calls == [Service]

    def test_tables_are_independent(self):
        """Test that each table caches its own entries."""
        cache = ReflectionCache()

        cache.constructors(Service, lambda t: "constructors")
        cache.parameter_types(Service, lambda t: "parameters")
        cache.mock_spec(Service, lambda t: "spec")

        assert cache.constructors(Service, lambda t: "other") == "constructors"
        assert cache.parameter_types(Service, lambda t: "other") == "parameters"
        assert cache.mock_spec(Service, lambda t: "other") == "spec"
        assert len(cache) == 3

    def test_failed_factory_inserts_nothing(self):
        """Test that an exception in the factory leaves no entry behind."""
        cache = ReflectionCache()

        def failing(key):
            raise RuntimeError("no constructor")

        with pytest.raises(RuntimeError):
            cache.preferred_constructor(Service, failing)

        assert len(cache) == 0
        assert cache.preferred_constructor(Service, lambda t: "ok") == "ok"

    def test_clear_drops_every_table(self):
        """Test that clear empties all tables."""
        cache = ReflectionCache()
        cache.constructors(Service, lambda t: 1)
        cache.preferred_constructor(Repository, lambda t: 2)
        cache.mock_spec(Repository, lambda t: 3)

        cache.clear()

        assert len(cache) == 0
        assert cache.constructors(Service, lambda t: "fresh") == "fresh"

    def test_concurrent_readers_observe_one_value(self):
        """Test that racing inserts converge on the first written value."""
        cache = ReflectionCache()
        barrier = threading.Barrier(8)

        def factory(key):
            return object()

        def read():
            barrier.wait()
            return cache.preferred_constructor(Service, factory)

        with ThreadPoolExecutor(max_workers=8) as executor:
            values = list(executor.map(lambda _: read(), range(8)))

        assert all(value is values[0] for value in values)
