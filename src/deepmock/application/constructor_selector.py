"""Application layer - Preferred constructor selection."""

from typing import Any, Optional, Tuple, Type

from deepmock.application.introspection import TypeIntrospector
from deepmock.application.reflection_cache import ReflectionCache
from deepmock.domain import Constructor, NoConstructorFoundError


class ConstructorSelector:
    """Picks the constructor used both to walk and to instantiate a type.

    A zero-argument constructor always wins. Otherwise the constructor with
    the fewest parameters is chosen, ties going to the one declared first.

    Attributes:
        _introspector: Source of constructor signatures.
        _cache: Shared memoization of discovered and selected constructors.
    """

    def __init__(self, introspector: TypeIntrospector, cache: ReflectionCache) -> None:
        self._introspector = introspector
        self._cache = cache

    @property
    def introspector(self) -> TypeIntrospector:
        return self._introspector

    def constructors(self, dependency_type: Type) -> Tuple[Constructor, ...]:
        """Get every discoverable constructor of a type, in declaration order."""
        if not isinstance(dependency_type, type):
            return ()
        return self._cache.constructors(dependency_type, self._introspector.discover_constructors)

    def has_empty_constructor(self, dependency_type: Type) -> bool:
        return any(constructor.arity == 0 for constructor in self.constructors(dependency_type))

    def select_constructor(self, dependency_type: Type) -> Constructor:
        """Select the preferred constructor of a type.

        Args:
            dependency_type: The type to construct.

        Returns:
            The zero-argument constructor if there is one, else the one with
            the fewest parameters.

        Raises:
            NoConstructorFoundError: If the type has no discoverable constructor.
        """
        return self._cache.preferred_constructor(dependency_type, self._select)

    def parameter_types(self, dependency_type: Type) -> Tuple[Any, ...]:
        """Get the ordered parameter types of the preferred constructor."""
        return self._cache.parameter_types(
            dependency_type,
            lambda t: self.select_constructor(t).parameter_types,
        )

    def select_primitive_constructor(self, dependency_type: Type) -> Optional[Constructor]:
        """Select the smallest constructor that takes only primitive parameters.

        Returns:
            The constructor, or None when every constructor needs a non-primitive.
        """
        candidates = [
            constructor
            for constructor in self.constructors(dependency_type)
            if all(self._introspector.is_primitive(p) for p in constructor.parameter_types)
        ]
        return min(candidates, key=lambda c: (c.arity, c.order), default=None)

    def _select(self, dependency_type: Type) -> Constructor:
        constructors = self.constructors(dependency_type)
        if not constructors:
            raise NoConstructorFoundError(
                dependency_type,
                "no inspectable constructor with fully type-hinted required parameters",
            )
        return min(constructors, key=lambda c: (c.arity, c.order))
