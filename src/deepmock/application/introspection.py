"""Application layer - Type metadata provider built on ``inspect`` and type hints."""

import inspect
import logging
import types
import typing
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union, get_args, get_origin, get_type_hints

from deepmock.domain import Constructor, ConstructorParameter

_log = logging.getLogger("deepmock.introspection")

PRIMITIVE_TYPES: Tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    Decimal,
    Fraction,
    type(None),
)

_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))
_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class TypeIntrospector:
    """Reports constructor signatures and the nature of types.

    Every annotation is normalized to a class, or to ``typing.Any`` when no
    class stands behind it:

    - ``Optional[X]`` becomes ``X``.
    - Parametrized generics (``list[str]``, ``Sequence[Foo]``) become their origin.
    - ``Any``, multi-member unions, type variables and unresolved forward
      references become ``typing.Any``.
    """

    def normalize(self, annotation: Any) -> Any:
        """Normalize a type annotation to the class it stands for.

        Args:
            annotation: A raw annotation as found in a signature.

        Returns:
            A class, or ``typing.Any`` for opaque annotations.
        """
        if annotation is None or annotation is type(None):
            return type(None)
        if annotation is Any or isinstance(annotation, (str, typing.ForwardRef, typing.TypeVar)):
            return Any

        supertype = getattr(annotation, "__supertype__", None)
        if supertype is not None:
            return self.normalize(supertype)

        origin = get_origin(annotation)
        if origin in _UNION_ORIGINS:
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) == 1:
                return self.normalize(members[0])
            return Any
        if origin is typing.Annotated:
            return self.normalize(get_args(annotation)[0])
        if origin is not None:
            if isinstance(origin, type) and origin is not type:
                return origin
            return Any

        if isinstance(annotation, type):
            return annotation
        return Any

    def is_primitive(self, dependency_type: Any) -> bool:
        """Check whether a type is a primitive, string, enum or other value type."""
        if dependency_type is Any:
            return True
        if not isinstance(dependency_type, type):
            return False
        return issubclass(dependency_type, Enum) or issubclass(dependency_type, PRIMITIVE_TYPES)

    def is_interface(self, dependency_type: Any) -> bool:
        """Check whether a type is an abstract class or a protocol."""
        if not isinstance(dependency_type, type):
            return False
        if getattr(dependency_type, "_is_protocol", False):
            return True
        return inspect.isabstract(dependency_type)

    def discover_constructors(self, cls: Type) -> Tuple[Constructor, ...]:
        """Enumerate the constructors of a class in declaration order.

        ``__init__`` comes first, followed by every classmethod declared on the
        class that is annotated to return the class itself. Leading underscores
        do not hide a constructor. Parameters with defaults, ``*args`` and
        ``**kwargs`` are not required and are left out.

        Args:
            cls: The class to inspect.

        Returns:
            The usable constructors. Constructors whose signature cannot be
            inspected, or that have a required parameter without a type hint,
            are skipped.
        """
        candidates: List[Tuple[str, Optional[Callable]]] = [("__init__", self._init_target(cls))]
        for name, attribute in vars(cls).items():
            if isinstance(attribute, classmethod) and self._returns_own_class(attribute.__func__, cls):
                candidates.append((name, attribute.__func__))

        constructors: List[Constructor] = []
        for name, target in candidates:
            parameters = self._required_parameters(cls, name, target)
            if parameters is None:
                continue
            constructors.append(Constructor(owner=cls, name=name, parameters=parameters, order=len(constructors)))
        return tuple(constructors)

    def _init_target(self, cls: Type) -> Optional[Callable]:
        """Find the function whose signature governs calling the class."""
        if cls.__init__ is not object.__init__:
            return cls.__init__
        if getattr(cls, "__new__", object.__new__) is not object.__new__:
            return cls.__new__
        return None

    def _returns_own_class(self, func: Callable, cls: Type) -> bool:
        annotation = getattr(func, "__annotations__", {}).get("return")
        if annotation is None:
            return False
        if annotation is cls or annotation is getattr(typing, "Self", None):
            return True
        if isinstance(annotation, str):
            return annotation.strip("'\"") in (cls.__name__, cls.__qualname__, "Self")
        return False

    def _required_parameters(
        self, cls: Type, name: str, target: Optional[Callable]
    ) -> Optional[Tuple[ConstructorParameter, ...]]:
        if target is None:
            return ()

        signature = self._signature(cls, name, target)
        if signature is None:
            return None

        type_hints = self._type_hints(target)

        parameters: List[ConstructorParameter] = []
        for param_name, param in signature.parameters.items():
            if param.kind in _SKIPPED_KINDS:
                continue
            if param.default is not inspect.Parameter.empty:
                continue
            annotation = type_hints.get(param_name, param.annotation)
            if annotation is inspect.Parameter.empty:
                _log.debug(
                    "skipping %s.%s: parameter '%s' lacks type hint and has no default value",
                    cls.__name__,
                    name,
                    param_name,
                )
                return None
            parameters.append(
                ConstructorParameter(
                    name=param_name,
                    annotation=self.normalize(annotation),
                    kind=param.kind.name,
                )
            )
        return tuple(parameters)

    def _signature(self, cls: Type, name: str, target: Callable) -> Optional[inspect.Signature]:
        """Get the signature seen by callers, without ``self`` or ``cls``."""
        if name == "__init__":
            try:
                # The class signature honours __signature__, dataclasses and pydantic models.
                return inspect.signature(cls)
            except (TypeError, ValueError):
                pass

        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as e:
            _log.debug("cannot inspect %s.%s: %s", cls.__name__, name, e)
            return None
        # The first parameter is self (or cls) and is bound by the call.
        return signature.replace(parameters=list(signature.parameters.values())[1:])

    def _type_hints(self, target: Callable) -> Dict[str, Any]:
        try:
            return get_type_hints(target)
        except (NameError, TypeError, AttributeError):
            # Unresolvable forward references stay as strings and normalize to Any.
            return dict(getattr(target, "__annotations__", {}) or {})
