"""Unit tests for TypeIntrospector."""

import collections.abc
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, NewType, Optional, Protocol, Sequence, TypeVar, Union

import pytest
from pydantic import BaseModel

from deepmock.application.introspection import TypeIntrospector

UserId = NewType("UserId", int)
T = TypeVar("T")


class Color(Enum):
    RED = 1
    GREEN = 2


class Clock:
    pass


class INotifier(Protocol):
    def notify(self, message: str) -> None: ...


class IStore(ABC):
    @abstractmethod
    def save(self, key: str) -> None: ...


class BaseWithoutAbstractMethods(ABC):
    pass


class Service:
    def __init__(self, clock: Clock, name: str, retries: int = 3, *args, **kwargs):
        self.clock = clock
        self.name = name

    @classmethod
    def with_clock(cls, clock: Clock) -> "Service":
        return cls(clock, "default")

    @classmethod
    def _internal(cls) -> "Service":
        return cls(Clock(), "internal")

    @classmethod
    def describe(cls) -> str:
        return cls.__name__


class Untyped:
    def __init__(self, dependency):
        self.dependency = dependency


class UntypedWithFactory:
    def __init__(self, dependency):
        self.dependency = dependency

    @classmethod
    def create(cls, clock: Clock) -> "UntypedWithFactory":
        return cls(clock)


class PositionalOnly:
    def __init__(self, clock: Clock, /):
        self.clock = clock


class ServerConfig(BaseModel):
    host: str
    port: int
    debug: bool = False


@dataclass
class Window:
    clock: Clock
    title: str
    tags: List[str] = field(default_factory=list)


class TestNormalize:
    """Test cases for annotation normalization."""

    @pytest.mark.parametrize(
        "annotation, expected",
        [
            (Clock, Clock),
            (Optional[Clock], Clock),
            (List[int], list),
            (list[int], list),
            (Dict[str, int], dict),
            (Sequence[int], collections.abc.Sequence),
            (UserId, int),
            (None, type(None)),
        ],
    )
    def test_normalize_to_class(self, annotation, expected):
        """Test annotations that have a class behind them."""
        assert TypeIntrospector().normalize(annotation) is expected

    @pytest.mark.parametrize("annotation", [Any, Union[int, str], T, "Clock"])
    def test_normalize_opaque_annotations_to_any(self, annotation):
        """Test annotations without a single class behind them."""
        assert TypeIntrospector().normalize(annotation) is Any

    def test_normalize_pep604_optional(self):
        """Test that X | None normalizes to X."""
        assert TypeIntrospector().normalize(Clock | None) is Clock


class TestTypeNature:
    """Test cases for primitive and interface detection."""

    @pytest.mark.parametrize("tp", [int, str, float, bool, bytes, Decimal, Color, type(None), Any])
    def test_primitives(self, tp):
        """Test that value types are primitive."""
        assert TypeIntrospector().is_primitive(tp) is True

    @pytest.mark.parametrize("tp", [Clock, list, IStore])
    def test_non_primitives(self, tp):
        """Test that reference types are not primitive."""
        assert TypeIntrospector().is_primitive(tp) is False

    def test_abstract_class_is_interface(self):
        """Test that a class with abstract methods is an interface."""
        assert TypeIntrospector().is_interface(IStore) is True

    def test_protocol_is_interface(self):
        """Test that a protocol is an interface."""
        assert TypeIntrospector().is_interface(INotifier) is True

    def test_abstract_collection_is_interface(self):
        """Test that abstract collection ABCs are interfaces."""
        assert TypeIntrospector().is_interface(collections.abc.Sequence) is True

    def test_concrete_classes_are_not_interfaces(self):
        """Test that concrete classes are not interfaces."""
        introspector = TypeIntrospector()
        assert introspector.is_interface(Clock) is False
        assert introspector.is_interface(BaseWithoutAbstractMethods) is False
        assert introspector.is_interface(Any) is False


class TestDiscoverConstructors:
    """Test cases for constructor discovery."""

    def test_init_comes_first_then_classmethods_in_declaration_order(self):
        """Test discovery order and that non-constructor classmethods are ignored."""
        constructors = TypeIntrospector().discover_constructors(Service)

        assert [c.name for c in constructors] == ["__init__", "with_clock", "_internal"]
        assert [c.order for c in constructors] == [0, 1, 2]

    def test_only_required_parameters_are_listed(self):
        """Test that defaults, *args and **kwargs are left out."""
        init = TypeIntrospector().discover_constructors(Service)[0]

        assert [p.name for p in init.parameters] == ["clock", "name"]
        assert init.parameter_types == (Clock, str)

    def test_class_without_init_has_empty_constructor(self):
        """Test that object.__init__ counts as a zero-argument constructor."""
        constructors = TypeIntrospector().discover_constructors(Clock)

        assert len(constructors) == 1
        assert constructors[0].arity == 0

    def test_untyped_constructor_is_skipped(self):
        """Test that a constructor with an unannotated required parameter is not discoverable."""
        assert TypeIntrospector().discover_constructors(Untyped) == ()

    def test_typed_factory_survives_untyped_init(self):
        """Test that a typed alternate constructor is kept when __init__ is skipped."""
        constructors = TypeIntrospector().discover_constructors(UntypedWithFactory)

        assert [c.name for c in constructors] == ["create"]
        assert constructors[0].order == 0

    def test_positional_only_kind_is_recorded(self):
        """Test that positional-only parameters keep their kind."""
        init = TypeIntrospector().discover_constructors(PositionalOnly)[0]

        assert init.parameters[0].kind == "POSITIONAL_ONLY"
        assert isinstance(init.invoke([Clock()]), PositionalOnly)

    def test_pydantic_model_fields_are_parameters(self):
        """Test that a pydantic model is read through its published signature."""
        init = TypeIntrospector().discover_constructors(ServerConfig)[0]

        assert [p.name for p in init.parameters] == ["host", "port"]
        assert init.parameter_types == (str, int)
        config = init.invoke(["localhost", 8080])
        assert isinstance(config, ServerConfig)
        assert config.port == 8080

    def test_dataclass_fields_are_parameters(self):
        """Test that a dataclass is read through its generated __init__."""
        init = TypeIntrospector().discover_constructors(Window)[0]

        assert [p.name for p in init.parameters] == ["clock", "title"]
        assert init.parameter_types == (Clock, str)
