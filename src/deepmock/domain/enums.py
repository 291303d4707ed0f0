from enum import Enum


class Strategy(str, Enum):
    """Defines how a dependency type is synthesized.

    Attributes:
        LEAF_PRIMITIVE: Primitive, string, enum or other value type; filled with a default value.
        LEAF_INTERFACE: Abstract class or protocol; replaced by a generated mock.
        LEAF_EMPTY_CONSTRUCTIBLE: Concrete class with a zero-argument constructor.
        LEAF_PRIMITIVE_CONSTRUCTIBLE: Concrete class with a constructor taking only primitives.
        COMPOSITE: Anything else; its constructor parameters are resolved recursively.
    """

    LEAF_PRIMITIVE = "leaf-primitive"
    LEAF_INTERFACE = "leaf-interface"
    LEAF_EMPTY_CONSTRUCTIBLE = "leaf-empty-constructible"
    LEAF_PRIMITIVE_CONSTRUCTIBLE = "leaf-primitive-constructible"
    COMPOSITE = "composite"

    @property
    def is_leaf(self) -> bool:
        return self is not Strategy.COMPOSITE

    def __str__(self) -> str:
        return self.value


class DefaultValue(str, Enum):
    """Defines what unconfigured mock methods return.

    Attributes:
        EMPTY: Methods annotated to return a collection return an empty one.
        MOCK: Plain autospec behaviour, every call returns another mock.
    """

    EMPTY = "empty"
    MOCK = "mock"

    def __str__(self) -> str:
        return self.value
