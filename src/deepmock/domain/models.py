from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from deepmock.domain.enums import DefaultValue, Strategy


class ConstructorParameter(BaseModel):
    """A required constructor parameter.

    Attributes:
        name: Parameter name as declared in the signature.
        annotation: Normalized parameter type.
        kind: Name of the ``inspect.Parameter`` kind.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The parameter name.")
    annotation: Any = Field(..., description="The normalized parameter type.")
    kind: str = Field(default="POSITIONAL_OR_KEYWORD", description="The inspect.Parameter kind name.")


class Constructor(BaseModel):
    """A way of building an instance of a class.

    Either ``__init__`` (invoked by calling the class) or a classmethod that
    returns an instance of its own class.

    Attributes:
        owner: The class being constructed.
        name: ``"__init__"`` or the attribute name of the alternate constructor.
        parameters: Required parameters in declaration order.
        order: Declaration index, used to break ties.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    owner: Any = Field(..., description="The class this constructor builds.")
    name: str = Field(default="__init__", description="The constructor attribute name.")
    parameters: Tuple[ConstructorParameter, ...] = Field(
        default=(), description="Required parameters in declaration order."
    )
    order: int = Field(default=0, description="Declaration index of the constructor.")

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def parameter_types(self) -> Tuple[Any, ...]:
        return tuple(parameter.annotation for parameter in self.parameters)

    @property
    def is_init(self) -> bool:
        return self.name == "__init__"

    def invoke(self, arguments: List[Any]) -> Any:
        """Call the constructor with one argument per parameter.

        Args:
            arguments: Values matching ``parameters`` position by position.

        Returns:
            Whatever the constructor returned.
        """
        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter, value in zip(self.parameters, arguments):
            if parameter.kind == "POSITIONAL_ONLY":
                args.append(value)
            else:
                kwargs[parameter.name] = value

        target = self.owner if self.is_init else getattr(self.owner, self.name)
        return target(*args, **kwargs)

    def describe(self) -> str:
        owner_name = getattr(self.owner, "__name__", repr(self.owner))
        signature = ", ".join(f"{p.name}: {getattr(p.annotation, '__name__', p.annotation)}" for p in self.parameters)
        if self.is_init:
            return f"{owner_name}({signature})"
        return f"{owner_name}.{self.name}({signature})"


class DependencyNode(BaseModel):
    """A node of the dependency tree built for one resolution.

    Attributes:
        dependency_type: The type this node stands for.
        strategy: How the type is synthesized.
        children: Child nodes, one per constructor parameter, in declaration order.
        parameter_names: Constructor parameter names matching ``children``.
        is_leaf: Whether the node is resolved without recursion.
        is_root: Whether this is the subject node of the build.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Any = Field(..., description="The type this node stands for.")
    strategy: Strategy = Field(..., description="How the type is synthesized.")
    children: Tuple["DependencyNode", ...] = Field(default=(), description="Child nodes in parameter order.")
    parameter_names: Tuple[str, ...] = Field(default=(), description="Parameter names matching the children.")
    is_leaf: bool = Field(default=False, description="Whether the node is a leaf.")
    is_root: bool = Field(default=False, description="Whether the node is the subject of the build.")

    def iter_nodes(self) -> Iterator["DependencyNode"]:
        """Iterate over this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def size(self) -> int:
        return sum(1 for _ in self.iter_nodes())


class ConstructionRecord(BaseModel):
    """Outcome of resolving one dependency type.

    Attributes:
        dependency_type: The resolved type.
        implementation: The object handed to constructors.
        control_handle: Handle used to configure the mock, only for synthesized mocks.
        constructor: The constructor that built the implementation, if one was called.
        arguments: The values passed to that constructor.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    dependency_type: Any = Field(..., description="The resolved type.")
    implementation: Optional[Any] = Field(default=None, description="The object passed to constructors.")
    control_handle: Optional[Any] = Field(default=None, description="The mock control handle, if mocked.")
    constructor: Optional[Constructor] = Field(default=None, description="The constructor that was called.")
    arguments: Tuple[Any, ...] = Field(default=(), description="The values passed to the constructor.")

    @property
    def is_mocked(self) -> bool:
        return self.control_handle is not None


class AutoMockSettings(BaseModel):
    """Configuration of the automatic mocker.

    Attributes:
        max_nodes: Ceiling on the number of nodes in one dependency tree.
        default_value: What unconfigured mock methods return.
        clear_cache_on_failure: Whether a failed resolution wipes the reflection cache.
        share_collections: Whether parameters typed with the same builtin collection
            receive one shared instance, like every other type, or a fresh one each.
    """

    model_config = ConfigDict(frozen=True)

    max_nodes: int = Field(default=100, ge=1, description="Maximum number of nodes in one dependency tree.")
    default_value: DefaultValue = Field(
        default=DefaultValue.EMPTY,
        description="What unconfigured mock methods return.",
    )
    clear_cache_on_failure: bool = Field(
        default=True,
        description="Clear the reflection cache when a resolution fails.",
    )
    share_collections: bool = Field(
        default=True,
        description="Share one instance of a builtin collection type across parameters.",
    )
