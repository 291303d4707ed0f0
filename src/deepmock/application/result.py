"""Application layer - Read-only access to a completed resolution."""

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type, TypeVar

from deepmock.application.mock_factory import MockHandle
from deepmock.domain import ConstructionRecord, DependencyNotFoundError, NotMockedError

T = TypeVar("T")


class ConstructionResult:
    """Outcome of one resolution: the subject and every dependency built for it.

    Owned by the caller that requested the resolution. The records cannot be
    changed once the result exists.

    Attributes:
        subject_type: The type of the system under test.
        tree: The dependency tree the result was built from.

    Example:
        >>> result = resolve(Orchestrator)
        >>> orchestrator = result.get_subject(Orchestrator)
        >>> result.get_control_handle(IDataSource).setup("fetch", return_value=[1])
    """

    def __init__(self, records: Dict[Type, ConstructionRecord], subject_type: Type, tree: Any = None) -> None:
        self._records: Mapping[Type, ConstructionRecord] = MappingProxyType(dict(records))
        self.subject_type = subject_type
        self.tree = tree

    @property
    def records(self) -> Mapping[Type, ConstructionRecord]:
        return self._records

    def get_record(self, dependency_type: Type) -> ConstructionRecord:
        """Get the record of a type.

        Raises:
            DependencyNotFoundError: If the type was not part of the resolution.
        """
        try:
            return self._records[dependency_type]
        except KeyError:
            raise DependencyNotFoundError(dependency_type, "type is not part of this resolution") from None

    def get_subject(self, subject_type: Optional[Type[T]] = None) -> T:
        """Get the fully wired instance of the system under test.

        Args:
            subject_type: The subject type; defaults to the resolved root type.

        Raises:
            DependencyNotFoundError: If ``subject_type`` is not the resolved root type.
        """
        if subject_type is not None and subject_type is not self.subject_type:
            raise DependencyNotFoundError(
                subject_type,
                f"the subject of this resolution is {getattr(self.subject_type, '__name__', self.subject_type)}",
            )
        return self.get_record(self.subject_type).implementation

    def get_control_handle(self, dependency_type: Type[T]) -> MockHandle[T]:
        """Get the control handle of a mocked dependency.

        Raises:
            DependencyNotFoundError: If the type was not part of the resolution.
            NotMockedError: If the type was constructed rather than mocked.
        """
        record = self.get_record(dependency_type)
        if not record.is_mocked:
            raise NotMockedError(dependency_type, "dependency was constructed for real")
        return record.control_handle

    def get_mock(self, dependency_type: Type[T]) -> Any:
        """Get the mock object of a mocked dependency, for direct ``unittest.mock`` use."""
        handle = self.get_control_handle(dependency_type)
        return getattr(handle, "mock", handle)

    def get_implementation(self, dependency_type: Type[T]) -> T:
        """Get the object handed to constructors for a type, mocked or not."""
        return self.get_record(dependency_type).implementation

    def mocked_types(self) -> List[Type]:
        return [dependency_type for dependency_type, record in self._records.items() if record.is_mocked]

    def __contains__(self, dependency_type: object) -> bool:
        return dependency_type in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Type]:
        return iter(self._records)

    def __repr__(self) -> str:
        return (
            f"ConstructionResult(subject={getattr(self.subject_type, '__name__', self.subject_type)}, "
            f"records={len(self._records)}, mocked={len(self.mocked_types())})"
        )
