from abc import ABC, abstractmethod
from typing import Any, Tuple, Type

from deepmock.domain.models import ConstructionRecord, DependencyNode


class IMockFactory(ABC):
    """Abstract interface for the engine producing mock implementations."""

    @abstractmethod
    def create(self, interface_type: Type) -> Tuple[Any, Any]:
        """Create an implementation of an interface and a handle controlling it.

        Args:
            interface_type: The abstract class or protocol to implement.

        Returns:
            A ``(implementation, control_handle)`` pair.
        """


class IConstructionObserver(ABC):
    """Abstract interface notified of every construction step."""

    @abstractmethod
    def on_constructed(self, record: ConstructionRecord, node: DependencyNode) -> None:
        """Called once per newly resolved dependency, in construction order.

        Args:
            record: The record that was just created.
            node: The tree node the record was created for.
        """
