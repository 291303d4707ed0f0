from typing import Any, Callable, Dict, Optional, Type, TypeVar

from fastapi import FastAPI

from deepmock.application import AutoMocker, ConstructionResult

T = TypeVar("T")


def create_automock_dependency(result: ConstructionResult, dependency_type: Optional[Type[T]] = None) -> Callable[[], T]:
    """Create a FastAPI dependency callable returning an object from a resolution.

    Args:
        result: A completed resolution.
        dependency_type: The type to return; defaults to the subject of the resolution.

    Returns:
        A zero-argument callable usable as a dependency override.

    Example:
        >>> result = resolve(UserService)
        >>> app.dependency_overrides[get_user_service] = create_automock_dependency(result)
    """
    target = dependency_type if dependency_type is not None else result.subject_type
    # Resolve eagerly so a wrong type fails here rather than inside a request.
    instance = result.get_implementation(target)

    def dependency() -> T:
        """Return the pre-built instance."""
        return instance

    return dependency


class AutoMockOverrides:
    """Context manager installing auto-mocked services as FastAPI dependency overrides.

    The overrides present on entry are restored on exit.

    Attributes:
        app: The FastAPI application whose overrides are changed.
        results: Resolution of each overridden provider.

    Example:
        >>> with AutoMockOverrides(app) as overrides:
        ...     result = overrides.override(get_user_service, UserService)
        ...     result.get_control_handle(IUserRepository).setup("list_all", return_value=[])
        ...     response = client.get("/users")
    """

    def __init__(self, app: FastAPI, mocker: Optional[AutoMocker] = None) -> None:
        self.app = app
        self._mocker = mocker or AutoMocker()
        self._saved_overrides: Optional[Dict[Callable[..., Any], Callable[..., Any]]] = None
        self.results: Dict[Callable[..., Any], ConstructionResult] = {}

    def override(self, provider: Callable[..., Any], subject_type: Type) -> ConstructionResult:
        """Resolve a subject and serve it in place of a dependency provider.

        Args:
            provider: The dependency callable used with ``Depends()``.
            subject_type: The class to resolve.

        Returns:
            The resolution, to configure and verify mocks.
        """
        result = self._mocker.resolve(subject_type)
        self.app.dependency_overrides[provider] = create_automock_dependency(result)
        self.results[provider] = result
        return result

    def restore(self) -> None:
        """Put back the overrides that were present on entry."""
        if self._saved_overrides is None:
            return
        self.app.dependency_overrides.clear()
        self.app.dependency_overrides.update(self._saved_overrides)
        self._saved_overrides = None
        self.results.clear()

    def __enter__(self) -> "AutoMockOverrides":
        """Context manager entry - remember the current overrides."""
        self._saved_overrides = dict(self.app.dependency_overrides)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - restore the previous overrides."""
        self.restore()
        return False


def override_with_automock(app: FastAPI, provider: Callable[..., Any], subject_type: Type) -> ConstructionResult:
    """Resolve a subject and install it as the override of a provider, without restoring.

    Args:
        app: The FastAPI application.
        provider: The dependency callable used with ``Depends()``.
        subject_type: The class to resolve.

    Returns:
        The resolution, to configure and verify mocks.
    """
    result = AutoMocker().resolve(subject_type)
    app.dependency_overrides[provider] = create_automock_dependency(result)
    return result
