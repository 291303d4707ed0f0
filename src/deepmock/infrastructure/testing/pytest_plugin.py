"""pytest plugin exposing the automatic mocker as fixtures.

Registered through the ``pytest11`` entry point, so installing the package is
enough to use the ``automock`` fixture::

    def test_orchestrator_runs(automock):
        result = automock(Orchestrator)
        result.get_subject().run()
        result.get_control_handle(IDataSource).verify("fetch")

Settings come from the ini file::

    [pytest]
    deepmock_max_nodes = 200
    deepmock_default_value = mock
    deepmock_log_level = debug
"""

from typing import Callable, Optional, Type

import pytest

from deepmock.application import AutoMocker, ConstructionResult, ReflectionCache
from deepmock.domain import AutoMockSettings, DefaultValue
from deepmock.logconf import configure_logger, parse_level

MAX_NODES_INI = "deepmock_max_nodes"
DEFAULT_VALUE_INI = "deepmock_default_value"
LOG_LEVEL_INI = "deepmock_log_level"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(MAX_NODES_INI, "Maximum number of nodes in one dependency tree.", default="100")
    parser.addini(
        DEFAULT_VALUE_INI,
        "What unconfigured mock methods return: 'empty' or 'mock'.",
        default=DefaultValue.EMPTY.value,
    )
    parser.addini(LOG_LEVEL_INI, "Level of the deepmock log output; unset keeps it silent.", default="")


def pytest_configure(config: pytest.Config) -> None:
    level = log_level_from_config(config)
    if level is not None:
        configure_logger(level)


def settings_from_config(config: pytest.Config) -> AutoMockSettings:
    """Build mocker settings from the ini options of a pytest run."""
    return AutoMockSettings(
        max_nodes=int(config.getini(MAX_NODES_INI)),
        default_value=DefaultValue(config.getini(DEFAULT_VALUE_INI)),
    )


def log_level_from_config(config: pytest.Config) -> Optional[int]:
    """Read the log level ini option, None when it is unset.

    Raises:
        pytest.UsageError: If the value is not a logging level.
    """
    value = config.getini(LOG_LEVEL_INI).strip()
    if not value:
        return None
    try:
        return parse_level(value)
    except ValueError as e:
        raise pytest.UsageError(f"{LOG_LEVEL_INI}: {e}") from e


def make_resolver(cache: ReflectionCache, settings: AutoMockSettings) -> Callable[[Type], ConstructionResult]:
    """Create the callable handed out by the ``automock`` fixture."""
    return AutoMocker(settings, cache=cache).resolve


@pytest.fixture(scope="session")
def deepmock_cache() -> ReflectionCache:
    """Reflection cache shared by every test of the session."""
    return ReflectionCache()


@pytest.fixture
def automock(request: pytest.FixtureRequest, deepmock_cache: ReflectionCache) -> Callable[[Type], ConstructionResult]:
    """Resolve a system under test with all of its collaborators mocked."""
    return make_resolver(deepmock_cache, settings_from_config(request.config))
