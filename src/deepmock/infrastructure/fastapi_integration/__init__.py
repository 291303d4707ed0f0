"""
FastAPI integration module.

Provides helpers to serve auto-mocked services through FastAPI dependency overrides.
"""

from .integration import AutoMockOverrides, create_automock_dependency, override_with_automock

__all__ = [
    "create_automock_dependency",
    "override_with_automock",
    "AutoMockOverrides",
]
