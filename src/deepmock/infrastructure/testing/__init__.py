"""
Testing utilities module.

Provides the fixture script recorder and the pytest plugin.
"""

from .fixture_script import FixtureScriptRecorder

__all__ = [
    "FixtureScriptRecorder",
]
