"""Logging setup for the ``deepmock`` logger hierarchy.

Every module logs through a child of the ``deepmock`` logger
(``deepmock.graph``, ``deepmock.instances``, ...). Nothing is printed until
:func:`configure_logger` is called, either directly or by the pytest plugin
when the ``deepmock_log_level`` ini option is set.
"""

import logging
from typing import Union

LOG_FORMAT = "[deepmock] %(levelname)s: %(message)s"


def parse_level(level: Union[int, str]) -> int:
    """Turn a level name such as ``"debug"`` or a number into a logging level.

    Raises:
        ValueError: If the name is not a known logging level.
    """
    if isinstance(level, int):
        return level
    value = level.strip()
    if value.isdigit():
        return int(value)
    resolved = logging.getLevelName(value.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logger(level: Union[int, str] = logging.INFO, name: str = "deepmock") -> logging.Logger:
    """Attach a single stream handler to the ``deepmock`` logger and set its level.

    Calling it again only changes the level.

    Args:
        level: A logging level or its name.
        name: The logger to return, ``deepmock`` or one of its children.

    Returns:
        The requested logger.
    """
    root = logging.getLogger("deepmock")
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(parse_level(level))
    return logging.getLogger(name)
