"""
Module-level logging over a shared default :class:`Logger`.

The default logger is created lazily from the settings on first use.
:func:`configure` replaces it with one built from explicit options and
:func:`reset` drops it (and the cached settings) so the next call starts
from the environment again.

Example:
    >>> from conlog import default
    >>> logger = default.configure(level="warn", server_mode="STD")
    >>> default.info("not shown")
    >>> default.reset()
"""

from typing import Any, Optional, Union

from conlog.core.config.settings import reset_settings
from conlog.logger import Logger
from conlog.models.levels import LogLevel

_default: Optional[Logger] = None


def get_default() -> Logger:
    """The shared logger, created on first access."""
    global _default
    if _default is None:
        _default = Logger()
    return _default


def configure(**options: Any) -> Logger:
    """Replace the shared logger with ``Logger(**options)``."""
    global _default
    _default = Logger(**options)
    return _default


def reset() -> None:
    global _default
    _default = None
    reset_settings()


def error(*data: Any) -> None:
    get_default().error(*data)


def warn(*data: Any) -> None:
    get_default().warn(*data)


def info(*data: Any) -> None:
    get_default().info(*data)


def debug(*data: Any) -> None:
    get_default().debug(*data)


def trace(*data: Any) -> None:
    get_default().trace(*data)


def log(*data: Any) -> None:
    get_default().log(*data)


def get_level() -> LogLevel:
    return get_default().get_level()


def set_level(level: Union[LogLevel, str, int], log_change: bool = True) -> LogLevel:
    return get_default().set_level(level, log_change)
