"""
Level normalization and ordering.
"""

from typing import Any

from conlog.models.levels import LOG_TYPE, LogLevel

_NUMERIC_LEVELS = {
    1: LogLevel.ERROR,
    2: LogLevel.WARN,
    3: LogLevel.INFO,
    4: LogLevel.DEBUG,
    5: LogLevel.TRACE,
}


def select_level(value: Any) -> LogLevel:
    """
    Map loose input to a canonical level.

    The five threshold levels (members or names in any case) map to
    themselves, the numbers 1 to 5 map to error, warn, info, debug and
    trace. Anything else, including ``log``, booleans and ``None``, maps
    to trace.

    Example:
        >>> select_level(2)
        <LogLevel.WARN: 'warn'>
        >>> select_level("nonsense")
        <LogLevel.TRACE: 'trace'>
    """
    if isinstance(value, LogLevel):
        return value if value in LOG_TYPE else LogLevel.TRACE
    if isinstance(value, bool):
        return LogLevel.TRACE
    if isinstance(value, (int, float)):
        return _NUMERIC_LEVELS.get(value, LogLevel.TRACE)
    if isinstance(value, str):
        try:
            level = LogLevel(value.strip().lower())
        except ValueError:
            return LogLevel.TRACE
        return level if level in LOG_TYPE else LogLevel.TRACE
    return LogLevel.TRACE


def level_index(level: LogLevel) -> int:
    """Ordinal of ``level`` in the threshold order; ``LOG`` is always -1."""
    if level is LogLevel.LOG:
        return -1
    return LOG_TYPE.index(level)
