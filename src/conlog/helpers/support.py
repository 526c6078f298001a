"""
Sink capability probing.
"""

from typing import Any, Dict

from conlog.models.levels import LOG_TYPE, LogLevel


def sink_support(sink: Any) -> Dict[LogLevel, bool]:
    """
    Which level channels ``sink`` implements.

    Each level in the threshold order maps to True when ``sink`` has a
    callable attribute of that name (``error``, ``warn``, ...). Loggers
    probe once per sink change and route unsupported levels to ``log``.
    """
    return {level: callable(getattr(sink, level.value, None)) for level in LOG_TYPE}
