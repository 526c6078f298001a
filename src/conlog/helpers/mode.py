"""
Output mode normalization.
"""

from typing import Any

from conlog.models.levels import ServerMode


def select_mode(value: Any) -> ServerMode:
    """
    Map loose input to an output mode.

    ``"server"`` is an alias for STD. ``"console"``, empty values and
    anything unknown select OFF.
    """
    if isinstance(value, ServerMode):
        return value
    if not isinstance(value, str):
        return ServerMode.OFF

    name = value.strip().upper()
    if name == "SERVER":
        return ServerMode.STD
    try:
        return ServerMode(name)
    except ValueError:
        return ServerMode.OFF
