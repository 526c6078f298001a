"""
Payload expansion for console display.
"""

from collections.abc import Mapping, Set
from typing import Any, Optional

from conlog.helpers.inspect import inspect
from conlog.helpers.parse import parse_data


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple, Set))


def _render(value: Any, fallback: Any, depth: Optional[int], server: bool) -> Any:
    try:
        return inspect(value, depth, colors=not server)
    except RecursionError:
        return fallback


def expand(
    value: Any,
    *,
    expanded: bool = False,
    raw_mode: bool = False,
    server: bool = False,
    depth: Optional[int] = None,
) -> Any:
    """
    Format a log payload for display, optionally expanding JSON strings.

    Args:
        value: The raw payload
        expanded: Deeply parse JSON strings into structures first
        raw_mode: Return structures as-is instead of rendering them as text
        server: Render without terminal colours
        depth: Depth limit for rendered structures

    Returns:
        The parsed structure (raw mode), its rendering, or ``value``
        unchanged when there is nothing to expand or render.

    Example:
        >>> expand('{"key": "value"}', expanded=True, raw_mode=True)
        {'key': 'value'}
        >>> expand('{"key": "value"}')
        '{"key": "value"}'
    """
    if isinstance(value, str) and value and expanded:
        parsed = parse_data(value)
        if raw_mode:
            return parsed
        if not _is_container(parsed):
            return value
        return _render(parsed, value, depth, server)

    if not raw_mode and _is_container(value) and len(value):
        return _render(value, value, depth, server)

    return value
