"""
Plain-mode argument assembly.
"""

from typing import Any, List

from conlog.helpers.prefix import prefix
from conlog.models.levels import LogLevel
from conlog.models.record import Correlation, Expander


def log_items(
    expander: Expander,
    level: LogLevel,
    *data: Any,
    correlation: Correlation = None,
) -> List[Any]:
    """
    Build the positional arguments for one plain-mode sink call.

    Returns ``[prefix, correlation, *expanded]``; the correlation element is
    only present when a correlation context is set.
    """
    items = [prefix(level)]
    if correlation is not None:
        items.append(correlation)
    items.extend(expander(value) for value in data)
    return items
