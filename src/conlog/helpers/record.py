"""
Structured log record assembly.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from conlog.helpers.level import level_index
from conlog.helpers.serialize import serialize_error
from conlog.models.levels import LogLevel
from conlog.models.record import Correlation, Expander, LogRecord


def log_object(
    expander: Expander,
    level: LogLevel,
    correlation: Correlation,
    *data: Any,
    max_depth: Optional[int] = None,
) -> LogRecord:
    """
    Build the structured record for one log call.

    Args:
        expander: Applied to every entry of ``data``
        level: Severity of the call
        correlation: Correlation context, left out of the record when None
        *data: The logged values
        max_depth: Depth limit for serialized exceptions

    Returns:
        LogRecord: ``level`` is the threshold ordinal plus one, so records
        from the unconditional ``log`` channel carry 0. Exceptions logged at
        error level are serialized with :func:`serialize_error`; every
        other entry goes through ``expander``.

    Example:
        >>> record = log_object(lambda v: v, LogLevel.INFO, None, "hello")
        >>> record["level"], record["severity"], record["message"]
        (3, 'info', ['hello'])
    """
    now = datetime.now(timezone.utc)

    def entry(value: Any) -> Any:
        if level is LogLevel.ERROR and isinstance(value, BaseException):
            return serialize_error(value, max_depth=max_depth)
        return expander(value)

    record: LogRecord = {
        "level": level_index(level) + 1,
        "severity": level.value,
        "datetime": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "timestamp": int(now.timestamp() * 1000),
        "message": [entry(value) for value in data],
    }
    if correlation is not None:
        record["correlation"] = correlation
    return record
