"""
Plain-mode line prefix.
"""

from datetime import datetime, timezone

from conlog.models.levels import LogLevel


def prefix(level: LogLevel) -> str:
    """
    Prefix for a plain-mode log line: ``"[LEVEL] HH:MM:SS.mmm:"``.

    The level name is upper-cased and padded on the left to five characters
    so that columns line up; the time is UTC.

    Example:
        >>> prefix(LogLevel.INFO)  # doctest: +SKIP
        '[ INFO] 09:41:07.123:'
    """
    now = datetime.now(timezone.utc)
    return f"[{level.value.upper():>5}] {now.strftime('%H:%M:%S')}.{now.microsecond // 1000:03d}:"
