"""
Test helpers.

:class:`LogSpy` is a sink that records every call per channel. Hand it to
a logger and assert on what was emitted:

    >>> from conlog.logger import Logger
    >>> from conlog.models.levels import LogLevel
    >>> from conlog.testing import LogSpy
    >>> spy = LogSpy()
    >>> Logger(sink=spy, level="info").info("hello")
    >>> spy.calls[LogLevel.INFO][0][1]
    'hello'

By default the spy is silent. ``spy.output(True)`` additionally forwards
every call to a :class:`ConsoleSink` so the output shows up in the test
log.
"""

from typing import Any, Dict, List, Optional, Tuple

from conlog.models.levels import LogLevel
from conlog.sinks import ConsoleSink


class LogSpy:
    """Recording sink with one call list per channel."""

    def __init__(self) -> None:
        self.calls: Dict[LogLevel, List[Tuple[Any, ...]]] = {level: [] for level in LogLevel}
        self._console: Optional[ConsoleSink] = None

    def _record(self, level: LogLevel, args: Tuple[Any, ...]) -> None:
        self.calls[level].append(args)
        if self._console is not None:
            getattr(self._console, level.value)(*args)

    def error(self, *args: Any) -> None:
        self._record(LogLevel.ERROR, args)

    def warn(self, *args: Any) -> None:
        self._record(LogLevel.WARN, args)

    def info(self, *args: Any) -> None:
        self._record(LogLevel.INFO, args)

    def debug(self, *args: Any) -> None:
        self._record(LogLevel.DEBUG, args)

    def trace(self, *args: Any) -> None:
        self._record(LogLevel.TRACE, args)

    def log(self, *args: Any) -> None:
        self._record(LogLevel.LOG, args)

    def output(self, on: bool) -> None:
        """Forward recorded calls to the console as well (or stop doing so)."""
        self._console = ConsoleSink() if on else None

    def reset(self) -> None:
        for calls in self.calls.values():
            calls.clear()

    def count(self, level: LogLevel) -> int:
        return len(self.calls[level])

    def last(self, level: LogLevel) -> Tuple[Any, ...]:
        """Arguments of the most recent call on ``level``."""
        return self.calls[level][-1]
