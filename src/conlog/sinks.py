"""
Output sinks.

A sink is any object with a callable ``log`` channel and, optionally,
``error``, ``warn``, ``info``, ``debug`` and ``trace`` channels. The logger
calls the channel named after the level of each call and falls back to
``log`` when the sink does not implement it.

Classes:
    ConsoleSink: Writes one line per call to stdout or stderr
    CallbackSink: Forwards every call to a single callable

Example:
    >>> from conlog.logger import Logger
    >>> from conlog.sinks import CallbackSink
    >>> records = []
    >>> logger = Logger(sink=CallbackSink(records.append), server_mode="STD")
    >>> logger.info("hello")
    >>> records[0]["message"]
    ['hello']
"""

import json
import sys
from typing import Any, Callable, Optional, TextIO

from conlog.core.exceptions import SinkError


def _format_argument(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, default=str, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(value)
    return str(value)


class ConsoleSink:
    """
    Terminal sink.

    ``error``, ``warn`` and ``trace`` go to stderr, everything else to
    stdout. Arguments are joined with a space; dicts and lists (structured
    records) are written as compact JSON so each record stays on one line.

    The streams default to whatever ``sys.stdout`` and ``sys.stderr`` are
    at call time, so redirection and output capture keep working.
    """

    def __init__(self, stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def _write(self, stream: TextIO, *args: Any) -> None:
        stream.write(" ".join(_format_argument(arg) for arg in args) + "\n")
        stream.flush()

    def error(self, *args: Any) -> None:
        self._write(self.stderr, *args)

    def warn(self, *args: Any) -> None:
        self._write(self.stderr, *args)

    def info(self, *args: Any) -> None:
        self._write(self.stdout, *args)

    def debug(self, *args: Any) -> None:
        self._write(self.stdout, *args)

    def trace(self, *args: Any) -> None:
        self._write(self.stderr, *args)

    def log(self, *args: Any) -> None:
        self._write(self.stdout, *args)

    def __repr__(self) -> str:
        return "ConsoleSink()"


class CallbackSink:
    """
    Sink with a single ``log`` channel that forwards to ``callback``.

    This is what a logger's ``server_call`` option turns into: every level
    falls back to ``log``, so the callback receives every emitted call.
    Exceptions raised by the callback are re-raised as :class:`SinkError`.
    """

    def __init__(self, callback: Callable[..., Any]) -> None:
        self.callback = callback

    def log(self, *args: Any) -> None:
        try:
            self.callback(*args)
        except Exception as e:
            raise SinkError(
                f"Sink callback failed: {e}",
                error_code="SINK_CALLBACK_ERROR",
                details={"callback": getattr(self.callback, "__name__", repr(self.callback))},
            ) from e

    def __repr__(self) -> str:
        return f"CallbackSink({getattr(self.callback, '__name__', repr(self.callback))})"
