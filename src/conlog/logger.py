"""
Console logger facade.

:class:`Logger` owns one logger configuration (threshold, output mode,
expansion flags, correlation context and output sink) and turns level
calls into sink calls:

    - plain mode (``ServerMode.OFF``) sends ``[prefix, correlation?, *data]``
      as positional arguments, with structures rendered for a terminal
    - STD and AWS modes send one structured :class:`LogRecord`
    - GCP mode sends the record wrapped with Cloud Logging metadata

A call is emitted only when its level is within the threshold. ``log`` is
outside the threshold order and is always emitted. Each level goes to the
sink channel of the same name, or to ``log`` when the sink has no such
channel; the channel table is built once per sink change.

Example:
    >>> from conlog.logger import Logger
    >>> logger = Logger(level="debug", correlation="req-42")
    >>> logger.debug("cache miss", {"key": "user:7"})  # doctest: +SKIP
    [DEBUG] 09:41:07.123: {'id': 'req-42'} {'key': 'user:7'}
    >>> logger.trace("not shown")
"""

from typing import Any, Callable, Dict, Mapping, Optional, Union

from conlog.core.config.settings import Settings, get_settings
from conlog.core.exceptions import ConfigurationError
from conlog.core.logging.logger import get_logger
from conlog.helpers.expand import expand
from conlog.helpers.items import log_items
from conlog.helpers.level import level_index, select_level
from conlog.helpers.mode import select_mode
from conlog.helpers.record import log_object
from conlog.helpers.support import sink_support
from conlog.models.levels import GCP_RESOURCE, GCP_SEVERITY, LOG_TYPE, LogLevel, ServerMode
from conlog.models.record import CloudEntry, Expander
from conlog.sinks import CallbackSink, ConsoleSink

logger = get_logger(__name__)


def _clamp_limit(limit: int) -> int:
    return max(-1, min(int(limit), len(LOG_TYPE) - 1))


class Logger:
    """
    Level-filtered console logger.

    Every option left as ``None`` takes its default from the settings
    (environment variables, see :class:`conlog.core.config.settings.Settings`).

    Args:
        correlation: Context attached to every call; a plain string is
            stored as ``{"id": correlation}``
        server_mode: Output mode (``ServerMode`` or a name such as "GCP")
        server_call: Callable receiving every emitted call; replaces ``sink``
        expanded_mode: Deep-parse JSON strings before output
        raw_mode: Pass structures to the sink instead of rendered text
        log_limit: Threshold as an index into ``LOG_TYPE``
        level: Threshold as a level (name, number or ``LogLevel``); used
            when ``log_limit`` is not given
        expander: Custom expander replacing :func:`conlog.helpers.expand.expand`
        sink: Output sink; defaults to a :class:`ConsoleSink`
        object_depth: Depth limit for rendered and serialized structures
        settings: Settings to take defaults from instead of the cached ones

    Raises:
        ConfigurationError: If the sink has no callable ``log`` channel or
            ``server_call`` is not callable
    """

    def __init__(
        self,
        *,
        correlation: Union[str, Mapping[str, Any], None] = None,
        server_mode: Union[ServerMode, str, None] = None,
        server_call: Optional[Callable[..., Any]] = None,
        expanded_mode: Optional[bool] = None,
        raw_mode: Optional[bool] = None,
        log_limit: Optional[int] = None,
        level: Union[LogLevel, str, int, None] = None,
        expander: Optional[Expander] = None,
        sink: Any = None,
        object_depth: Optional[int] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()

        self.mode = select_mode(server_mode) if server_mode is not None else settings.mode
        self.expanded = settings.expanded if expanded_mode is None else bool(expanded_mode)
        self.raw = settings.LOG_RAW if raw_mode is None else bool(raw_mode)
        self.object_depth = settings.LOG_OBJECT_DEPTH if object_depth is None else object_depth

        if log_limit is not None:
            self.log_limit = _clamp_limit(log_limit)
        else:
            threshold = select_level(level) if level is not None else settings.level
            self.log_limit = level_index(threshold)

        self.correlation: Optional[Dict[str, Any]] = None
        if correlation is not None:
            self.set_correlation(correlation)

        self.expander: Expander = expander or self._expand

        if server_call is not None:
            if not callable(server_call):
                raise ConfigurationError(
                    "server_call must be callable",
                    error_code="CONFIG_SERVER_CALL",
                    details={"server_call": type(server_call).__name__},
                )
            sink = CallbackSink(server_call)
        self.set_sink(sink if sink is not None else ConsoleSink())

        logger.debug(
            "logger configured",
            mode=str(self.mode),
            level=str(self.get_level()),
            expanded=self.expanded,
            raw=self.raw,
            sink=repr(self.sink),
        )

    def _expand(self, value: Any) -> Any:
        structured = self.mode.structured
        return expand(
            value,
            expanded=self.expanded,
            raw_mode=self.raw or structured,
            server=structured,
            depth=self.object_depth,
        )

    def _call(self, level: LogLevel, *data: Any) -> None:
        if level_index(level) > self.log_limit:
            return

        channel = self._channels[level]

        if self.mode is ServerMode.OFF:
            channel(*log_items(self.expander, level, *data, correlation=self.correlation))
            return

        record = log_object(
            self.expander,
            level,
            self.correlation,
            *data,
            max_depth=self.object_depth,
        )
        if self.mode is ServerMode.GCP:
            entry: CloudEntry = {
                "metadata": {"severity": GCP_SEVERITY[level], "resource": dict(GCP_RESOURCE)},
                "logData": record,
            }
            channel(entry)
        else:
            channel(record)

    def error(self, *data: Any) -> None:
        self._call(LogLevel.ERROR, *data)

    def warn(self, *data: Any) -> None:
        self._call(LogLevel.WARN, *data)

    def info(self, *data: Any) -> None:
        self._call(LogLevel.INFO, *data)

    def debug(self, *data: Any) -> None:
        self._call(LogLevel.DEBUG, *data)

    def trace(self, *data: Any) -> None:
        self._call(LogLevel.TRACE, *data)

    def log(self, *data: Any) -> None:
        """Emit unconditionally, whatever the threshold."""
        self._call(LogLevel.LOG, *data)

    def get_level(self) -> LogLevel:
        """Current threshold level (``LOG`` when only ``log`` calls pass)."""
        if self.log_limit < 0:
            return LogLevel.LOG
        return LOG_TYPE[self.log_limit]

    def set_level(self, level: Union[LogLevel, str, int], log_change: bool = True) -> LogLevel:
        """
        Change the threshold.

        Args:
            level: Level name, number (1-5) or ``LogLevel``; anything
                unrecognized selects ``trace``
            log_change: Announce the change on the ``log`` channel

        Returns:
            LogLevel: The level now in effect
        """
        target = select_level(level)
        self.log_limit = level_index(target)
        logger.debug("logger level changed", level=str(target), index=self.log_limit)
        if log_change:
            self.log(f"logger: set to {target.value} ({self.log_limit})")
        return target

    def set_mode(self, mode: Union[ServerMode, str, None]) -> ServerMode:
        self.mode = select_mode(mode)
        return self.mode

    def set_expanded(self, state: bool) -> bool:
        self.expanded = bool(state)
        return self.expanded

    def set_raw(self, state: bool) -> bool:
        self.raw = bool(state)
        return self.raw

    def set_correlation(self, values: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Merge ``values`` into the correlation context.

        Existing keys not named in ``values`` are kept. A plain string is
        merged as ``{"id": values}``.
        """
        if isinstance(values, str):
            values = {"id": values}
        self.correlation = {**(self.correlation or {}), **values}
        return self.correlation

    def set_sink(self, sink: Any) -> None:
        """
        Replace the output sink and rebuild the channel table.

        Raises:
            ConfigurationError: If ``sink`` has no callable ``log`` channel
        """
        if not callable(getattr(sink, "log", None)):
            raise ConfigurationError(
                "Output sink must provide a callable 'log' channel",
                error_code="CONFIG_SINK_NO_LOG",
                details={"sink": type(sink).__name__},
            )
        support = sink_support(sink)
        channels = {
            level: getattr(sink, level.value if supported else "log")
            for level, supported in support.items()
        }
        channels[LogLevel.LOG] = sink.log

        self.sink = sink
        self._support = support
        self._channels = channels

    def console_support(self) -> Dict[LogLevel, bool]:
        """Capability table of the current sink: level -> has own channel."""
        return dict(self._support)
