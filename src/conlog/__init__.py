"""
conlog - level-filtered console logging with structured output.

conlog filters log calls by severity, writes them either as readable
terminal lines or as structured records for server and cloud log
collectors, deep-parses stringified JSON payloads, and turns raised
exceptions into plain, JSON-ready records (and back).

Modules:
    logger: The Logger facade
    default: Module-level functions over a shared default logger
    sinks: Console and callback output sinks
    helpers: Level selection, expansion, serialization, record assembly
    testing: LogSpy recording sink for tests

Example:
    >>> from conlog import Logger, ServerMode
    >>> logger = Logger(level="info", server_mode=ServerMode.STD)
    >>> logger.info("order placed", {"id": 17})  # doctest: +SKIP
    {"level":3,"severity":"info","datetime":"...","timestamp":...,"message":["order placed",{"id":17}]}
"""

__version__ = "0.1.0"

# helpers before anything that reads settings
from conlog.models import LOG_TYPE, LogLevel, LogRecord, ServerMode
from conlog.helpers import (
    deserialize_error,
    expand,
    is_error_like,
    level_index,
    parse_data,
    select_level,
    select_mode,
    serialize_error,
)
from conlog.helpers.serialize import NonError
from conlog.core.config import Settings, get_settings, reset_settings
from conlog.core.exceptions import ConfigurationError, ConlogError, SinkError
from conlog.logger import Logger
from conlog.sinks import CallbackSink, ConsoleSink

__all__ = [
    "__version__",
    "CallbackSink",
    "ConfigurationError",
    "ConlogError",
    "ConsoleSink",
    "LOG_TYPE",
    "LogLevel",
    "LogRecord",
    "Logger",
    "NonError",
    "ServerMode",
    "Settings",
    "SinkError",
    "deserialize_error",
    "expand",
    "get_settings",
    "is_error_like",
    "level_index",
    "parse_data",
    "reset_settings",
    "select_level",
    "select_mode",
    "serialize_error",
]
