"""
Building blocks used by the logger: level and mode selection, payload
expansion, error serialization and record assembly.
"""

from conlog.helpers.expand import expand
from conlog.helpers.inspect import inspect
from conlog.helpers.items import log_items
from conlog.helpers.level import level_index, select_level
from conlog.helpers.mode import select_mode
from conlog.helpers.parse import parse_data
from conlog.helpers.prefix import prefix
from conlog.helpers.record import log_object
from conlog.helpers.serialize import deserialize_error, is_error_like, serialize_error
from conlog.helpers.support import sink_support

__all__ = [
    "deserialize_error",
    "expand",
    "inspect",
    "is_error_like",
    "level_index",
    "log_items",
    "log_object",
    "parse_data",
    "prefix",
    "select_level",
    "select_mode",
    "serialize_error",
    "sink_support",
]
