"""
Error serialization subsystem.
"""

from conlog.helpers.serialize.constructors import error_constructors, get_error_constructor
from conlog.helpers.serialize.serializer import (
    BUFFER,
    CIRCULAR,
    STREAM,
    NonError,
    deserialize_error,
    enumerable_fields,
    is_error_like,
    read_error_property,
    serialize_error,
)

__all__ = [
    "BUFFER",
    "CIRCULAR",
    "STREAM",
    "NonError",
    "deserialize_error",
    "enumerable_fields",
    "error_constructors",
    "get_error_constructor",
    "is_error_like",
    "read_error_property",
    "serialize_error",
]
