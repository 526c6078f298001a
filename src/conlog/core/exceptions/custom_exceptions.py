"""
Custom exception hierarchy for conlog error handling.

This module defines the small exception hierarchy raised by conlog itself.
Logging calls never raise for ordinary input: expansion, serialization and
deserialization all degrade to returning a usable value. The exceptions
below cover the remaining cases where a caller hands conlog something it
cannot work with, such as an output sink that has no generic ``log``
channel.

Exception Hierarchy:
    ConlogError (base)
    ├── ConfigurationError: Invalid logger or sink configuration
    └── SinkError: An output sink rejected a dispatched record

Error Context:
    Each exception can include:
    - Human-readable error message
    - Machine-readable error code
    - Contextual details dictionary

Example:
    >>> try:
    ...     Logger(sink=object())
    ... except ConfigurationError as e:
    ...     print(e.error_code, e.details)
    CONFIG_SINK_NO_LOG {'sink': 'object'}
"""

from typing import Any, Dict, Optional


class ConlogError(Exception):
    """
    Base exception class for all conlog errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code follows a hierarchical naming convention:
        - AREA_PROBLEM (e.g., "CONFIG_SINK_NO_LOG")
        - Defaults to class name if not specified

    Example:
        >>> raise ConlogError(
        ...     "Sink rejected record",
        ...     error_code="SINK_WRITE_ERROR",
        ...     details={"channel": "info"},
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(ConlogError):
    """
    Raised when a logger is configured with values it cannot use.

    Common scenarios:
        - An output sink without a callable ``log`` channel
        - A ``server_call`` that is not callable

    Example:
        >>> raise ConfigurationError(
        ...     "Output sink must provide a callable 'log' channel",
        ...     error_code="CONFIG_SINK_NO_LOG",
        ...     details={"sink": "NullSink"},
        ... )
    """

    pass


class SinkError(ConlogError):
    """
    Raised by sinks that wrap a downstream writer and want callers to see
    which channel failed.
    """

    pass
