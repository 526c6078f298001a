"""
Shapes of the values conlog hands to output sinks.
"""

from typing import Any, Callable, Dict, List, Mapping, NotRequired, Optional, TypedDict


class LogRecord(TypedDict):
    """
    Structured record emitted in STD, AWS and GCP modes.

    ``correlation`` is omitted entirely when the logger has no correlation
    context; it is never written as ``None``.
    """

    level: int
    severity: str
    datetime: str
    timestamp: int
    correlation: NotRequired[Mapping[str, Any]]
    message: List[Any]


class CloudMetadata(TypedDict):
    severity: int
    resource: Dict[str, str]


class CloudEntry(TypedDict):
    """Envelope sent to the sink in GCP mode."""

    metadata: CloudMetadata
    logData: LogRecord


# expander(value) -> value ready for the sink
Expander = Callable[[Any], Any]

Correlation = Optional[Mapping[str, Any]]
