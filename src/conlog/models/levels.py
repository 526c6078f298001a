"""
Severity levels and output modes.
"""

from enum import Enum
from typing import Dict, List


class LogLevel(str, Enum):
    """
    Severity of a log call.

    ``LOG`` is the unconditional channel: it is not part of the ordered
    threshold list and is always emitted.
    """

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"
    LOG = "log"

    def __str__(self) -> str:
        return self.value


# Threshold order; lower index = more severe
LOG_TYPE: List[LogLevel] = [
    LogLevel.ERROR,
    LogLevel.WARN,
    LogLevel.INFO,
    LogLevel.DEBUG,
    LogLevel.TRACE,
]


class ServerMode(str, Enum):
    """
    Output mode of a logger.

    OFF writes plain argument lists for a terminal. STD and AWS write one
    structured record per call. GCP wraps the record with Cloud Logging
    metadata.
    """

    OFF = "OFF"
    STD = "STD"
    AWS = "AWS"
    GCP = "GCP"

    def __str__(self) -> str:
        return self.value

    @property
    def structured(self) -> bool:
        return self is not ServerMode.OFF


# Cloud Logging LogSeverity numeric codes
GCP_SEVERITY: Dict[LogLevel, int] = {
    LogLevel.ERROR: 500,
    LogLevel.WARN: 400,
    LogLevel.INFO: 200,
    LogLevel.DEBUG: 100,
    LogLevel.TRACE: 100,
    LogLevel.LOG: 0,
}

GCP_RESOURCE = {"type": "global"}
