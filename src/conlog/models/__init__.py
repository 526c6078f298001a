"""
Data models: severity levels, output modes and record shapes.
"""

from conlog.models.levels import GCP_RESOURCE, GCP_SEVERITY, LOG_TYPE, LogLevel, ServerMode
from conlog.models.record import CloudEntry, Correlation, Expander, LogRecord

__all__ = [
    "GCP_RESOURCE",
    "GCP_SEVERITY",
    "LOG_TYPE",
    "LogLevel",
    "ServerMode",
    "CloudEntry",
    "Correlation",
    "Expander",
    "LogRecord",
]
