"""
Exception hierarchy.
"""

from conlog.core.exceptions.custom_exceptions import (
    ConfigurationError,
    ConlogError,
    SinkError,
)

__all__ = ["ConlogError", "ConfigurationError", "SinkError"]
