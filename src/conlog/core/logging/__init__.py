"""
conlog Diagnostics Logging Module.

Structured logging for conlog's own diagnostics (skipped JSON hooks,
read-only targets, logger reconfiguration). It is separate from the
console logger conlog provides: these records describe the library, not
the application using it.

Components:
    - logger: structlog configuration and factory functions

Example:
    >>> from conlog.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("logger configured", mode="STD", level="info")
"""

from conlog.core.logging.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
