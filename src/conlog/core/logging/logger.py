"""
Structured diagnostics for conlog itself.

conlog's public job is formatting and dispatching *your* log calls; this
module covers the other direction: what conlog reports about its own
behaviour. The error serializer, for example, skips failing ``to_json``
hooks and read-only attributes, and records a
``debug`` diagnostic every time it does so. These diagnostics go through
structlog so they can be routed, filtered and rendered like any other
application log.

Functions:
    setup_logging(): Initialize structlog and the stdlib handlers
    get_logger(name): Get a configured logger instance

Configuration:
    Diagnostics are controlled by two settings:
    - DIAGNOSTIC_LOG_LEVEL: Minimum level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - DIAGNOSTIC_LOG_FORMAT: Output format (json/text)

    Development environments get a Rich console handler; everything else
    writes plain lines to stderr.

Example:
    >>> from conlog.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("to_json hook failed", type="Money", error="boom")
"""

import logging
import sys

import structlog
from rich.console import Console
from rich.logging import RichHandler

from conlog.core.config.settings import get_settings


def setup_logging() -> None:
    """
    Initialize the diagnostics logging configuration.

    Configures structlog processors on top of standard library logging so
    conlog's diagnostics honour whatever handlers the host application has
    already installed. When no handler is present, a Rich handler (in
    development) or a stderr stream handler is added.

    Features configured:
        - Level filtering before any rendering work
        - Logger name and level metadata
        - ISO timestamps
        - Exception stack trace formatting
        - JSON or console rendering

    Example:
        >>> from conlog.core.logging.logger import setup_logging
        >>> setup_logging()
    """
    settings = get_settings()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.DIAGNOSTIC_LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    diagnostics = logging.getLogger("conlog")
    diagnostics.setLevel(settings.DIAGNOSTIC_LOG_LEVEL)

    # Leave host-installed handlers alone
    if logging.getLogger().handlers or diagnostics.handlers:
        return

    if settings.ENVIRONMENT == "development" and settings.DIAGNOSTIC_LOG_LEVEL == "DEBUG":
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(settings.DIAGNOSTIC_LOG_LEVEL)
    handler.setFormatter(logging.Formatter("%(message)s"))
    diagnostics.addHandler(handler)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structured logger instance.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.BoundLogger: Configured logger instance

    Note:
        If structlog hasn't been configured yet, this function calls
        setup_logging() first.
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)
