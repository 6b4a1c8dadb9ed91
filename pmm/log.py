"""Logging setup for processes hosting the engine.

Library modules only call structlog.get_logger(); configuring output is
left to the host, which calls configure_logging() once at startup.
"""

import logging

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog with console output.

    Args:
        verbose: Emit debug events (pricing decisions, rejections) if True,
            otherwise INFO and above only
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )
