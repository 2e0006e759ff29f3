"""Logging for the Storefront domain.

Protean owns the structlog pipeline; ``configure_logging`` only forwards to
``Domain.configure_logging`` so that the ``[logging]`` section of
``domain.toml`` and ``PROTEAN_LOG_LEVEL`` stay the single source of levels.
"""

import structlog


def get_logger(name):
    return structlog.get_logger(name)


def configure_logging(domain, **overrides):
    """Configure stdlib and structlog output from the domain's ``[logging]`` settings."""
    domain.configure_logging(**overrides)


def add_context(**values):
    """Bind ``values`` to every log line emitted by the current request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context():
    structlog.contextvars.clear_contextvars()
