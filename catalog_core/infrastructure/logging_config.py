"""structlog configuration."""

import logging
import sys

import structlog

from catalog_core.infrastructure.config import Settings
from catalog_core.infrastructure.config import settings as default_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib logging and structlog for the catalog.

    Args:
        settings: Settings to read level and renderer from. Defaults to the
            module-level settings.
    """
    settings = settings or default_settings
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
