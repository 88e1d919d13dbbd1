"""Infrastructure - settings and logging."""

from catalog_core.infrastructure.config import Settings, settings
from catalog_core.infrastructure.logging_config import configure_logging

__all__ = ["Settings", "configure_logging", "settings"]
