"""Application configuration.

Loads settings from environment variables (prefixed ``CATALOG_``) with
sensible defaults.
"""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Catalog settings loaded from environment variables."""

    # Catalog identity
    id_prefix: str = Field(default="MLA", pattern=r"^[A-Z]+$")
    site_id: str = "MLA"

    # Pagination
    default_page_limit: int = Field(default=50, ge=1)
    max_page_limit: int = Field(default=200, ge=1)

    # Business rules
    max_batch_size: int = Field(default=100, ge=1)
    new_product_min_price: Decimal = Decimal("100")
    title_query_min_length: int = Field(default=2, ge=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {
        "env_prefix": "CATALOG_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
