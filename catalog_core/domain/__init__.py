"""Domain layer - records, status state machine, validation rules, errors.

- **Models**: Product and its pictures, attributes and variations
- **State Machine**: ProductStatus and its transition rule
- **Validation**: Pure business checks gating every mutation
- **Exceptions**: Typed catalog errors with an ``ErrorKind``

Example usage:
    from catalog_core.domain import ProductStatus, validate_status_transition

    validate_status_transition("MLA1", ProductStatus.ACTIVE, ProductStatus.PAUSED)
"""

# Exceptions
from catalog_core.domain.exceptions import (
    CatalogError,
    DuplicateProductError,
    ErrorKind,
    InvalidProductDataError,
    InvalidStatusTransitionError,
    ProductNotFoundError,
)

# Models
from catalog_core.domain.models import (
    BRAND_ATTRIBUTE,
    CATEGORY_ATTRIBUTES,
    Attribute,
    AttributeCombination,
    Currency,
    Picture,
    Product,
    ProductCondition,
    Variation,
    utc_now,
)

# State machine
from catalog_core.domain.state_machines import ProductStatus, validate_status_transition

__all__ = [
    # Exceptions
    "CatalogError",
    "DuplicateProductError",
    "ErrorKind",
    "InvalidProductDataError",
    "InvalidStatusTransitionError",
    "ProductNotFoundError",
    # Models
    "BRAND_ATTRIBUTE",
    "CATEGORY_ATTRIBUTES",
    "Attribute",
    "AttributeCombination",
    "Currency",
    "Picture",
    "Product",
    "ProductCondition",
    "Variation",
    "utc_now",
    # State machine
    "ProductStatus",
    "validate_status_transition",
]
