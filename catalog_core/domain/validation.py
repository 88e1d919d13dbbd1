"""Business validation rules gating catalog operations.

Pure, stateless checks. Each raises ``InvalidProductDataError`` on
violation and returns nothing (or the parsed value) otherwise. Structural
checks such as field presence and string lengths are done by the input
models before any of these run.
"""

import re
from collections.abc import Iterable
from decimal import Decimal

from catalog_core.domain.exceptions import InvalidProductDataError
from catalog_core.domain.models import Product, ProductCondition
from catalog_core.domain.state_machines import ProductStatus

DEFAULT_MAX_PAGE_LIMIT = 200
DEFAULT_MAX_BATCH_SIZE = 100
DEFAULT_NEW_PRODUCT_MIN_PRICE = Decimal("100")
DEFAULT_TITLE_QUERY_MIN_LENGTH = 2


def product_id_pattern(prefix: str) -> re.Pattern[str]:
    """Compile the id pattern for a catalog prefix."""
    return re.compile(rf"{re.escape(prefix)}\d+")


def validate_product_id(product_id: str | None, prefix: str) -> None:
    """Check that an id is the prefix followed by digits only.

    Args:
        product_id: Id to check.
        prefix: Configured catalog prefix (e.g. ``MLA``).

    Raises:
        InvalidProductDataError: If the id is not a string, blank or malformed.
    """
    if not isinstance(product_id, str):
        raise InvalidProductDataError(
            "Product id must be a string",
            details={"product_id": repr(product_id)},
        )
    if not product_id.strip():
        raise InvalidProductDataError("Product id must not be empty")
    if not product_id_pattern(prefix).fullmatch(product_id):
        raise InvalidProductDataError(
            f"Product id must be '{prefix}' followed by digits",
            details={"product_id": product_id, "prefix": prefix},
        )


def validate_pagination(
    offset: int,
    limit: int,
    max_limit: int = DEFAULT_MAX_PAGE_LIMIT,
) -> None:
    """Check pagination bounds.

    Raises:
        InvalidProductDataError: If offset is negative or limit is outside 1..max_limit.
    """
    if offset < 0:
        raise InvalidProductDataError(
            "Offset must not be negative",
            details={"offset": offset},
        )
    if limit <= 0 or limit > max_limit:
        raise InvalidProductDataError(
            f"Limit must be between 1 and {max_limit}",
            details={"limit": limit, "max_limit": max_limit},
        )


def validate_price_range(
    min_price: Decimal | None,
    max_price: Decimal | None,
) -> None:
    """Check an optional price range.

    Raises:
        InvalidProductDataError: If min is negative, max is not positive,
            or min is greater than max.
    """
    if min_price is not None and min_price < 0:
        raise InvalidProductDataError(
            "Minimum price must not be negative",
            details={"min_price": str(min_price)},
        )
    if max_price is not None and max_price <= 0:
        raise InvalidProductDataError(
            "Maximum price must be greater than 0",
            details={"max_price": str(max_price)},
        )
    if min_price is not None and max_price is not None and min_price > max_price:
        raise InvalidProductDataError(
            "Minimum price must not be greater than maximum price",
            details={"min_price": str(min_price), "max_price": str(max_price)},
        )


def validate_price(price: Decimal | None) -> None:
    """Check that a price is present and strictly positive."""
    if price is None or price <= 0:
        raise InvalidProductDataError(
            "Price must be greater than 0",
            details={"price": None if price is None else str(price)},
        )


def parse_status(value: str | ProductStatus | None) -> ProductStatus:
    """Parse a status value, checking enum membership.

    Args:
        value: Raw status value.

    Returns:
        The matching ``ProductStatus``.

    Raises:
        InvalidProductDataError: If the value is not a known status.
    """
    valid = [status.value for status in ProductStatus]
    try:
        return ProductStatus(value)
    except ValueError:
        raise InvalidProductDataError(
            f"Invalid status. Valid statuses: {', '.join(valid)}",
            details={"status": value, "valid_statuses": valid},
        ) from None


def validate_brand_exists(brand: str | None, available_brands: Iterable[str]) -> None:
    """Check that a brand is present in the catalog's brand set.

    Membership is exact: the brand must be spelled as it is stored.

    Raises:
        InvalidProductDataError: Naming the available brands.
    """
    brands = list(available_brands)
    if brand not in brands:
        raise InvalidProductDataError(
            f"Brand '{brand}' does not exist. Available brands: {', '.join(brands)}",
            details={"brand": brand, "available_brands": brands},
        )


def validate_title_query(
    title: str | None,
    min_length: int = DEFAULT_TITLE_QUERY_MIN_LENGTH,
) -> str:
    """Check a title search query and return it stripped."""
    if title is None or len(title.strip()) < min_length:
        raise InvalidProductDataError(
            f"Title query must have at least {min_length} characters",
            details={"title": title, "min_length": min_length},
        )
    return title.strip()


def validate_batch_size(size: int, max_size: int = DEFAULT_MAX_BATCH_SIZE) -> None:
    """Check that a batch does not exceed the allowed size."""
    if size > max_size:
        raise InvalidProductDataError(
            f"Cannot process more than {max_size} products at once",
            details={"size": size, "max_size": max_size},
        )


def validate_creation_rules(
    product: Product,
    new_product_min_price: Decimal = DEFAULT_NEW_PRODUCT_MIN_PRICE,
) -> None:
    """Apply business rules that gate product creation.

    New-condition products must be priced at or above a minimum.

    Raises:
        InvalidProductDataError: If a rule is violated.
    """
    if product.condition == ProductCondition.NEW and product.price < new_product_min_price:
        raise InvalidProductDataError(
            f"New products must have a minimum price of {new_product_min_price}",
            details={
                "price": str(product.price),
                "condition": product.condition.value,
                "min_price": str(new_product_min_price),
            },
        )


def ensure_not_closed(product: Product) -> None:
    """Reject operations that require a product that is not soft-deleted."""
    if product.status == ProductStatus.CLOSED:
        raise InvalidProductDataError(
            f"Product {product.id} is already deleted",
            details={"product_id": product.id, "status": product.status.value},
        )
