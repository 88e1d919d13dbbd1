"""Tests for business validation rules."""

from decimal import Decimal

import pytest

from catalog_core.domain import InvalidProductDataError, ProductCondition, ProductStatus
from catalog_core.domain.validation import (
    ensure_not_closed,
    parse_status,
    validate_batch_size,
    validate_brand_exists,
    validate_creation_rules,
    validate_pagination,
    validate_price,
    validate_price_range,
    validate_product_id,
    validate_title_query,
)


class TestValidateProductId:
    """Tests for id format checks."""

    @pytest.mark.parametrize("product_id", ["MLA1", "MLA123456789", "MLA0"])
    def test_valid_ids(self, product_id: str) -> None:
        """Prefix followed by digits is accepted."""
        validate_product_id(product_id, "MLA")

    @pytest.mark.parametrize(
        "product_id",
        ["", "   ", None, "MLA", "MLB123", "mla123", "MLA12a", "XMLA12", "MLA12 ", "123"],
    )
    def test_invalid_ids(self, product_id: str | None) -> None:
        """Anything else is rejected."""
        with pytest.raises(InvalidProductDataError):
            validate_product_id(product_id, "MLA")

    @pytest.mark.parametrize("product_id", [5, 1.5, b"MLA1", ["MLA1"]])
    def test_non_string_ids(self, product_id: object) -> None:
        """Values that are not strings are invalid input."""
        with pytest.raises(InvalidProductDataError) as exc_info:
            validate_product_id(product_id, "MLA")
        assert exc_info.value.details["product_id"] == repr(product_id)

    def test_custom_prefix(self) -> None:
        """The configured prefix is used."""
        validate_product_id("ABC42", "ABC")
        with pytest.raises(InvalidProductDataError):
            validate_product_id("MLA42", "ABC")


class TestValidatePagination:
    """Tests for pagination bounds."""

    @pytest.mark.parametrize("offset,limit", [(0, 1), (0, 200), (500, 50)])
    def test_valid_bounds(self, offset: int, limit: int) -> None:
        """Offset >= 0 and 1 <= limit <= 200 pass."""
        validate_pagination(offset, limit)

    @pytest.mark.parametrize("offset,limit", [(-1, 10), (0, 0), (0, -5), (0, 201)])
    def test_invalid_bounds(self, offset: int, limit: int) -> None:
        """Out-of-range values raise."""
        with pytest.raises(InvalidProductDataError):
            validate_pagination(offset, limit)

    def test_custom_max_limit(self) -> None:
        """The maximum limit is configurable."""
        with pytest.raises(InvalidProductDataError):
            validate_pagination(0, 11, max_limit=10)


class TestValidatePriceRange:
    """Tests for price range checks."""

    def test_open_range(self) -> None:
        """Both bounds absent is valid."""
        validate_price_range(None, None)

    def test_zero_min_allowed(self) -> None:
        """Minimum may be zero."""
        validate_price_range(Decimal("0"), Decimal("10"))

    def test_equal_bounds_allowed(self) -> None:
        """min == max is a valid range."""
        validate_price_range(Decimal("10"), Decimal("10"))

    def test_negative_min(self) -> None:
        """Negative minimum is rejected."""
        with pytest.raises(InvalidProductDataError):
            validate_price_range(Decimal("-1"), None)

    def test_zero_max(self) -> None:
        """Maximum must be positive."""
        with pytest.raises(InvalidProductDataError):
            validate_price_range(None, Decimal("0"))

    def test_min_greater_than_max(self) -> None:
        """Inverted range is rejected."""
        with pytest.raises(InvalidProductDataError):
            validate_price_range(Decimal("20"), Decimal("10"))


class TestValidatePrice:
    """Tests for single price checks."""

    def test_positive_price(self) -> None:
        """Positive prices pass."""
        validate_price(Decimal("0.01"))

    @pytest.mark.parametrize("price", [None, Decimal("0"), Decimal("-3")])
    def test_non_positive_price(self, price: Decimal | None) -> None:
        """Zero, negative or missing prices are rejected."""
        with pytest.raises(InvalidProductDataError):
            validate_price(price)


class TestParseStatus:
    """Tests for status enum membership."""

    @pytest.mark.parametrize("value", ["active", "paused", "closed"])
    def test_known_values(self, value: str) -> None:
        """Known values parse to ProductStatus."""
        assert parse_status(value) == ProductStatus(value)

    def test_enum_passthrough(self) -> None:
        """Enum members are accepted as is."""
        assert parse_status(ProductStatus.PAUSED) is ProductStatus.PAUSED

    @pytest.mark.parametrize("value", ["deleted", "ACTIVE", "", None])
    def test_unknown_values(self, value: str | None) -> None:
        """Unknown values raise and list the valid ones."""
        with pytest.raises(InvalidProductDataError) as exc_info:
            parse_status(value)
        assert exc_info.value.details["valid_statuses"] == ["active", "paused", "closed"]


class TestValidateBrandExists:
    """Tests for brand existence."""

    def test_known_brand_exact_spelling(self) -> None:
        """A brand spelled as stored is accepted."""
        validate_brand_exists("Nike", ["Adidas", "Nike"])

    @pytest.mark.parametrize("brand", ["nike", "NIKE", " Nike", None])
    def test_brand_must_match_exactly(self, brand: str | None) -> None:
        """Case or whitespace differences are not the same brand."""
        with pytest.raises(InvalidProductDataError):
            validate_brand_exists(brand, ["Adidas", "Nike"])

    def test_unknown_brand_lists_available(self) -> None:
        """Unknown brand error names the available brands."""
        with pytest.raises(InvalidProductDataError) as exc_info:
            validate_brand_exists("Samsung", ["Adidas", "Nike"])
        assert "Adidas, Nike" in exc_info.value.message
        assert exc_info.value.details["available_brands"] == ["Adidas", "Nike"]


class TestValidateTitleQuery:
    """Tests for title search queries."""

    def test_returns_stripped_query(self) -> None:
        """Valid queries come back stripped."""
        assert validate_title_query("  ni  ") == "ni"

    @pytest.mark.parametrize("title", [None, "", " ", "a", " a "])
    def test_too_short(self, title: str | None) -> None:
        """Fewer than two characters is rejected."""
        with pytest.raises(InvalidProductDataError):
            validate_title_query(title)


class TestBatchAndCreationRules:
    """Tests for batch size and creation rules."""

    def test_batch_at_limit(self) -> None:
        """Exactly the maximum is allowed."""
        validate_batch_size(100)

    def test_batch_over_limit(self) -> None:
        """More than the maximum is rejected."""
        with pytest.raises(InvalidProductDataError):
            validate_batch_size(101)

    def test_cheap_new_product_rejected(self, product_factory) -> None:
        """New products below the minimum price are rejected."""
        product = product_factory(price="99.99", condition=ProductCondition.NEW)
        with pytest.raises(InvalidProductDataError):
            validate_creation_rules(product)

    def test_new_product_at_minimum_allowed(self, product_factory) -> None:
        """The minimum itself is allowed."""
        validate_creation_rules(product_factory(price="100", condition=ProductCondition.NEW))

    def test_cheap_used_product_allowed(self, product_factory) -> None:
        """The minimum only applies to new products."""
        validate_creation_rules(product_factory(price="5.00", condition=ProductCondition.USED))

    def test_ensure_not_closed(self, product_factory) -> None:
        """Closed products are rejected, open ones pass."""
        ensure_not_closed(product_factory(status=ProductStatus.PAUSED))
        with pytest.raises(InvalidProductDataError):
            ensure_not_closed(product_factory(status=ProductStatus.CLOSED))
