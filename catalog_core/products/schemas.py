"""Pydantic schemas for catalog commands and results.

Commands (``ProductCreate``, ``ProductUpdate``) carry the structural
contract of inbound payloads: building one checks field presence, lengths,
numeric precision and enum membership. Results (``ProductListResponse``,
``BatchOperationResult``, ``CatalogStatistics``) are what the core hands to
the transport layer for serialization.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, Field

from catalog_core.domain.models import (
    Attribute,
    AttributeCombination,
    Currency,
    Picture,
    Product,
    ProductCondition,
    Variation,
)
from catalog_core.domain.state_machines import ProductStatus

ImageUrl = Annotated[str, Field(pattern=r"^https?://.*\.(jpg|jpeg|png|webp)$")]
SecureImageUrl = Annotated[str, Field(pattern=r"^https://.*\.(jpg|jpeg|png|webp)$")]
Price = Annotated[Decimal, Field(ge=Decimal("0.01"), max_digits=12, decimal_places=2)]


# ============================================================================
# Command Schemas
# ============================================================================


class PictureInput(BaseModel):
    """Picture of a product being created or updated."""

    url: ImageUrl = Field(..., description="Image URL")
    secure_url: SecureImageUrl = Field(..., description="HTTPS image URL")


class AttributeInput(BaseModel):
    """Attribute of a product being created or updated."""

    id: str = Field(..., min_length=2, max_length=50, description="Attribute key, e.g. BRAND")
    name: str = Field(..., min_length=2, max_length=100, description="Display name")
    value_name: str = Field(..., min_length=1, max_length=200, description="Attribute value")


class AttributeCombinationInput(BaseModel):
    """One axis of a variation."""

    name: str = Field(..., min_length=2, max_length=50)
    value_name: str = Field(..., min_length=1, max_length=100)


class VariationInput(BaseModel):
    """Variation of a product being created or updated."""

    price: Price
    available_quantity: int = Field(..., ge=0, le=99999)
    attribute_combinations: list[AttributeCombinationInput] = Field(
        ..., min_length=1, max_length=10
    )


class ProductCreate(BaseModel):
    """Command to create a product."""

    title: str = Field(..., min_length=5, max_length=255)
    description: str = Field(..., min_length=10, max_length=2000)
    price: Price
    currency_id: Currency
    condition: ProductCondition
    thumbnail: ImageUrl
    permalink: str | None = None
    pictures: list[PictureInput] = Field(..., min_length=1, max_length=10)
    attributes: list[AttributeInput] = Field(..., min_length=1, max_length=20)
    variations: list[VariationInput] = Field(default_factory=list, max_length=50)


class ProductUpdate(BaseModel):
    """Partial update of a product.

    Only fields explicitly supplied (and not None) are applied.
    """

    title: Annotated[str, Field(min_length=5, max_length=255)] | None = None
    description: Annotated[str, Field(min_length=10, max_length=2000)] | None = None
    price: Price | None = None
    currency_id: Currency | None = None
    condition: ProductCondition | None = None
    status: ProductStatus | None = None
    thumbnail: ImageUrl | None = None
    pictures: Annotated[list[PictureInput], Field(min_length=1, max_length=10)] | None = None
    attributes: Annotated[list[AttributeInput], Field(min_length=1, max_length=20)] | None = None
    variations: Annotated[list[VariationInput], Field(max_length=50)] | None = None

    def supplied_fields(self) -> dict[str, Any]:
        """Fields the caller set to a non-None value."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


def to_pictures(product_id: str, pictures: list[PictureInput]) -> list[Picture]:
    """Build domain pictures, numbering them within the product."""
    return [
        Picture(id=f"{product_id}-{index}", url=p.url, secure_url=p.secure_url)
        for index, p in enumerate(pictures, start=1)
    ]


def to_attributes(attributes: list[AttributeInput]) -> list[Attribute]:
    """Build domain attributes."""
    return [Attribute(id=a.id, name=a.name, value_name=a.value_name) for a in attributes]


def to_variations(variations: list[VariationInput]) -> list[Variation]:
    """Build domain variations, numbering them within the product."""
    return [
        Variation(
            id=index,
            price=v.price,
            available_quantity=v.available_quantity,
            attribute_combinations=[
                AttributeCombination(name=c.name, value_name=c.value_name)
                for c in v.attribute_combinations
            ],
        )
        for index, v in enumerate(variations, start=1)
    ]


# ============================================================================
# Result Schemas
# ============================================================================


class SortOption(BaseModel):
    """Sort option advertised to clients."""

    id: str
    name: str
    active: bool = False


class PagingSchema(BaseModel):
    """Paging metadata with derived navigation fields."""

    total: int = Field(..., ge=0)
    primary_results: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    has_next_page: bool
    has_previous_page: bool
    next_offset: int | None = None
    previous_offset: int | None = None

    @classmethod
    def from_window(cls, total: int, offset: int, limit: int) -> "PagingSchema":
        """Derive navigation fields for a window over ``total`` items.

        Args:
            total: Number of items before slicing.
            offset: Index of the first item in the window.
            limit: Maximum window size.

        Returns:
            Paging metadata.
        """
        has_next = offset + limit < total
        has_previous = offset > 0
        return cls(
            total=total,
            primary_results=total,
            offset=offset,
            limit=limit,
            has_next_page=has_next,
            has_previous_page=has_previous,
            next_offset=offset + limit if has_next else None,
            previous_offset=max(0, offset - limit) if has_previous else None,
        )


class ProductSummary(BaseModel):
    """Condensed product used in listings."""

    id: str
    title: str
    price: Decimal = Field(..., ge=0)
    currency_id: str
    condition: ProductCondition | None = None
    status: ProductStatus | None = None
    thumbnail: str | None = None
    permalink: str | None = None
    available_quantity: int = 0

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        """Build a summary from a domain product."""
        return cls(
            id=product.id,
            title=product.title,
            price=product.price,
            currency_id=product.currency_id,
            condition=product.condition,
            status=product.status,
            thumbnail=product.thumbnail,
            permalink=product.permalink,
            available_quantity=product.available_quantity,
        )


class ProductListResponse(BaseModel):
    """Paginated listing envelope."""

    site_id: str | None = None
    query: str | None = None
    paging: PagingSchema
    results: list[ProductSummary] = Field(default_factory=list)
    sort: SortOption | None = None
    available_sorts: list[SortOption] | None = None


class BatchOperationResult(BaseModel):
    """Per-item tally of a non-transactional batch operation."""

    total_processed: int = Field(..., ge=0)
    successful: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    message: str | None = None


class CatalogStatistics(BaseModel):
    """Aggregate catalog figures."""

    total_products: int
    active_products: int
    total_brands: int
    total_categories: int
    products_with_variations: int
    brands: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
