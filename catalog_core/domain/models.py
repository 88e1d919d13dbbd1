"""Catalog domain records.

Plain dataclasses for the product aggregate and its children. Records are
mutable so updates can be applied to working copies under the store's write lock;
everything handed to callers is a deep copy.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from catalog_core.domain.state_machines import ProductStatus

BRAND_ATTRIBUTE = "BRAND"
CATEGORY_ATTRIBUTES = frozenset({"FOOTWEAR_TYPE", "CLOTHING_TYPE", "MODEL"})


class ProductCondition(str, Enum):
    """Item condition."""

    NEW = "new"
    USED = "used"
    NOT_SPECIFIED = "not_specified"


class Currency(str, Enum):
    """Supported currencies."""

    ARS = "ARS"
    USD = "USD"
    EUR = "EUR"
    BRL = "BRL"


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


@dataclass
class Picture:
    """Product picture with plain and https URLs."""

    id: str
    url: str
    secure_url: str


@dataclass
class Attribute:
    """Product characteristic such as brand or model.

    Attributes:
        id: Attribute key (e.g. ``BRAND``).
        name: Display name.
        value_name: Attribute value.
    """

    id: str
    name: str
    value_name: str | None = None


@dataclass
class AttributeCombination:
    """One axis of a variation, e.g. ``Talle = 42``."""

    name: str
    value_name: str


@dataclass
class Variation:
    """A purchasable configuration of a product."""

    id: int
    price: Decimal
    available_quantity: int = 0
    attribute_combinations: list[AttributeCombination] = field(default_factory=list)


@dataclass
class Product:
    """Product listing in the catalog.

    Attributes:
        id: Catalog id (configured prefix followed by digits).
        title: Listing title.
        description: Long description.
        price: Price in major currency units.
        currency_id: ISO currency code.
        condition: Item condition.
        status: Listing status.
        thumbnail: Main image URL.
        permalink: Public listing URL, if any.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        pictures: Listing pictures.
        attributes: Characteristics; ``BRAND`` is the brand signal.
        variations: Purchasable configurations.
    """

    id: str
    title: str
    description: str
    price: Decimal
    currency_id: str
    condition: ProductCondition
    status: ProductStatus = ProductStatus.ACTIVE
    thumbnail: str | None = None
    permalink: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    pictures: list[Picture] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    variations: list[Variation] = field(default_factory=list)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, status={self.status.value}, title={self.title[:30]}...)>"

    @property
    def brands(self) -> list[str]:
        """Values of every ``BRAND`` attribute."""
        return [
            attr.value_name
            for attr in self.attributes
            if attr.id == BRAND_ATTRIBUTE and attr.value_name is not None
        ]

    @property
    def categories(self) -> list[str]:
        """Values of every category-signal attribute."""
        return [
            attr.value_name
            for attr in self.attributes
            if attr.id in CATEGORY_ATTRIBUTES and attr.value_name is not None
        ]

    @property
    def has_variations(self) -> bool:
        """Whether the product has at least one variation."""
        return bool(self.variations)

    @property
    def available_quantity(self) -> int:
        """Total stock across variations."""
        return sum(v.available_quantity for v in self.variations)

    def touch(self, now: datetime) -> None:
        """Refresh the last update timestamp.

        The timestamp never moves backwards, even if the clock does.

        Args:
            now: Current time.
        """
        self.updated_at = max(now, self.updated_at, self.created_at)
