"""Multi-criteria product filtering.

Filters run over a snapshot taken from the store, never against the live
collection. Text comparisons are case-insensitive throughout and every
filter keeps the snapshot's relative order.
"""

from collections.abc import Iterable
from decimal import Decimal
from enum import Enum

from catalog_core.domain.models import Product


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _matches_title(product: Product, text: str) -> bool:
    return product.title is not None and text.lower() in product.title.lower()


def _matches_brand(product: Product, brand: str) -> bool:
    wanted = brand.lower()
    return any(name.lower() == wanted for name in product.brands)


def _matches_price(
    product: Product,
    min_price: Decimal | None,
    max_price: Decimal | None,
) -> bool:
    if min_price is None and max_price is None:
        return True
    if product.price is None:
        return False
    if min_price is not None and product.price < min_price:
        return False
    if max_price is not None and product.price > max_price:
        return False
    return True


def _equals_ignore_case(value: str | Enum | None, expected: str) -> bool:
    if value is None:
        return False
    raw = value.value if isinstance(value, Enum) else value
    return raw.lower() == expected.lower()


class ProductQuery:
    """Filters over a product snapshot.

    Example usage:
        query = ProductQuery(store.list_all())
        nike = query.by_brand("nike")
        results = query.advanced(query="zapatillas", max_price=Decimal("100000"))
    """

    def __init__(self, products: Iterable[Product]) -> None:
        """Initialize query with a snapshot.

        Args:
            products: Snapshot of products to filter.
        """
        self.products = list(products)

    def by_title_contains(self, text: str) -> list[Product]:
        """Products whose title contains ``text``.

        Length checks on ``text`` are the caller's responsibility.
        """
        return [p for p in self.products if _matches_title(p, text)]

    def by_brand(self, brand: str) -> list[Product]:
        """Products with a ``BRAND`` attribute equal to ``brand``."""
        return [p for p in self.products if _matches_brand(p, brand)]

    def by_price_range(
        self,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> list[Product]:
        """Products priced within ``[min_price, max_price]``.

        Both bounds are inclusive; a missing bound leaves that side open.
        """
        return [p for p in self.products if _matches_price(p, min_price, max_price)]

    def by_condition(self, condition: str) -> list[Product]:
        """Products in the given condition."""
        return [p for p in self.products if _equals_ignore_case(p.condition, condition)]

    def by_status(self, status: str) -> list[Product]:
        """Products in the given status."""
        return [p for p in self.products if _equals_ignore_case(p.status, status)]

    def by_currency(self, currency_id: str) -> list[Product]:
        """Products priced in the given currency."""
        return [p for p in self.products if _equals_ignore_case(p.currency_id, currency_id)]

    def with_variations(self) -> list[Product]:
        """Products having at least one variation."""
        return [p for p in self.products if p.has_variations]

    def advanced(
        self,
        query: str | None = None,
        brand: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        condition: str | None = None,
    ) -> list[Product]:
        """Combine title, brand, price and condition filters with AND.

        Absent or blank arguments do not filter. With every argument absent
        the whole snapshot is returned unchanged.

        Args:
            query: Substring to look for in the title.
            brand: Brand name.
            min_price: Inclusive lower price bound.
            max_price: Inclusive upper price bound.
            condition: Item condition.

        Returns:
            Matching products in snapshot order.
        """
        results = []
        for product in self.products:
            if not _is_blank(query) and not _matches_title(product, query):
                continue
            if not _is_blank(brand) and not _matches_brand(product, brand):
                continue
            if not _matches_price(product, min_price, max_price):
                continue
            if not _is_blank(condition) and not _equals_ignore_case(product.condition, condition):
                continue
            results.append(product)
        return results

    def count_by_brand(self, brand: str) -> int:
        """Number of products of the given brand."""
        return len(self.by_brand(brand))

    def all_brands(self) -> list[str]:
        """Distinct brand names, sorted ascending."""
        return sorted({name for p in self.products for name in p.brands})

    def all_categories(self) -> list[str]:
        """Distinct category names, sorted ascending."""
        return sorted({name for p in self.products for name in p.categories})
