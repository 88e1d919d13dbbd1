"""Named sort orders for product listings.

All orderings are stable: products comparing equal keep their relative
input order. Unknown, absent or blank sort ids leave the input untouched.
"""

from collections.abc import Callable, Sequence
from typing import Any

import structlog

from catalog_core.domain.models import Product
from catalog_core.products.schemas import SortOption

logger = structlog.get_logger(__name__)

# sort id -> (key function, descending)
_SORTERS: dict[str, tuple[Callable[[Product], Any], bool]] = {
    "price_asc": (lambda p: p.price, False),
    "price_desc": (lambda p: p.price, True),
    "title_asc": (lambda p: p.title, False),
    "date_desc": (lambda p: p.created_at, True),
}

# Advertised to clients, in display order
SORT_OPTIONS: list[tuple[str, str]] = [
    ("relevance", "Most relevant"),
    ("price_asc", "Lowest price"),
    ("price_desc", "Highest price"),
    ("title_asc", "A-Z"),
    ("title_desc", "Z-A"),
    ("date_desc", "Newest"),
    ("date_asc", "Oldest"),
]

# Advertised but inert: requesting them keeps input order until product
# owners confirm the intended ordering
INERT_SORT_IDS = frozenset({"title_desc", "date_asc"})


def normalize_sort_id(sort_by: str | None) -> str | None:
    """Lowercase and strip a sort id; blank becomes None."""
    if sort_by is None or not sort_by.strip():
        return None
    return sort_by.strip().lower()


def sort_products(products: Sequence[Product], sort_by: str | None) -> list[Product]:
    """Order products by a named sort id.

    Args:
        products: Products in their current order.
        sort_by: One of ``price_asc``, ``price_desc``, ``title_asc``,
            ``date_desc``. Anything else keeps the input order.

    Returns:
        New list with the requested ordering.
    """
    sort_id = normalize_sort_id(sort_by)
    sorter = _SORTERS.get(sort_id) if sort_id else None
    if sorter is None:
        if sort_id in INERT_SORT_IDS:
            logger.debug("sort_option_not_implemented", sort_by=sort_id)
        return list(products)

    key, descending = sorter
    # sorted() stays stable with reverse=True
    return sorted(products, key=key, reverse=descending)


def available_sort_options(active: str | None = None) -> list[SortOption]:
    """Advertised sort options, flagging the active one.

    Args:
        active: Sort id requested by the caller, if any. Matched exactly.

    Returns:
        Fresh list of options.
    """
    return [
        SortOption(id=sort_id, name=name, active=active is not None and sort_id == active)
        for sort_id, name in SORT_OPTIONS
    ]


def active_sort_option(options: Sequence[SortOption]) -> SortOption | None:
    """The option flagged active, if any."""
    return next((option for option in options if option.active), None)
