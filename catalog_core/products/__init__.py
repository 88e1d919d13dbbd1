"""Product catalog operations.

Provides the in-memory store, filtering, sorting, pagination and the
catalog service that ties them together.
"""

from catalog_core.products.identifiers import (
    ProductIdGenerator,
    SequentialIdGenerator,
    TimestampIdGenerator,
)
from catalog_core.products.pagination import Page, paginate
from catalog_core.products.query import ProductQuery
from catalog_core.products.schemas import (
    AttributeCombinationInput,
    AttributeInput,
    BatchOperationResult,
    CatalogStatistics,
    PagingSchema,
    PictureInput,
    ProductCreate,
    ProductListResponse,
    ProductSummary,
    ProductUpdate,
    SortOption,
    VariationInput,
)
from catalog_core.products.service import CatalogService, merge_product_update
from catalog_core.products.sorting import available_sort_options, sort_products
from catalog_core.products.store import ProductStore, ReadWriteLock

__all__ = [
    # Store
    "ProductStore",
    "ReadWriteLock",
    # Query / sort / paginate
    "Page",
    "ProductQuery",
    "available_sort_options",
    "paginate",
    "sort_products",
    # Ids
    "ProductIdGenerator",
    "SequentialIdGenerator",
    "TimestampIdGenerator",
    # Schemas
    "AttributeCombinationInput",
    "AttributeInput",
    "BatchOperationResult",
    "CatalogStatistics",
    "PagingSchema",
    "PictureInput",
    "ProductCreate",
    "ProductListResponse",
    "ProductSummary",
    "ProductUpdate",
    "SortOption",
    "VariationInput",
    # Service
    "CatalogService",
    "merge_product_update",
]
