"""Catalog service for product operations.

High-level service that combines the store with the query, sorting and
pagination helpers and applies the business rules gating every mutation.
It is the only component that writes to the store.
"""

import copy
from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal

import structlog

from catalog_core.domain.exceptions import CatalogError, DuplicateProductError, ProductNotFoundError
from catalog_core.domain.models import Product, utc_now
from catalog_core.domain.state_machines import ProductStatus, validate_status_transition
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
from catalog_core.infrastructure.config import Settings
from catalog_core.infrastructure.config import settings as default_settings
from catalog_core.products.identifiers import ProductIdGenerator, TimestampIdGenerator
from catalog_core.products.pagination import paginate
from catalog_core.products.query import ProductQuery
from catalog_core.products.schemas import (
    BatchOperationResult,
    CatalogStatistics,
    ProductCreate,
    ProductListResponse,
    ProductSummary,
    ProductUpdate,
    SortOption,
    to_attributes,
    to_pictures,
    to_variations,
)
from catalog_core.products.sorting import (
    active_sort_option,
    available_sort_options,
    normalize_sort_id,
    sort_products,
)
from catalog_core.products.store import ProductStore

logger = structlog.get_logger(__name__)

_SCALAR_UPDATE_FIELDS = ("title", "description", "price", "condition", "thumbnail")


def merge_product_update(product: Product, changes: ProductUpdate, now: datetime) -> Product:
    """Merge a partial update into a product.

    Only fields the caller supplied are overwritten; everything else is
    carried over. The last update timestamp is always refreshed. A supplied
    status must be a legal transition from the current one.

    Args:
        product: Current product. Not modified.
        changes: Partial update.
        now: Current time.

    Returns:
        New product with the changes applied.

    Raises:
        InvalidStatusTransitionError: If the supplied status is not reachable.
    """
    supplied = changes.supplied_fields()
    updated = copy.deepcopy(product)

    if "status" in supplied:
        validate_status_transition(product.id, product.status, supplied["status"])
        updated.status = supplied["status"]

    for name in _SCALAR_UPDATE_FIELDS:
        if name in supplied:
            setattr(updated, name, supplied[name])
    if "currency_id" in supplied:
        updated.currency_id = supplied["currency_id"].value
    if "pictures" in supplied:
        updated.pictures = to_pictures(product.id, supplied["pictures"])
    if "attributes" in supplied:
        updated.attributes = to_attributes(supplied["attributes"])
    if "variations" in supplied:
        updated.variations = to_variations(supplied["variations"])

    updated.touch(now)
    return updated


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(ProductStore())
        product = service.create(ProductCreate(...))
        page = service.advanced_search(brand="nike", sort_by="price_asc")
        service.soft_delete(product.id)
    """

    def __init__(
        self,
        store: ProductStore | None = None,
        settings: Settings | None = None,
        id_generator: ProductIdGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize service.

        Args:
            store: Product store. A new empty store is used if omitted.
            settings: Catalog settings. Defaults to environment settings.
            id_generator: Source of new product ids.
            clock: Returns the current time; used for timestamps.
        """
        self.store = store if store is not None else ProductStore()
        self.settings = settings or default_settings
        self.id_generator = id_generator or TimestampIdGenerator(self.settings.id_prefix)
        self._clock = clock

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, data: ProductCreate) -> Product:
        """Create a new active product.

        Args:
            data: Structurally valid creation command.

        Returns:
            The stored product.

        Raises:
            InvalidProductDataError: If a business rule rejects the product.
            DuplicateProductError: If the generated id is already taken.
        """
        logger.info("creating_product", title=data.title)
        product = self._new_product(data)
        stored = self.store.insert(product)
        logger.info("product_created", product_id=stored.id, title=stored.title)
        return stored

    def create_batch(self, items: Sequence[ProductCreate]) -> list[Product]:
        """Create several products, all or nothing.

        Args:
            items: Creation commands.

        Returns:
            Stored products, in input order.

        Raises:
            InvalidProductDataError: If the batch is too large or any item
                breaks a business rule. Nothing is inserted in that case.
            DuplicateProductError: If any generated id collides.
        """
        logger.info("creating_product_batch", count=len(items))
        validate_batch_size(len(items), self.settings.max_batch_size)

        products = [self._new_product(data) for data in items]
        stored = self.store.insert_many(products)
        logger.info("product_batch_created", count=len(stored))
        return stored

    def _new_product(self, data: ProductCreate) -> Product:
        product_id = self.id_generator.generate()
        validate_product_id(product_id, self.settings.id_prefix)
        if product_id in self.store:
            raise DuplicateProductError(product_id)

        now = self._clock()
        product = Product(
            id=product_id,
            title=data.title,
            description=data.description,
            price=data.price,
            currency_id=data.currency_id.value,
            condition=data.condition,
            status=ProductStatus.ACTIVE,
            thumbnail=data.thumbnail,
            permalink=data.permalink,
            created_at=now,
            updated_at=now,
            pictures=to_pictures(product_id, data.pictures),
            attributes=to_attributes(data.attributes),
            variations=to_variations(data.variations),
        )
        validate_creation_rules(product, self.settings.new_product_min_price)
        return product

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, product_id: str) -> Product:
        """Get product by ID.

        Raises:
            InvalidProductDataError: If the id is malformed.
            ProductNotFoundError: If no product has this id.
        """
        logger.debug("getting_product", product_id=product_id)
        validate_product_id(product_id, self.settings.id_prefix)
        product = self.store.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def list_products(
        self,
        offset: int = 0,
        limit: int | None = None,
        sort_by: str | None = None,
    ) -> ProductListResponse:
        """List all products, sorted and paginated.

        Args:
            offset: Index of the first result.
            limit: Page size. Defaults to the configured page limit.
            sort_by: Sort id.

        Returns:
            Listing envelope with paging metadata.
        """
        limit = self.settings.default_page_limit if limit is None else limit
        logger.debug("listing_products", offset=offset, limit=limit, sort_by=sort_by)
        validate_pagination(offset, limit, self.settings.max_page_limit)

        ordered = sort_products(self.store.list_all(), sort_by)
        page = paginate(ordered, offset, limit)
        return ProductListResponse(
            paging=page.paging,
            results=[ProductSummary.from_product(p) for p in page.items],
        )

    def search_by_title(self, title: str) -> list[Product]:
        """Products whose title contains the query.

        Raises:
            InvalidProductDataError: If the query is too short.
        """
        text = validate_title_query(title, self.settings.title_query_min_length)
        results = ProductQuery(self.store.list_all()).by_title_contains(text)
        logger.debug("title_search_completed", title=text, count=len(results))
        return results

    def search_by_brand(self, brand: str) -> list[Product]:
        """Products of a brand known to the catalog.

        Raises:
            InvalidProductDataError: If no product carries this brand.
        """
        query = ProductQuery(self.store.list_all())
        validate_brand_exists(brand, query.all_brands())
        results = query.by_brand(brand)
        logger.debug("brand_search_completed", brand=brand, count=len(results))
        return results

    def search_by_price_range(
        self,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        currency_id: str | None = None,
    ) -> list[Product]:
        """Products priced within an inclusive range, optionally in one currency.

        Raises:
            InvalidProductDataError: If the range is invalid.
        """
        validate_price_range(min_price, max_price)
        query = ProductQuery(self.store.list_all())
        results = query.by_price_range(min_price, max_price)
        if currency_id is not None and currency_id.strip():
            results = ProductQuery(results).by_currency(currency_id.strip())
        logger.debug(
            "price_search_completed",
            min_price=min_price,
            max_price=max_price,
            currency_id=currency_id,
            count=len(results),
        )
        return results

    def advanced_search(
        self,
        query: str | None = None,
        brand: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        condition: str | None = None,
        offset: int = 0,
        limit: int | None = None,
        sort_by: str | None = None,
    ) -> ProductListResponse:
        """Search with optional title, brand, price and condition filters.

        Filters are combined with AND; absent ones do not filter.

        Args:
            query: Title substring.
            brand: Brand name.
            min_price: Inclusive lower price bound.
            max_price: Inclusive upper price bound.
            condition: Item condition.
            offset: Index of the first result.
            limit: Page size. Defaults to the configured page limit.
            sort_by: Sort id.

        Returns:
            Listing envelope echoing the query, with site id and sort options.
        """
        limit = self.settings.default_page_limit if limit is None else limit
        logger.info(
            "advanced_search",
            query=query,
            brand=brand,
            min_price=min_price,
            max_price=max_price,
            condition=condition,
            sort_by=sort_by,
        )
        validate_pagination(offset, limit, self.settings.max_page_limit)
        validate_price_range(min_price, max_price)

        results = ProductQuery(self.store.list_all()).advanced(
            query=query,
            brand=brand,
            min_price=min_price,
            max_price=max_price,
            condition=condition,
        )
        page = paginate(sort_products(results, sort_by), offset, limit)
        options = available_sort_options(normalize_sort_id(sort_by))

        logger.info("advanced_search_completed", total=page.total)
        return ProductListResponse(
            site_id=self.settings.site_id,
            query=query,
            paging=page.paging,
            results=[ProductSummary.from_product(p) for p in page.items],
            sort=active_sort_option(options),
            available_sorts=options,
        )

    def available_sort_options(self) -> list[SortOption]:
        """Sort options clients may request."""
        return available_sort_options()

    def brands(self) -> list[str]:
        """Distinct brands in the catalog, sorted."""
        return ProductQuery(self.store.list_all()).all_brands()

    def categories(self) -> list[str]:
        """Distinct categories in the catalog, sorted."""
        return ProductQuery(self.store.list_all()).all_categories()

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, product_id: str, changes: ProductUpdate) -> Product:
        """Apply a partial update.

        Raises:
            InvalidProductDataError: If the id is malformed or a supplied
                status is not reachable.
            ProductNotFoundError: If no product has this id.
        """
        logger.info("updating_product", product_id=product_id, fields=sorted(changes.supplied_fields()))
        validate_product_id(product_id, self.settings.id_prefix)
        now = self._clock()
        updated = self.store.update(
            product_id,
            lambda product: merge_product_update(product, changes, now),
        )
        logger.info("product_updated", product_id=product_id)
        return updated

    def update_price(
        self,
        product_id: str,
        new_price: Decimal,
        reason: str | None = None,
    ) -> Product:
        """Change the price of a product.

        Args:
            product_id: Product ID.
            new_price: New price; must be positive.
            reason: Why the price changed. Only logged.

        Raises:
            InvalidProductDataError: If the id is malformed or the price is not positive.
            ProductNotFoundError: If no product has this id.
        """
        logger.info("updating_price", product_id=product_id, new_price=new_price)
        validate_product_id(product_id, self.settings.id_prefix)
        validate_price(new_price)
        now = self._clock()
        old_prices: list[Decimal] = []

        def apply(product: Product) -> Product:
            old_prices.append(product.price)
            product.price = new_price
            product.touch(now)
            return product

        updated = self.store.update(product_id, apply)
        logger.info(
            "price_updated",
            product_id=product_id,
            old_price=old_prices[0],
            new_price=new_price,
            reason=reason,
        )
        return updated

    def update_status(self, product_id: str, new_status: str | ProductStatus) -> Product:
        """Move a product to another status.

        Raises:
            InvalidProductDataError: If the id or status is invalid, or the
                product is closed.
            ProductNotFoundError: If no product has this id.
        """
        logger.info("updating_status", product_id=product_id, new_status=new_status)
        validate_product_id(product_id, self.settings.id_prefix)
        target = parse_status(new_status)
        now = self._clock()
        old_statuses: list[ProductStatus] = []

        def apply(product: Product) -> Product:
            validate_status_transition(product.id, product.status, target)
            old_statuses.append(product.status)
            product.status = target
            product.touch(now)
            return product

        updated = self.store.update(product_id, apply)
        logger.info(
            "status_updated",
            product_id=product_id,
            old_status=old_statuses[0].value,
            new_status=target.value,
        )
        return updated

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def soft_delete(self, product_id: str) -> Product:
        """Close a product instead of removing it.

        Raises:
            InvalidProductDataError: If the id is malformed or the product is
                already closed.
            ProductNotFoundError: If no product has this id.
        """
        logger.info("deleting_product", product_id=product_id)
        validate_product_id(product_id, self.settings.id_prefix)
        now = self._clock()

        def apply(product: Product) -> Product:
            ensure_not_closed(product)
            product.status = ProductStatus.CLOSED
            product.touch(now)
            return product

        deleted = self.store.update(product_id, apply)
        logger.info("product_deleted", product_id=product_id)
        return deleted

    def delete_batch(self, product_ids: Sequence[str]) -> BatchOperationResult:
        """Soft-delete several products, tallying per-item outcomes.

        Failures are counted, not raised, and successful deletions are kept.

        Args:
            product_ids: Ids to delete.

        Returns:
            Counts of processed, successful and failed items.
        """
        logger.info("deleting_product_batch", count=len(product_ids))
        successful = 0
        failed = 0
        for product_id in product_ids:
            try:
                self.soft_delete(product_id)
                successful += 1
            except CatalogError as e:
                logger.error(
                    "product_delete_failed",
                    product_id=product_id,
                    error=e.message,
                    kind=e.kind.value,
                )
                failed += 1
            except Exception:
                logger.exception("product_delete_failed_unexpectedly", product_id=repr(product_id))
                failed += 1

        total = len(product_ids)
        logger.info("product_batch_deleted", total=total, successful=successful, failed=failed)
        return BatchOperationResult(
            total_processed=total,
            successful=successful,
            failed=failed,
            message=f"{successful} of {total} products deleted",
        )

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def statistics(self) -> CatalogStatistics:
        """Aggregate figures over a single snapshot of the catalog."""
        logger.debug("computing_statistics")
        query = ProductQuery(self.store.list_all())
        brands = query.all_brands()
        categories = query.all_categories()
        return CatalogStatistics(
            total_products=len(query.products),
            active_products=len(query.by_status(ProductStatus.ACTIVE.value)),
            total_brands=len(brands),
            total_categories=len(categories),
            products_with_variations=len(query.with_variations()),
            brands=brands,
            categories=categories,
        )
