"""In-memory product store.

Owns the canonical collection of product records and guards it with a
reader/writer lock: any number of concurrent readers, one writer at a time,
and a writer excludes all readers. Every record leaving the store is a deep
copy, so callers never observe later mutations and cannot alter stored
records without going through a write operation.
"""

import copy
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

import structlog

from catalog_core.domain.exceptions import DuplicateProductError, ProductNotFoundError
from catalog_core.domain.models import Product

logger = structlog.get_logger(__name__)


class ReadWriteLock:
    """Reader/writer lock preferring waiting writers.

    Example usage:
        lock = ReadWriteLock()
        with lock.read():
            ...
        with lock.write():
            ...
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock in exclusive mode."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ProductStore:
    """Canonical in-memory collection of products.

    Records are kept in insertion order, which is the "unsorted" order seen
    by listings and searches.

    Example usage:
        store = ProductStore()
        store.insert(product)
        snapshot = store.list_all()
    """

    def __init__(self, products: Iterable[Product] | None = None) -> None:
        """Initialize store, optionally with initial records.

        Args:
            products: Initial records. Ids must be unique.

        Raises:
            DuplicateProductError: If the initial records repeat an id.
        """
        self._products: dict[str, Product] = {}
        self._lock = ReadWriteLock()
        if products is not None:
            self.insert_many(products)

    def insert(self, product: Product) -> Product:
        """Insert a new product.

        Args:
            product: Product to insert. The store keeps its own copy.

        Returns:
            Copy of the stored product.

        Raises:
            DuplicateProductError: If a product with the same id exists.
        """
        with self._lock.write():
            if product.id in self._products:
                raise DuplicateProductError(product.id)
            stored = copy.deepcopy(product)
            self._products[stored.id] = stored
            logger.debug("product_inserted", product_id=stored.id)
            return copy.deepcopy(stored)

    def insert_many(self, products: Iterable[Product]) -> list[Product]:
        """Insert several products atomically.

        Either every product is inserted or none is.

        Args:
            products: Products to insert.

        Returns:
            Copies of the stored products, in input order.

        Raises:
            DuplicateProductError: If any id collides with the store or
                with another product in the batch.
        """
        staged = [copy.deepcopy(p) for p in products]
        with self._lock.write():
            seen: set[str] = set()
            for product in staged:
                if product.id in self._products or product.id in seen:
                    raise DuplicateProductError(product.id)
                seen.add(product.id)
            for product in staged:
                self._products[product.id] = product
            logger.debug("products_inserted", count=len(staged))
            return [copy.deepcopy(p) for p in staged]

    def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Copy of the product, or None if not found.
        """
        with self._lock.read():
            product = self._products.get(product_id)
            return copy.deepcopy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        """Point-in-time copy of every product, in insertion order."""
        with self._lock.read():
            return copy.deepcopy(list(self._products.values()))

    def count(self) -> int:
        """Number of stored products."""
        with self._lock.read():
            return len(self._products)

    def update(self, product_id: str, transform: Callable[[Product], Product]) -> Product:
        """Replace a stored product with a transformed version under the write lock.

        The callback receives a working copy and returns the new record.
        The result replaces the stored record only if the callback returns
        normally, so a callback that raises leaves the store unchanged.

        Args:
            product_id: Product ID.
            transform: Callback producing the updated product. It must keep
                the product id.

        Returns:
            Copy of the updated product.

        Raises:
            ProductNotFoundError: If no product has the given id.
        """
        with self._lock.write():
            current = self._products.get(product_id)
            if current is None:
                raise ProductNotFoundError(product_id)
            updated = transform(copy.deepcopy(current))
            if updated.id != product_id:
                raise ValueError(f"Product id cannot change on update: {product_id} -> {updated.id}")
            self._products[product_id] = updated
            return copy.deepcopy(updated)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, product_id: object) -> bool:
        with self._lock.read():
            return product_id in self._products
