"""Shared fixtures for catalog tests."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from catalog_core.domain import (
    Attribute,
    AttributeCombination,
    Picture,
    Product,
    ProductCondition,
    ProductStatus,
    Variation,
)
from catalog_core.infrastructure.config import Settings
from catalog_core.products import (
    CatalogService,
    ProductCreate,
    ProductStore,
    SequentialIdGenerator,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock for timestamp assertions."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def build_product(
    product_id: str = "MLA1",
    title: str = "Generic product title",
    price: str = "1000.00",
    brand: str | None = "Acme",
    **overrides: Any,
) -> Product:
    """Build a product with sensible defaults."""
    attributes = [Attribute(id="BRAND", name="Marca", value_name=brand)] if brand else []
    fields: dict[str, Any] = {
        "id": product_id,
        "title": title,
        "description": f"Description for {title}",
        "price": Decimal(price),
        "currency_id": "ARS",
        "condition": ProductCondition.NEW,
        "status": ProductStatus.ACTIVE,
        "thumbnail": f"https://example.com/{product_id}.jpg",
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
        "pictures": [
            Picture(
                id=f"{product_id}-1",
                url=f"http://example.com/{product_id}.jpg",
                secure_url=f"https://example.com/{product_id}.jpg",
            )
        ],
        "attributes": attributes,
        "variations": [],
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def product_factory() -> Callable[..., Product]:
    """Factory for standalone products."""
    return build_product


@pytest.fixture
def catalog_products() -> list[Product]:
    """Five products covering brands, categories, conditions and statuses."""
    return [
        build_product(
            "MLA1",
            "Zapatillas Nike Air Max 270 - Negras",
            "89999.99",
            brand="Nike",
            created_at=BASE_TIME + timedelta(days=1),
            updated_at=BASE_TIME + timedelta(days=1),
            attributes=[
                Attribute(id="BRAND", name="Marca", value_name="Nike"),
                Attribute(id="FOOTWEAR_TYPE", name="Tipo de calzado", value_name="Zapatillas"),
            ],
            variations=[
                Variation(
                    id=1,
                    price=Decimal("89999.99"),
                    available_quantity=5,
                    attribute_combinations=[AttributeCombination(name="Talle", value_name="42")],
                ),
                Variation(
                    id=2,
                    price=Decimal("89999.99"),
                    available_quantity=3,
                    attribute_combinations=[AttributeCombination(name="Talle", value_name="43")],
                ),
            ],
        ),
        build_product(
            "MLA2",
            "iPhone 15 Pro 128GB Titanio Natural",
            "1299999.00",
            created_at=BASE_TIME + timedelta(days=5),
            updated_at=BASE_TIME + timedelta(days=5),
            attributes=[
                Attribute(id="BRAND", name="Marca", value_name="Apple"),
                Attribute(id="MODEL", name="Modelo", value_name="iPhone 15 Pro"),
            ],
        ),
        build_product(
            "MLA3",
            "Remera Adidas Originals Trefoil",
            "24999.50",
            condition=ProductCondition.USED,
            created_at=BASE_TIME + timedelta(days=3),
            updated_at=BASE_TIME + timedelta(days=3),
            attributes=[
                Attribute(id="BRAND", name="Marca", value_name="Adidas"),
                Attribute(id="CLOTHING_TYPE", name="Tipo de prenda", value_name="Remera"),
            ],
            variations=[
                Variation(
                    id=1,
                    price=Decimal("24999.50"),
                    available_quantity=10,
                    attribute_combinations=[
                        AttributeCombination(name="Color", value_name="Blanco"),
                        AttributeCombination(name="Talle", value_name="M"),
                    ],
                ),
            ],
        ),
        build_product(
            "MLA4",
            "Notebook Lenovo IdeaPad 3 15 pulgadas",
            "749999.00",
            status=ProductStatus.PAUSED,
            created_at=BASE_TIME + timedelta(days=2),
            updated_at=BASE_TIME + timedelta(days=2),
            attributes=[
                Attribute(id="BRAND", name="Marca", value_name="Lenovo"),
                Attribute(id="MODEL", name="Modelo", value_name="IdeaPad 3"),
            ],
        ),
        build_product(
            "MLA5",
            "Auriculares Sony WH-1000XM5",
            "499.99",
            currency_id="USD",
            condition=ProductCondition.NOT_SPECIFIED,
            created_at=BASE_TIME + timedelta(days=4),
            updated_at=BASE_TIME + timedelta(days=4),
            attributes=[
                Attribute(id="BRAND", name="Marca", value_name="Sony"),
                Attribute(id="MODEL", name="Modelo", value_name="WH-1000XM5"),
            ],
        ),
    ]


@pytest.fixture
def store(catalog_products: list[Product]) -> ProductStore:
    """Store preloaded with the five catalog products."""
    return ProductStore(catalog_products)


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(
        _env_file=None,
        id_prefix="MLA",
        site_id="MLA",
        default_page_limit=50,
        max_page_limit=200,
        max_batch_size=100,
        new_product_min_price=Decimal("100"),
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock set after every catalog product was created."""
    return FakeClock(BASE_TIME + timedelta(days=30))


@pytest.fixture
def service(store: ProductStore, test_settings: Settings, clock: FakeClock) -> CatalogService:
    """Catalog service over the preloaded store with predictable ids."""
    return CatalogService(
        store=store,
        settings=test_settings,
        id_generator=SequentialIdGenerator("MLA", start=1000),
        clock=clock,
    )


@pytest.fixture
def create_payload() -> Callable[..., ProductCreate]:
    """Factory for valid creation commands."""

    def _make(**overrides: Any) -> ProductCreate:
        payload: dict[str, Any] = {
            "title": "Campera Puma Essentials",
            "description": "Campera liviana de entrenamiento, color azul.",
            "price": Decimal("45999.00"),
            "currency_id": "ARS",
            "condition": "new",
            "thumbnail": "https://example.com/campera.jpg",
            "pictures": [
                {
                    "url": "http://example.com/campera.jpg",
                    "secure_url": "https://example.com/campera.jpg",
                }
            ],
            "attributes": [
                {"id": "BRAND", "name": "Marca", "value_name": "Puma"},
                {"id": "CLOTHING_TYPE", "name": "Tipo de prenda", "value_name": "Campera"},
            ],
            "variations": [
                {
                    "price": Decimal("45999.00"),
                    "available_quantity": 7,
                    "attribute_combinations": [{"name": "Talle", "value_name": "L"}],
                }
            ],
        }
        payload.update(overrides)
        return ProductCreate(**payload)

    return _make
