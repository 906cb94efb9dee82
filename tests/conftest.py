"""Pytest fixtures and configuration."""

from datetime import datetime, timezone

import pytest

from storefront_pricing.models import Category, ProductAttribute, ProductVariant


@pytest.fixture
def fixed_now():
    """A fixed evaluation moment for sale window checks."""
    return datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sale_window():
    """Start and end of a June sale."""
    return (
        datetime(2025, 6, 1, 0, 0, 0, tzinfo=timezone.utc),
        datetime(2025, 6, 30, 23, 59, 59, tzinfo=timezone.utc),
    )


@pytest.fixture
def raw_attributes():
    """Attributes as returned by the product API."""
    return [
        {
            "id": "color",
            "name": {"en": "Color", "ar": "اللون"},
            "type": "color",
            "values": [
                {"id": "red", "value": "red", "label": "Red", "hexColor": "#ff0000", "priceModifier": 10},
                {"id": "blue", "value": "blue", "label": "Blue", "hexColor": "#0000ff", "priceModifier": 0},
            ],
        },
        {
            "id": "size",
            "name": "Size",
            "type": "size",
            "values": [
                {"id": "m", "value": "u40", "priceModifier": 0},
                {"id": "l", "value": "u42", "priceModifier": 5.5},
                {"id": "xl", "value": "u44", "priceModifier": 7.25, "inStock": False},
            ],
        },
    ]


@pytest.fixture
def raw_variants():
    """Variants as returned by the product API."""
    return [
        {
            "id": "v-red-m",
            "attributeValues": {"color": "red", "size": "m"},
            "price": 120,
            "sku": "TS-RED-M",
            "image": "/img/red-m.jpg",
            "inStock": True,
            "stockQuantity": 4,
        },
        {
            "id": "v-red-l",
            "attributeValues": {"color": "red", "size": "l"},
            "sku": "TS-RED-L",
            "inStock": False,
            "stockQuantity": 0,
        },
        {
            "id": "v-blue-m",
            "attributeValues": [
                {"attributeId": "color", "valueId": "blue"},
                {"attributeId": "size", "valueId": "m"},
            ],
            "price": 95.5,
            "sku": "TS-BLUE-M",
            "inStock": True,
            "stockQuantity": 12,
        },
    ]


@pytest.fixture
def attributes(raw_attributes):
    return [ProductAttribute.model_validate(a) for a in raw_attributes]


@pytest.fixture
def variants(raw_variants):
    return [ProductVariant.model_validate(v) for v in raw_variants]


@pytest.fixture
def flat_categories():
    """Flat category rows, deliberately out of sort order."""
    return [
        Category(id="women", slug="women", name_en="Women", name_ar="نساء", sort_order=2),
        Category(id="men", slug="men", name_en="Men", name_ar="رجال", sort_order=1),
        Category(id="dresses", slug="dresses", name_en="Dresses", name_ar="فساتين",
                 parent_id="women", sort_order=2),
        Category(id="tops", slug="tops", name_en="Tops", name_ar="بلوزات",
                 parent_id="women", sort_order=1),
        Category(id="midi", slug="midi", name_en="Midi Dresses", name_ar="",
                 parent_id="dresses", sort_order=0),
        Category(id="orphan", slug="orphan", name_en="Orphan", name_ar="",
                 parent_id="missing"),
    ]


@pytest.fixture
def raw_products_batch(sale_window):
    """Mixed batch of raw product records."""
    start, end = sale_window
    return [
        {
            "id": "p1",
            "price": 100,
            "salePrice": 80,
            "onSale": True,
            "saleStartDate": start.isoformat(),
            "saleEndDate": end.isoformat(),
        },
        {"id": "p2", "price": 200, "discountPercent": 25, "onSale": True},
        {"id": "p3", "price": 50},
        {"id": "p4", "price": 60, "onSale": True},
        {"price": 10},
        {"id": "p6", "price": "not-a-number"},
    ]
