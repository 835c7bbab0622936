"""Shared fixtures for storefront tests."""

import pytest

from storefront.catalog.memory import InMemoryCatalog
from storefront.store.product import Product


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """The packaged twelve-product sample catalog."""
    return InMemoryCatalog.sample()


@pytest.fixture
def shirt() -> Product:
    return Product(
        product_id="85067212996",
        title="Cotton Crew Neck T-Shirt",
        image="https://img.example/85067212996.jpg",
        lprice=12900,
        brand="Basic House",
        category1="Fashion",
        category2="Tops",
    )


@pytest.fixture
def jeans() -> Product:
    return Product(
        product_id="86940857379",
        title="Slim Fit Denim Jeans",
        image="https://img.example/86940857379.jpg",
        lprice=39800,
        brand="Levi's",
        category1="Fashion",
        category2="Bottoms",
    )
