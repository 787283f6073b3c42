"""Shared fixtures: the demo catalog, a part factory and an API client."""

from decimal import Decimal
from itertools import count

import pytest
from fastapi.testclient import TestClient

from schemas import Category, Part
from seed_data import demo_catalog


@pytest.fixture
def make_part():
    """Factory for parts with arbitrary attributes."""
    ids = count(1)

    def _make(category: Category, price=100, cost=None, stock=5, name=None, **attributes) -> Part:
        number = next(ids)
        return Part(
            id=f"{category.value.lower()}-{number}",
            name=name or f"{category.value} {number}",
            category=category,
            price=Decimal(str(price)),
            cost=None if cost is None else Decimal(str(cost)),
            stock=stock,
            attributes=attributes,
        )

    return _make


@pytest.fixture
def catalog():
    return demo_catalog()


@pytest.fixture
def by_id(catalog):
    return {part.id: part for part in catalog}


@pytest.fixture
def client(catalog):
    from main import app, get_catalog

    app.dependency_overrides[get_catalog] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()
