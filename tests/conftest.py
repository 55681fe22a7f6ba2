"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from inventory_console.config import Settings
from inventory_console.main import create_app
from inventory_console.models.product import ProductStatus
from inventory_console.state import InventoryState
from tests.helpers import make_product


# Force anyio to use only asyncio backend (not trio)
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        seed_mock_data=False,
        preferences_path=str(tmp_path / "preferences.json"),
    )


@pytest.fixture
def products():
    """Five products: two low on stock, one discontinued and out of stock."""
    return [
        make_product("p1", "Laptop", "LP-001", "Electronics", 999.99, 15),
        make_product("p2", "Mouse", "MS-002", "Electronics", 19.5, 5),
        make_product("p3", "Desk", "DK-003", "Furniture", 250.0, 0, ProductStatus.DISCONTINUED),
        make_product("p4", "Chair", "CH-004", "Furniture", 120.0, 8),
        make_product("p5", "Pen", "PN-005", "Stationery", 1.25, 300),
    ]


@pytest.fixture
def state(settings, products):
    return InventoryState(settings, products)


@pytest.fixture
def store(state):
    return state.products


@pytest.fixture
def client(settings, state):
    return TestClient(create_app(settings, state))
