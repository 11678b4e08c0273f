"""Shared pytest fixtures for storefront tests."""

import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time; the real pool is never opened in tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from app.core.config import get_settings
from app.database import ConnectionManager, get_connection_manager
from app.main import app
from app.models.product import Product
from app.models.store import StoreInfo
from app.services.payment_gateway import SimulatedPaymentGateway, get_payment_gateway


@pytest.fixture
def database_url(tmp_path):
    """File-backed SQLite database, one per test."""
    return f"sqlite:///{tmp_path / 'storefront.db'}"


@pytest.fixture
def connections(database_url):
    """Connected ConnectionManager with all tables created."""
    manager = ConnectionManager(get_settings())
    manager.connect(database_url)
    SQLModel.metadata.create_all(manager.engine)
    yield manager
    manager.close()


@pytest.fixture
def session(connections):
    with connections.session() as session:
        yield session


@pytest.fixture
def catalog(session):
    """
    Two stores.

    Store 1 sells product A (price 10) and product B (price 5, newer).
    Store 2 sells a guitar.
    """
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    session.add_all(
        [
            StoreInfo(
                id=1,
                store_name="Music Corner",
                logo_path="/logos/music-corner.png",
                description="Instruments and accessories",
                address="12 Main Street",
                phone_number="020000001",
                email="hello@musiccorner.test",
            ),
            StoreInfo(id=2, store_name="String House"),
        ]
    )
    session.commit()

    session.add_all(
        [
            Product(
                id=1,
                product_name="Amplifier A",
                price=10.0,
                quantity=20,
                category="amp",
                brand="Roland",
                model="A-10",
                store_id=1,
                created_at=base,
                updated_at=base,
            ),
            Product(
                id=2,
                product_name="Cable B",
                price=5.0,
                quantity=100,
                category="accessory",
                brand="Fender",
                model="B-3m",
                store_id=1,
                created_at=base + timedelta(days=1),
                updated_at=base + timedelta(days=1),
            ),
            Product(
                id=3,
                product_name="กีตาร์โปร่ง Yamaha F310",
                price=120.0,
                quantity=4,
                category="guitar",
                brand="Yamaha",
                model="F310",
                store_id=2,
                is_recommended=True,
                created_at=base + timedelta(days=2),
                updated_at=base + timedelta(days=2),
            ),
        ]
    )
    session.commit()

    return {"store_id": 1, "product_a": 1, "product_b": 2, "guitar": 3}


@pytest.fixture
def gateway():
    return SimulatedPaymentGateway(approve=True)


@pytest.fixture
def test_client(connections, catalog, gateway):
    """
    TestClient wired to the per-test database and payment gateway.

    The app lifespan is not run, so no background monitor is started.
    """
    app.dependency_overrides[get_connection_manager] = lambda: connections
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()
