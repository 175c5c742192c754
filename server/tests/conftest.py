"""Test configuration and fixtures."""

import os
from datetime import datetime, timezone
from decimal import Decimal

# The application engine is built at import time; point it at SQLite first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tourmarket.core.database import Base, get_db  # noqa: E402
from tourmarket.models import *  # noqa: E402,F403 - Import all models
from tourmarket.models import (  # noqa: E402
    Product,
    ProductAmenity,
    ProductCategory,
    ProductType,
    TargetProductAudience,
    Tour,
    TourDate,
    User,
)

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TOUR_DATE = datetime(2025, 12, 15, 9, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine with foreign keys enforced."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session):
    """Create the application with its database dependency bound to the test session."""
    from tourmarket.main import create_app

    app = create_app()

    # Override database dependency
    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    # Clean up
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sample_user(test_session):
    """A registered traveler."""
    user = User(id="auth0|traveler", email="ana@example.com", first_name="Ana", last_name="Pérez")
    test_session.add(user)
    await test_session.commit()
    return user


@pytest_asyncio.fixture
async def sample_catalog(test_session):
    """One row per catalog table, with a Tour and a non-tour product type."""
    catalog = {
        "tour_type": ProductType(name="Tour", description="Guided tours"),
        "lodging_type": ProductType(name="Lodging", description="Places to stay"),
        "category": ProductCategory(name="Adventure"),
        "audience": TargetProductAudience(name="Families"),
        "amenity": ProductAmenity(name="Guide", icon="guide"),
        "second_amenity": ProductAmenity(name="Meals", icon="meals"),
    }
    test_session.add_all(catalog.values())
    await test_session.commit()
    return catalog


@pytest.fixture
def sample_product_data(sample_user, sample_catalog):
    """Payload for a plain (non-tour) product."""
    return {
        "name": "Casa del Lago",
        "description": "Lakeside cabin",
        "price": "120.00",
        "country": "Argentina",
        "address": "Ruta 40 km 2000",
        "max_people": 4,
        "duration": 24,
        "product_type_id": str(sample_catalog["lodging_type"].id),
        "product_category_id": str(sample_catalog["category"].id),
        "target_product_audience_id": str(sample_catalog["audience"].id),
        "user_id": sample_user.id,
    }


@pytest.fixture
def sample_tour_data(sample_product_data, sample_catalog):
    """Payload for a Tour product with two dates and two amenities."""
    return {
        **sample_product_data,
        "name": "Glaciar Perito Moreno",
        "description": "Full day glacier trek",
        "price": "250.00",
        "max_people": 12,
        "duration": 8,
        "product_type_id": str(sample_catalog["tour_type"].id),
        "departure_point": "El Calafate",
        "available_dates": ["2025-12-15T09:00:00Z", "2025-12-20T09:00:00Z"],
        "itinerary": ["Pickup", "Boat crossing", "Trek"],
        "highlight": "Walk on the ice",
        "included": "Crampons and lunch",
        "amenities": [str(sample_catalog["amenity"].id), str(sample_catalog["second_amenity"].id)],
    }


@pytest_asyncio.fixture
async def sample_product(test_session, sample_user, sample_catalog):
    """A persisted Tour product with one tour date."""
    product = Product(
        name="Quebrada de Humahuaca",
        description="Colors of the north",
        price=Decimal("100.00"),
        country="Argentina",
        address="Jujuy",
        max_people=10,
        duration=6,
        product_type_id=sample_catalog["tour_type"].id,
        product_category_id=sample_catalog["category"].id,
        target_product_audience_id=sample_catalog["audience"].id,
        user_id=sample_user.id,
    )
    test_session.add(product)
    await test_session.flush()

    tour = Tour(
        product_id=product.id,
        departure_point="Purmamarca",
        available_dates=[TOUR_DATE.isoformat()],
        itinerary=["Purmamarca", "Tilcara"],
        highlight="Cerro de los Siete Colores",
        included="Transport",
        dates=[TourDate(date=TOUR_DATE)],
    )
    test_session.add(tour)
    await test_session.commit()
    await test_session.refresh(product)
    return product


@pytest_asyncio.fixture
async def sample_tour_date(test_session, sample_product):
    """The tour date of the sample product."""
    result = await test_session.execute(
        select(TourDate).join(Tour, TourDate.tour_id == Tour.id).where(Tour.product_id == sample_product.id)
    )
    return result.scalar_one()


@pytest.fixture
def sample_booking_data(sample_user, sample_product):
    """Wire payload for a booking of the sample product."""
    return {
        "user_id": sample_user.id,
        "product_id": str(sample_product.id),
        "tickets": 2,
        "paymentMethod": "card",
        "idTransaccion": "tx-1001",
    }
