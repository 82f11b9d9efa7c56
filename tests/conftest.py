"""Test configuration and fixtures"""

from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from seating.config import Settings
from seating.database import Database
from seating.main import create_app
from seating.models import Customer, Restaurant, Section, Table
from seating.schemas.reservation import ReservationCreate

# Far enough ahead that the past-reservation check never trips
DINNER = datetime(2031, 6, 14, 19, 0)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a per-test data directory"""
    return Settings(_env_file=None, data_dir=tmp_path / "data", log_format="console")


@pytest.fixture
def db(settings):
    """Fresh stores and services"""
    return Database(settings)


@pytest.fixture
def restaurant(db):
    """Create a test restaurant"""
    return db.restaurants.save(
        Restaurant(
            name="Test Restaurant",
            location="123 Test St",
            contact_email="host@test-restaurant.com",
            contact_phone="+15551230000",
        )
    )


@pytest.fixture
def layout(db, restaurant):
    """
    Two sections:
      Main dining - M1 (2), M2 (4), M3 (4), M4 (6)
      Patio       - P1 (4), P2 (8)
    Table ids follow that order, 1 through 6.
    """
    main = db.sections.save(Section(restaurant_id=restaurant.restaurant_id, name="Main Dining", num_tables=4))
    patio = db.sections.save(Section(restaurant_id=restaurant.restaurant_id, name="Patio", num_tables=2))
    
    tables = {}
    for number, capacity in [("M1", 2), ("M2", 4), ("M3", 4), ("M4", 6)]:
        tables[number] = db.tables.save(Table(section_id=main.section_id, table_number=number, capacity=capacity))
    for number, capacity in [("P1", 4), ("P2", 8)]:
        tables[number] = db.tables.save(Table(section_id=patio.section_id, table_number=number, capacity=capacity))
    
    return {"main": main, "patio": patio, "tables": tables}


@pytest.fixture
def customer(db, restaurant):
    """Create a test customer"""
    return db.customers.save(
        Customer(
            first_name="Jane",
            last_name="Smith",
            email="jane.smith@example.com",
            phone="+15559876543",
            allergies="peanuts",
            restaurant_id=restaurant.restaurant_id,
        )
    )


@pytest.fixture
def make_request(customer, restaurant):
    """Build a reservation request for the test customer and restaurant"""
    def _make(table_id=None, party_size=2, at=DINNER, **kwargs):
        return ReservationCreate(
            customer_id=customer.customer_id,
            restaurant_id=restaurant.restaurant_id,
            table_id=table_id,
            party_size=party_size,
            reservation_datetime=at,
            **kwargs,
        )
    return _make


@pytest.fixture
def app(settings, db):
    """Application sharing the test stores"""
    app = create_app(settings)
    app.state.db = db
    return app


@pytest.fixture
async def client(app):
    """Create test client"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
