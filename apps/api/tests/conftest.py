"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema rebuilt for each test
- HTTPX AsyncClient wired to the app with the CSRF header
- Factories for program types, contacts and bookings
"""
import os
import uuid
from datetime import date
from typing import AsyncGenerator, Generator

# Configure before the app (and its settings/engine) is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "1"
os.environ.setdefault("ENV", "test")
os.environ["CAL_WEBHOOK_SECRET"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from app.core.deps import CSRF_HEADER, CSRF_HEADER_VALUE, get_db
from app.db.base import Base
from app.db.enums import BookingType
from app.db.models import Booking, BookingReportAnnotation, Contact, ProgramType
from app.db.session import SessionLocal, engine
from app.main import app


# =============================================================================
# Sample Schemas
# =============================================================================

FIELD_TRIP_SCHEMA = {
    "fields": [
        {"key": "children_count", "label": "Children", "type": "number"},
        {"key": "adults_count", "label": "Adults", "type": "number"},
        {"key": "waivers_collected", "label": "Waivers Collected", "type": "boolean"},
    ],
    "aggregations": ["children_count", "adults_count"],
    "show_contact": True,
    "show_entity": False,
}

DONATIONS_SCHEMA = {
    "fields": [
        {"key": "amount", "label": "Amount", "type": "currency"},
        {"key": "method", "label": "Method", "type": "text", "default": "check"},
        {"key": "recurring", "label": "Recurring", "type": "boolean"},
    ],
    "aggregations": ["amount"],
    "show_contact": True,
    "show_entity": True,
}


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    The engine uses a single shared in-memory connection, so app code can
    commit freely; tables are dropped afterwards.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient with the CSRF header set (mutations are allowed)."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={CSRF_HEADER: CSRF_HEADER_VALUE},
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def bare_client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient without the CSRF header."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_program_type(db: Session):
    def _make(slug: str, field_schema: dict, name: str | None = None) -> ProgramType:
        program_type = ProgramType(
            name=name or slug.replace("-", " ").title(),
            slug=slug,
            field_schema=field_schema,
        )
        db.add(program_type)
        db.commit()
        db.refresh(program_type)
        return program_type

    return _make


@pytest.fixture
def make_contact(db: Session):
    def _make(name: str = "Test Parent", email: str | None = None, **kwargs) -> Contact:
        contact = Contact(
            name=name,
            email=email or f"parent-{uuid.uuid4().hex[:8]}@example.com",
            tags=[],
            **kwargs,
        )
        db.add(contact)
        db.commit()
        db.refresh(contact)
        return contact

    return _make


@pytest.fixture
def make_booking(db: Session):
    def _make(
        program_name: str,
        kids_count: int | None = None,
        booking_date: date | None = None,
        contact: Contact | None = None,
        report_data: dict | None = None,
        booking_type: str = BookingType.CAL_SYNC.value,
        **kwargs,
    ) -> Booking:
        booking = Booking(
            program_name=program_name,
            booking_type=booking_type,
            kids_count=kids_count,
            date=booking_date or date(2024, 5, 1),
            contact_id=contact.id if contact else None,
            **kwargs,
        )
        db.add(booking)
        db.flush()
        if report_data is not None:
            db.add(BookingReportAnnotation(booking_id=booking.id, data=report_data))
        db.commit()
        db.refresh(booking)
        return booking

    return _make


@pytest.fixture
def field_trip(make_program_type) -> ProgramType:
    return make_program_type("field-trip", FIELD_TRIP_SCHEMA, name="Field Trip")


@pytest.fixture
def donations(make_program_type) -> ProgramType:
    return make_program_type("donations", DONATIONS_SCHEMA, name="Donations")
