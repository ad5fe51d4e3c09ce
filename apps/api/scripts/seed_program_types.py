"""
Seed program types, default relationship roles and (optionally) sample report data.
Run with: python -m scripts.seed_program_types

SEED_SAMPLE_DATA=1 also creates a few contacts, synced bookings and entries.
"""

import os
import random
from datetime import date, timedelta

from app.core.program_sources import BOOKING_SOURCE_MAP
from app.db.enums import BookingType, EntityType
from app.db.models import Booking, ProgramEntry, ProgramType, RelationshipType
from app.db.session import SessionLocal
from app.schemas.program import FieldSchema
from app.services import contact_service, entity_service

PROGRAM_TYPES = [
    {
        "name": "Field Trip",
        "slug": "field-trip",
        "description": "School and group visits booked through Cal.com",
        "field_schema": {
            "fields": [
                {"key": "children_count", "label": "Children", "type": "number"},
                {"key": "adults_count", "label": "Adults", "type": "number"},
                {"key": "grade", "label": "Grade", "type": "text"},
                {"key": "fee", "label": "Fee", "type": "currency"},
                {"key": "waivers_collected", "label": "Waivers Collected", "type": "boolean"},
            ],
            "aggregations": ["children_count", "adults_count", "fee"],
            "show_contact": True,
            "show_entity": False,
        },
    },
    {
        "name": "Birthday Party",
        "slug": "birthday-party",
        "description": "Birthday parties booked through Cal.com",
        "field_schema": {
            "fields": [
                {"key": "children_count", "label": "Children", "type": "number"},
                {"key": "package", "label": "Package", "type": "text"},
                {"key": "revenue", "label": "Revenue", "type": "currency"},
            ],
            "aggregations": ["children_count", "revenue"],
            "show_contact": True,
            "show_entity": False,
        },
    },
    {
        "name": "Donations",
        "slug": "donations",
        "description": "Gifts recorded by staff",
        "field_schema": {
            "fields": [
                {"key": "amount", "label": "Amount", "type": "currency"},
                {"key": "method", "label": "Method", "type": "text", "default": "check"},
                {"key": "recurring", "label": "Recurring", "type": "boolean", "default": False},
            ],
            "aggregations": ["amount"],
            "show_contact": True,
            "show_entity": True,
        },
    },
    {
        "name": "Drop-In Play",
        "slug": "drop-in-play",
        "description": "Daily walk-in attendance",
        "field_schema": {
            "fields": [
                {"key": "visitors", "label": "Visitors", "type": "number"},
                {"key": "weather", "label": "Weather", "type": "text"},
            ],
            "aggregations": ["visitors"],
            "show_contact": False,
            "show_entity": False,
        },
    },
]

DEFAULT_RELATIONSHIP_TYPES = {
    EntityType.HOUSEHOLD: ["Parent", "Guardian", "Child", "Grandparent"],
    EntityType.SCHOOL: ["Teacher", "Administrator", "Parent Volunteer"],
    EntityType.ORGANIZATION: ["Primary Contact", "Staff", "Board Member"],
}

SAMPLE_PARENTS = [
    ("Maya Thompson", "maya.thompson@example.com"),
    ("Jordan Lee", "jordan.lee@example.com"),
    ("Priya Patel", "priya.patel@example.com"),
    ("Sam Rivera", "sam.rivera@example.com"),
]


def seed_program_types(db) -> int:
    created = 0
    for program_type in PROGRAM_TYPES:
        # Validate before writing so a typo never lands in the table
        FieldSchema.model_validate(program_type["field_schema"])
        if db.query(ProgramType).filter(ProgramType.slug == program_type["slug"]).first():
            continue
        db.add(ProgramType(**program_type))
        created += 1
    db.commit()
    return created


def seed_relationship_types(db) -> int:
    created = 0
    for entity_type, names in DEFAULT_RELATIONSHIP_TYPES.items():
        for name in names:
            exists = (
                db.query(RelationshipType.id)
                .filter(
                    RelationshipType.entity_type == entity_type.value,
                    RelationshipType.name == name,
                )
                .first()
            )
            if exists:
                continue
            db.add(RelationshipType(entity_type=entity_type.value, name=name, is_default=True))
            created += 1
    db.commit()
    return created


def seed_sample_data(db) -> None:
    contacts = []
    for name, email in SAMPLE_PARENTS:
        contact = contact_service.get_contact_by_email(db, email)
        if not contact:
            contact = contact_service.create_contact(
                db, name=name, email=email, contact_types=["parent"]
            )
        contacts.append(contact)

    household = entity_service.create_entity(
        db, name="Thompson Household", entity_type=EntityType.HOUSEHOLD.value
    )
    entity_service.add_member(db, household, contact_id=contacts[0].id, role="Parent")

    today = date.today()
    for slug, program_name in BOOKING_SOURCE_MAP.items():
        for i in range(3):
            db.add(
                Booking(
                    contact_id=random.choice(contacts).id,
                    booking_type=BookingType.CAL_SYNC.value,
                    date=today - timedelta(days=7 * i + random.randint(0, 6)),
                    timeslot="10:00 AM",
                    program_name=program_name,
                    kids_count=random.randint(8, 30),
                    notes=f"Cal.com Booking: {program_name}",
                )
            )

    donations = db.query(ProgramType).filter(ProgramType.slug == "donations").first()
    if donations:
        for i, contact in enumerate(contacts):
            db.add(
                ProgramEntry(
                    program_type_id=donations.id,
                    date=today - timedelta(days=3 * i),
                    contact_id=contact.id,
                    entity_id=household.id if i == 0 else None,
                    data={"amount": random.choice([25, 50, 100.5, 250]), "method": "check", "recurring": i % 2 == 0},
                )
            )
    db.commit()


def main():
    """Main entry point."""
    print("Seeding program types...")

    db = SessionLocal()

    try:
        print(f"  - {seed_program_types(db)} program types created")
        print(f"  - {seed_relationship_types(db)} relationship types created")
        if os.getenv("SEED_SAMPLE_DATA", "").lower() in ("1", "true", "yes"):
            seed_sample_data(db)
            print("  - sample contacts, bookings and donations created")
        print("\nSeed complete!")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
