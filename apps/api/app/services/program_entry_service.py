"""Write path for program report rows.

Entry-sourced program types own their ProgramEntry rows outright. For
booking-sourced types the only writable thing is the booking's report
annotation; booking columns mirror Cal.com and are never touched here.
"""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ReadOnlySourceError
from app.core.program_sources import get_booking_program_name
from app.db.models import BookingReportAnnotation, ProgramEntry, ProgramType
from app.services.field_rendering import coerce_entry_data
from app.services.program_type_service import parse_field_schema
from app.services.report_service import get_booking_for_program

logger = logging.getLogger(__name__)


def _require_entry_sourced(program_type: ProgramType) -> None:
    if get_booking_program_name(program_type.slug) is not None:
        raise ReadOnlySourceError(
            "Entries for this program sync from bookings; only report details can be edited"
        )


def get_entry(db: Session, program_type_id: UUID, entry_id: UUID) -> ProgramEntry | None:
    return (
        db.query(ProgramEntry)
        .filter(
            ProgramEntry.program_type_id == program_type_id,
            ProgramEntry.id == entry_id,
        )
        .first()
    )


def create_entry(
    db: Session,
    program_type: ProgramType,
    *,
    entry_date: date,
    data: dict[str, Any],
    notes: str | None = None,
    contact_id: UUID | None = None,
    entity_id: UUID | None = None,
) -> ProgramEntry:
    """
    Insert a manually entered report row.

    contact_id/entity_id are only stored when the schema shows those pickers.

    Raises:
        ReadOnlySourceError: program type is booking-sourced
        ValueError: a numeric field received a non-numeric value
    """
    _require_entry_sourced(program_type)
    schema = parse_field_schema(program_type)

    entry = ProgramEntry(
        program_type_id=program_type.id,
        date=entry_date,
        data=coerce_entry_data(schema.fields, data),
        notes=notes or None,
        contact_id=contact_id if schema.show_contact else None,
        entity_id=entity_id if schema.show_entity else None,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info(f"Created program entry {entry.id} for {program_type.slug}")
    return entry


def update_entry(
    db: Session,
    program_type: ProgramType,
    entry_id: UUID,
    *,
    entry_date: date,
    data: dict[str, Any],
    notes: str | None = None,
    contact_id: UUID | None = None,
    entity_id: UUID | None = None,
) -> ProgramEntry:
    """
    Replace the editable fields of an existing entry.

    Raises:
        ReadOnlySourceError: program type is booking-sourced
        NotFoundError: no entry with that id for this program type
        ValueError: a numeric field received a non-numeric value
    """
    _require_entry_sourced(program_type)
    schema = parse_field_schema(program_type)
    coerced = coerce_entry_data(schema.fields, data)

    entry = get_entry(db, program_type.id, entry_id)
    if not entry:
        raise NotFoundError("Entry not found")

    entry.date = entry_date
    entry.data = coerced
    entry.notes = notes or None
    entry.contact_id = contact_id if schema.show_contact else None
    entry.entity_id = entity_id if schema.show_entity else None
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, program_type: ProgramType, entry_id: UUID) -> None:
    """
    Delete one entry by id.

    Raises:
        ReadOnlySourceError: program type is booking-sourced
        NotFoundError: no entry with that id for this program type
    """
    _require_entry_sourced(program_type)
    entry = get_entry(db, program_type.id, entry_id)
    if not entry:
        raise NotFoundError("Entry not found")
    db.delete(entry)
    db.commit()
    logger.info(f"Deleted program entry {entry_id} for {program_type.slug}")


def set_booking_report_data(
    db: Session,
    program_type: ProgramType,
    booking_id: UUID,
    data: dict[str, Any],
) -> BookingReportAnnotation:
    """
    Replace the report annotation of a booking with the submitted mapping.

    Only the annotation row is written; the booking itself is left as synced.

    Raises:
        ReadOnlySourceError: program type is entry-sourced
        NotFoundError: booking is not in this program's booking category
        ValueError: a numeric field received a non-numeric value
    """
    schema = parse_field_schema(program_type)
    coerced = coerce_entry_data(schema.fields, data)
    booking = get_booking_for_program(db, program_type, booking_id)

    annotation = booking.annotation
    if annotation is None:
        annotation = BookingReportAnnotation(booking_id=booking.id, data=coerced)
        db.add(annotation)
    else:
        annotation.data = coerced
    db.commit()
    db.refresh(annotation)
    return annotation
