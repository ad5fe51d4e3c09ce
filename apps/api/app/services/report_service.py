"""Schema-driven program reports.

A report is built the same way for both sources:
- entry-sourced types read ProgramEntry rows
- booking-sourced types project synced bookings into entry-shaped rows,
  taking each field from the booking's report annotation, then from the
  registered default extractor, else leaving it unset
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError, ReadOnlySourceError
from app.core.program_sources import (
    BOOKING_FIELD_DEFAULTS,
    get_booking_program_name,
    get_report_source,
)
from app.db.enums import ReportSource
from app.db.models import Booking, ProgramEntry, ProgramType
from app.schemas.program import FieldDefinition, FieldSchema
from app.schemas.report import (
    AggregationRead,
    EntryForm,
    ReportColumn,
    ReportRead,
    ReportRowRead,
)
from app.services import field_rendering
from app.services.program_type_service import display_fields, parse_field_schema

logger = logging.getLogger(__name__)

EMPTY_ENTRIES_MESSAGE = 'No entries yet. Click "Add Entry" to get started.'
EMPTY_BOOKINGS_MESSAGE = "No bookings found. Bookings sync automatically from Cal.com."


@dataclass
class ReportEntry:
    """Entry-shaped report row, whatever its source."""

    id: UUID
    date: date | None
    data: dict[str, Any] = field(default_factory=dict)
    contact_id: UUID | None = None
    contact_name: str | None = None
    entity_id: UUID | None = None
    entity_name: str | None = None
    notes: str | None = None


# =============================================================================
# Fetch
# =============================================================================


def fetch_entry_rows(
    db: Session,
    program_type_id: UUID,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ReportEntry]:
    query = (
        db.query(ProgramEntry)
        .options(joinedload(ProgramEntry.contact), joinedload(ProgramEntry.entity))
        .filter(ProgramEntry.program_type_id == program_type_id)
    )
    if date_from:
        query = query.filter(ProgramEntry.date >= date_from)
    if date_to:
        query = query.filter(ProgramEntry.date <= date_to)

    entries = query.order_by(ProgramEntry.date.desc(), ProgramEntry.created_at.desc()).all()
    return [
        ReportEntry(
            id=entry.id,
            date=entry.date,
            data=dict(entry.data or {}),
            contact_id=entry.contact_id,
            contact_name=entry.contact.name if entry.contact else None,
            entity_id=entry.entity_id,
            entity_name=entry.entity.name if entry.entity else None,
            notes=entry.notes,
        )
        for entry in entries
    ]


def project_booking_data(
    booking: Booking,
    fields: list[FieldDefinition],
) -> dict[str, Any]:
    """Field values for a booking: annotation value, else default extractor, else unset."""
    report_data = booking.annotation.data if booking.annotation else {}
    report_data = report_data or {}
    data: dict[str, Any] = {}
    for schema_field in fields:
        if schema_field.key in report_data:
            data[schema_field.key] = report_data[schema_field.key]
            continue
        extractor = BOOKING_FIELD_DEFAULTS.get(schema_field.key)
        if extractor is not None:
            data[schema_field.key] = extractor(booking)
    return data


def project_booking(booking: Booking, schema: FieldSchema) -> ReportEntry:
    return ReportEntry(
        id=booking.id,
        date=booking.date,
        data=project_booking_data(booking, schema.fields),
        contact_id=booking.contact_id,
        contact_name=booking.contact.name if booking.contact else None,
        notes=booking.notes,
    )


def _booking_query(db: Session, program_name: str):
    return (
        db.query(Booking)
        .options(joinedload(Booking.contact), joinedload(Booking.annotation))
        .filter(Booking.program_name == program_name)
    )


def fetch_booking_rows(
    db: Session,
    program_name: str,
    schema: FieldSchema,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ReportEntry]:
    query = _booking_query(db, program_name)
    if date_from:
        query = query.filter(Booking.date >= date_from)
    if date_to:
        query = query.filter(Booking.date <= date_to)

    bookings = query.order_by(Booking.date.desc(), Booking.created_at.desc()).all()
    return [project_booking(booking, schema) for booking in bookings]


def fetch_report_rows(
    db: Session,
    program_type: ProgramType,
    schema: FieldSchema,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[ReportEntry]:
    program_name = get_booking_program_name(program_type.slug)
    if program_name is not None:
        return fetch_booking_rows(db, program_name, schema, date_from, date_to)
    return fetch_entry_rows(db, program_type.id, date_from, date_to)


def get_booking_for_program(
    db: Session,
    program_type: ProgramType,
    booking_id: UUID,
) -> Booking:
    """
    Load a booking that belongs to a booking-sourced program type.

    Raises:
        ReadOnlySourceError: program type is entry-sourced
        NotFoundError: no booking with that id in the mapped category
    """
    program_name = get_booking_program_name(program_type.slug)
    if program_name is None:
        raise ReadOnlySourceError("Program type is not sourced from bookings")
    booking = _booking_query(db, program_name).filter(Booking.id == booking_id).first()
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


# =============================================================================
# Aggregation & Rendering
# =============================================================================


def compute_aggregations(rows: list[ReportEntry], schema: FieldSchema) -> dict[str, float]:
    """Sum every declared aggregation key over the loaded rows (missing keys add 0)."""
    return {
        key: sum((field_rendering.to_number(row.data.get(key)) for row in rows), 0.0)
        for key in schema.aggregations
    }


def build_aggregation_bar(
    schema: FieldSchema,
    fields: list[FieldDefinition],
    totals: dict[str, float],
) -> list[AggregationRead]:
    """Totals for the aggregated numeric fields that are on display, in schema order."""
    aggregated = set(schema.aggregations)
    return [
        AggregationRead(
            key=f.key,
            label=f.label,
            field_type=f.type,
            total=totals[f.key],
            display=field_rendering.render_total(f, totals[f.key]),
        )
        for f in fields
        if f.key in aggregated and f.is_numeric
    ]


def build_columns(
    schema: FieldSchema,
    source: ReportSource,
    fields: list[FieldDefinition],
) -> list[ReportColumn]:
    columns = [ReportColumn(key="date", label="Date")]
    if schema.show_contact:
        columns.append(ReportColumn(key="contact", label="Contact"))
    if schema.show_entity and source is ReportSource.ENTRY:
        columns.append(ReportColumn(key="entity", label="Entity"))
    columns.extend(ReportColumn(key=f.key, label=f.label) for f in fields)
    if source is ReportSource.ENTRY:
        columns.append(ReportColumn(key="notes", label="Notes"))
    return columns


def render_row(
    row: ReportEntry,
    schema: FieldSchema,
    source: ReportSource,
    fields: list[FieldDefinition],
) -> ReportRowRead:
    placeholder = field_rendering.PLACEHOLDER
    cells: dict[str, str] = {"date": row.date.isoformat() if row.date else placeholder}
    if schema.show_contact:
        cells["contact"] = row.contact_name if row.contact_name is not None else placeholder
    if schema.show_entity and source is ReportSource.ENTRY:
        cells["entity"] = row.entity_name if row.entity_name is not None else placeholder
    for f in fields:
        cells[f.key] = field_rendering.render_cell(f, row.data.get(f.key))
    if source is ReportSource.ENTRY:
        cells["notes"] = row.notes if row.notes is not None else placeholder

    return ReportRowRead(
        id=row.id,
        date=row.date,
        contact_id=row.contact_id,
        contact_name=row.contact_name,
        entity_id=row.entity_id,
        entity_name=row.entity_name,
        data=row.data,
        notes=row.notes,
        cells=cells,
    )


def get_report(
    db: Session,
    program_type: ProgramType,
    date_from: date | None = None,
    date_to: date | None = None,
    request_seq: int | None = None,
) -> ReportRead:
    """
    Build the report view for a program type and optional inclusive date range.

    A failed fetch is logged and yields an empty row set.
    """
    schema = parse_field_schema(program_type)
    source = get_report_source(program_type.slug)
    fields = display_fields(schema, source)

    try:
        rows = fetch_report_rows(db, program_type, schema, date_from, date_to)
    except SQLAlchemyError:
        logger.exception(f"Error fetching report rows for program type {program_type.slug}")
        db.rollback()
        rows = []

    totals = compute_aggregations(rows, schema)
    return ReportRead(
        program_type_id=program_type.id,
        program_name=program_type.name,
        source=source,
        date_from=date_from,
        date_to=date_to,
        columns=build_columns(schema, source, fields),
        rows=[render_row(row, schema, source, fields) for row in rows],
        aggregations=build_aggregation_bar(schema, fields, totals),
        totals=totals,
        entry_count=len(rows),
        can_create=source is ReportSource.ENTRY,
        can_delete=source is ReportSource.ENTRY,
        empty_message=EMPTY_BOOKINGS_MESSAGE if source is ReportSource.BOOKING else EMPTY_ENTRIES_MESSAGE,
        request_seq=request_seq,
    )


# =============================================================================
# Entry Form
# =============================================================================


def build_entry_form(
    db: Session,
    program_type: ProgramType,
    entry_id: UUID | None = None,
) -> EntryForm:
    """
    Describe the add/edit form for a report row.

    Raises:
        ReadOnlySourceError: add form requested for a booking-sourced type
        NotFoundError: entry_id does not match a row of this program type
    """
    schema = parse_field_schema(program_type)
    source = get_report_source(program_type.slug)
    fields = display_fields(schema, source)

    if source is ReportSource.BOOKING:
        if entry_id is None:
            raise ReadOnlySourceError(
                "Entries for this program sync from bookings and cannot be added manually"
            )
        booking = get_booking_for_program(db, program_type, entry_id)
        data = project_booking_data(booking, schema.fields)
        return EntryForm(
            mode="edit",
            source=source,
            title=f"Update {program_type.name} Details",
            submit_label="Save Details",
            entry_id=booking.id,
            date=booking.date,
            show_date=False,
            show_contact=False,
            show_entity=False,
            show_notes=False,
            data=data,
            fields=[field_rendering.render_input(f, data.get(f.key)) for f in fields],
        )

    if entry_id is None:
        data = {f.key: f.default for f in schema.fields if f.default is not None}
        return EntryForm(
            mode="create",
            source=source,
            title=f"Add {program_type.name} Entry",
            submit_label="Add Entry",
            date=date.today(),
            show_date=True,
            show_contact=schema.show_contact,
            show_entity=schema.show_entity,
            show_notes=True,
            data=data,
            fields=[field_rendering.render_input(f, data.get(f.key)) for f in fields],
        )

    entry = (
        db.query(ProgramEntry)
        .options(joinedload(ProgramEntry.contact), joinedload(ProgramEntry.entity))
        .filter(ProgramEntry.id == entry_id, ProgramEntry.program_type_id == program_type.id)
        .first()
    )
    if not entry:
        raise NotFoundError("Entry not found")
    data = dict(entry.data or {})
    return EntryForm(
        mode="edit",
        source=source,
        title=f"Edit {program_type.name} Entry",
        submit_label="Save Changes",
        entry_id=entry.id,
        date=entry.date,
        show_date=True,
        show_contact=schema.show_contact,
        show_entity=schema.show_entity,
        show_notes=True,
        contact_id=entry.contact_id,
        contact_name=entry.contact.name if entry.contact else None,
        entity_id=entry.entity_id,
        entity_name=entry.entity.name if entry.entity else None,
        notes=entry.notes,
        data=data,
        fields=[field_rendering.render_input(f, data.get(f.key)) for f in fields],
    )
