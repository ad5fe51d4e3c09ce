"""Program report endpoints: schema-driven report view, entry form and entry writes."""

from datetime import date
from typing import NoReturn, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_csrf_header
from app.core.errors import InvalidSchemaError, NotFoundError, ReadOnlySourceError
from app.db.models import ProgramType
from app.schemas.report import (
    BookingReportDataRead,
    BookingReportDataWrite,
    EntryForm,
    ProgramEntryRead,
    ProgramEntryWrite,
    ReportRead,
)
from app.services import program_entry_service, program_type_service, report_service


router = APIRouter(prefix="/reports", tags=["reports"])


def get_program_type_or_404(
    program_type_id: UUID,
    db: Session = Depends(get_db),
) -> ProgramType:
    program_type = program_type_service.get_program_type(db, program_type_id)
    if not program_type:
        raise HTTPException(status_code=404, detail="Program type not found")
    return program_type


def _raise_write_error(exc: Exception, default_detail: str) -> NoReturn:
    if isinstance(exc, NotFoundError):
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    if isinstance(exc, ReadOnlySourceError):
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    if isinstance(exc, (InvalidSchemaError, ValueError)):
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    raise HTTPException(status_code=500, detail=default_detail) from exc


@router.get("/{program_type_id:uuid}", response_model=ReportRead)
def get_report(
    date_from: Optional[date] = Query(None, description="Inclusive start date"),
    date_to: Optional[date] = Query(None, description="Inclusive end date"),
    request_seq: Optional[int] = Query(None, description="Echoed back for stale-response checks"),
    program_type: ProgramType = Depends(get_program_type_or_404),
    db: Session = Depends(get_db),
):
    """Report rows, rendered cells and totals for a program type."""
    try:
        return report_service.get_report(db, program_type, date_from, date_to, request_seq)
    except InvalidSchemaError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/{program_type_id:uuid}/form", response_model=EntryForm)
def get_entry_form(
    entry_id: Optional[UUID] = Query(None, description="Entry or booking id to edit"),
    program_type: ProgramType = Depends(get_program_type_or_404),
    db: Session = Depends(get_db),
):
    """Widget descriptors for the add/edit entry form."""
    try:
        return report_service.build_entry_form(db, program_type, entry_id)
    except (NotFoundError, ReadOnlySourceError, InvalidSchemaError) as exc:
        _raise_write_error(exc, "Failed to load entry")


@router.post(
    "/{program_type_id:uuid}/entries",
    response_model=ProgramEntryRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_entry(
    body: ProgramEntryWrite,
    program_type: ProgramType = Depends(get_program_type_or_404),
    db: Session = Depends(get_db),
):
    try:
        return program_entry_service.create_entry(
            db,
            program_type,
            entry_date=body.date,
            data=body.data,
            notes=body.notes,
            contact_id=body.contact_id,
            entity_id=body.entity_id,
        )
    except (ValueError, SQLAlchemyError) as exc:
        db.rollback()
        _raise_write_error(exc, "Failed to add entry")


@router.put(
    "/{program_type_id:uuid}/entries/{entry_id:uuid}",
    response_model=ProgramEntryRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_entry(
    entry_id: UUID,
    body: ProgramEntryWrite,
    program_type: ProgramType = Depends(get_program_type_or_404),
    db: Session = Depends(get_db),
):
    try:
        return program_entry_service.update_entry(
            db,
            program_type,
            entry_id,
            entry_date=body.date,
            data=body.data,
            notes=body.notes,
            contact_id=body.contact_id,
            entity_id=body.entity_id,
        )
    except (LookupError, ValueError, SQLAlchemyError) as exc:
        db.rollback()
        _raise_write_error(exc, "Failed to update entry")


@router.delete(
    "/{program_type_id:uuid}/entries/{entry_id:uuid}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_entry(
    entry_id: UUID,
    program_type: ProgramType = Depends(get_program_type_or_404),
    db: Session = Depends(get_db),
):
    try:
        program_entry_service.delete_entry(db, program_type, entry_id)
    except (LookupError, ValueError, SQLAlchemyError) as exc:
        db.rollback()
        _raise_write_error(exc, "Failed to delete entry")


@router.put(
    "/{program_type_id:uuid}/bookings/{booking_id:uuid}/report-data",
    response_model=BookingReportDataRead,
    dependencies=[Depends(require_csrf_header)],
)
def set_booking_report_data(
    booking_id: UUID,
    body: BookingReportDataWrite,
    program_type: ProgramType = Depends(get_program_type_or_404),
    db: Session = Depends(get_db),
):
    """Replace the report details attached to a synced booking."""
    try:
        return program_entry_service.set_booking_report_data(
            db, program_type, booking_id, body.data
        )
    except (LookupError, ValueError, SQLAlchemyError) as exc:
        db.rollback()
        _raise_write_error(exc, "Failed to update entry")
