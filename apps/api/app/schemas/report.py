"""Pydantic schemas for program reports, entries and entry forms."""

import datetime as dt
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from app.db.enums import FieldType, ReportSource


# =============================================================================
# Entry Write Schemas
# =============================================================================


class ProgramEntryWrite(BaseModel):
    """Create or full update of a manually entered report row."""

    date: dt.date = Field(description="Entry date (required)")
    data: dict[str, Any] = Field(default_factory=dict, description="field key -> value")
    notes: str | None = None
    contact_id: UUID | None = None
    entity_id: UUID | None = None


class BookingReportDataWrite(BaseModel):
    """Replacement report data attached to a synced booking."""

    data: dict[str, Any] = Field(description="Full field key -> value mapping")


class ProgramEntryRead(BaseModel):
    id: UUID
    program_type_id: UUID
    date: dt.date
    contact_id: UUID | None
    entity_id: UUID | None
    data: dict[str, Any]
    notes: str | None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class BookingReportDataRead(BaseModel):
    booking_id: UUID
    data: dict[str, Any]
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Report View
# =============================================================================


class ReportColumn(BaseModel):
    key: str
    label: str


class ReportRowRead(BaseModel):
    """A report row; booking-sourced rows are projected into the same shape."""

    id: UUID
    date: dt.date | None
    contact_id: UUID | None = None
    contact_name: str | None = None
    entity_id: UUID | None = None
    entity_name: str | None = None
    data: dict[str, Any]
    notes: str | None = None
    cells: dict[str, str] = Field(description="Rendered display value per column key")


class AggregationRead(BaseModel):
    key: str
    label: str
    field_type: FieldType
    total: float
    display: str


class ReportRead(BaseModel):
    program_type_id: UUID
    program_name: str
    source: ReportSource
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    columns: list[ReportColumn]
    rows: list[ReportRowRead]
    aggregations: list[AggregationRead]
    totals: dict[str, float] = Field(description="Sum for every declared aggregation key")
    entry_count: int
    can_create: bool
    can_delete: bool
    empty_message: str
    request_seq: int | None = None


# =============================================================================
# Entry Form
# =============================================================================


class FieldWidget(BaseModel):
    """Input widget descriptor for one schema field."""

    key: str
    label: str
    field_type: FieldType
    widget: Literal["text", "number", "checkbox"]
    value: str | None = None
    checked: bool | None = None
    step: str | None = None


class EntryForm(BaseModel):
    mode: Literal["create", "edit"]
    source: ReportSource
    title: str
    submit_label: str
    entry_id: UUID | None = None
    date: dt.date | None = None
    show_date: bool
    show_contact: bool
    show_entity: bool
    show_notes: bool
    contact_id: UUID | None = None
    contact_name: str | None = None
    entity_id: UUID | None = None
    entity_name: str | None = None
    notes: str | None = None
    data: dict[str, Any]
    fields: list[FieldWidget]
