"""Per-session report view state.

Holds the selected program type, date filter, loaded report and the open
entry form. Every report fetch is tagged with a sequence number and only the
response for the latest issued request is applied, so a slow response for an
old filter can never overwrite rows for a newer one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

import httpx

from app.db.enums import ReportSource
from app.schemas.program import ProgramTypeRead
from app.schemas.report import EntryForm, ReportRead, ReportRowRead
from app.services.field_rendering import coerce_input
from app.services.reports_client import ReportsClient

logger = logging.getLogger(__name__)


class EntryValidationError(ValueError):
    """Form is incomplete; nothing was sent."""


class ReportWriteError(Exception):
    """The API rejected a write; the form stays open for correction."""


class RequestSequencer:
    """Monotonic request numbering; only the latest issued number is current."""

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, seq: int) -> bool:
        return seq == self._latest


@dataclass
class EntryDraft:
    """Values of an open add/edit form."""

    form: EntryForm
    date: date | None = None
    data: dict[str, Any] = field(default_factory=dict)
    notes: str = ""
    contact_id: UUID | None = None
    entity_id: UUID | None = None

    @classmethod
    def from_form(cls, form: EntryForm) -> "EntryDraft":
        return cls(
            form=form,
            date=form.date,
            data=dict(form.data),
            notes=form.notes or "",
            contact_id=form.contact_id,
            entity_id=form.entity_id,
        )


class ReportView:
    def __init__(self, client: ReportsClient):
        self._client = client
        self._sequencer = RequestSequencer()
        self.program_type: ProgramTypeRead | None = None
        self.date_from: date | None = None
        self.date_to: date | None = None
        self.report: ReportRead | None = None
        self.loading = False
        self.draft: EntryDraft | None = None

    @property
    def rows(self) -> list[ReportRowRead]:
        return self.report.rows if self.report else []

    @property
    def is_booking_sourced(self) -> bool:
        return bool(self.program_type and self.program_type.source is ReportSource.BOOKING)

    # -------------------------------------------------------------------------
    # Filters & fetch
    # -------------------------------------------------------------------------

    async def select_program_type(self, program_type_id: UUID) -> bool:
        self.program_type = await self._client.get_program_type(program_type_id)
        self.draft = None
        return await self.refresh()

    async def set_date_range(self, date_from: date | None, date_to: date | None) -> bool:
        self.date_from = date_from
        self.date_to = date_to
        return await self.refresh()

    async def clear_dates(self) -> bool:
        return await self.set_date_range(None, None)

    async def refresh(self) -> bool:
        """
        Fetch the report for the current filters.

        Returns True when the response was applied, False when it failed or
        was superseded by a newer request.
        """
        if self.program_type is None:
            return False
        seq = self._sequencer.issue()
        self.loading = True
        try:
            report = await self._client.fetch_report(
                self.program_type.id, self.date_from, self.date_to, request_seq=seq
            )
        except httpx.HTTPError as exc:
            if not self._sequencer.is_current(seq):
                return False
            logger.error(f"Error fetching report rows: {exc}")
            self.report = None
            self.loading = False
            return False

        if not self._sequencer.is_current(seq):
            logger.debug(f"Discarding stale report response seq={seq} latest={self._sequencer.latest}")
            return False
        self.report = report
        self.loading = False
        return True

    # -------------------------------------------------------------------------
    # Entry form
    # -------------------------------------------------------------------------

    async def open_add_form(self) -> EntryDraft:
        if self.program_type is None:
            raise EntryValidationError("Select a program first")
        form = await self._client.get_form(self.program_type.id)
        self.draft = EntryDraft.from_form(form)
        return self.draft

    async def open_edit_form(self, entry_id: UUID) -> EntryDraft:
        if self.program_type is None:
            raise EntryValidationError("Select a program first")
        form = await self._client.get_form(self.program_type.id, entry_id)
        self.draft = EntryDraft.from_form(form)
        return self.draft

    def set_field_value(self, key: str, raw: Any) -> None:
        """Store a raw widget value using the field's input mapping."""
        if self.draft is None or self.program_type is None:
            return
        schema_field = self.program_type.field_schema.get_field(key)
        self.draft.data[key] = coerce_input(schema_field, raw) if schema_field else raw

    async def save(self) -> None:
        """
        Submit the open form, then close it and reload the report.

        Raises:
            EntryValidationError: date missing on an entry-sourced form (no request sent)
            ReportWriteError: the API rejected the write
        """
        draft = self.draft
        if draft is None or self.program_type is None:
            return
        program_type_id = self.program_type.id

        if self.is_booking_sourced:
            if draft.form.entry_id is None:
                return
            try:
                await self._client.set_booking_report_data(
                    program_type_id, draft.form.entry_id, draft.data
                )
            except httpx.HTTPError as exc:
                raise ReportWriteError("Failed to update entry") from exc
        else:
            if not draft.date:
                raise EntryValidationError("Date is required")
            payload = {
                "date": draft.date.isoformat(),
                "data": draft.data,
                "notes": draft.notes or None,
                "contact_id": str(draft.contact_id) if draft.contact_id else None,
                "entity_id": str(draft.entity_id) if draft.entity_id else None,
            }
            try:
                if draft.form.entry_id:
                    await self._client.update_entry(program_type_id, draft.form.entry_id, payload)
                else:
                    await self._client.create_entry(program_type_id, payload)
            except httpx.HTTPError as exc:
                action = "update" if draft.form.entry_id else "add"
                raise ReportWriteError(f"Failed to {action} entry") from exc

        self.draft = None
        await self.refresh()

    async def delete(self, entry_id: UUID) -> None:
        """
        Raises:
            ReportWriteError: the API rejected the delete
        """
        if self.program_type is None or self.is_booking_sourced:
            return
        try:
            await self._client.delete_entry(self.program_type.id, entry_id)
        except httpx.HTTPError as exc:
            raise ReportWriteError("Failed to delete entry") from exc
        await self.refresh()
