"""Tests for the report view state (request sequencing, form save flow)."""

import asyncio
import uuid
from datetime import date

import httpx
import pytest

from app.db.enums import FieldType, ReportSource
from app.schemas.program import FieldDefinition, FieldSchema, ProgramTypeRead
from app.schemas.report import EntryForm, ReportRead
from app.services.report_view import (
    EntryValidationError,
    ReportView,
    ReportWriteError,
    RequestSequencer,
)
from app.services.reports_client import ReportsClient


def _program_type(source: ReportSource = ReportSource.ENTRY) -> ProgramTypeRead:
    fields = [FieldDefinition(key="amount", label="Amount", type=FieldType.CURRENCY)]
    return ProgramTypeRead(
        id=uuid.uuid4(),
        name="Donations",
        slug="donations",
        description=None,
        field_schema=FieldSchema(fields=fields, aggregations=["amount"]),
        source=source,
        display_fields=fields,
        created_at="2024-01-01T00:00:00Z",
    )


def _report(program_type: ProgramTypeRead, seq: int, marker: str) -> ReportRead:
    return ReportRead(
        program_type_id=program_type.id,
        program_name=marker,
        source=program_type.source,
        columns=[],
        rows=[],
        aggregations=[],
        totals={},
        entry_count=0,
        can_create=True,
        can_delete=True,
        empty_message="",
        request_seq=seq,
    )


def _form(entry_id=None, entry_date=None, source=ReportSource.ENTRY) -> EntryForm:
    return EntryForm(
        mode="edit" if entry_id else "create",
        source=source,
        title="",
        submit_label="",
        entry_id=entry_id,
        date=entry_date,
        show_date=True,
        show_contact=False,
        show_entity=False,
        show_notes=True,
        data={},
        fields=[],
    )


class FakeReportsClient:
    """Records calls; fetch_report blocks until released per request_seq."""

    def __init__(self, program_type: ProgramTypeRead):
        self.program_type = program_type
        self.calls: list[tuple] = []
        self.gates: dict[int, asyncio.Event] = {}
        self.fail_fetch = False
        self.fail_write = False
        self.form = _form(entry_date=date(2024, 1, 1))

    async def get_program_type(self, program_type_id):
        return self.program_type

    async def fetch_report(self, program_type_id, date_from=None, date_to=None, request_seq=None):
        self.calls.append(("fetch", date_from, date_to, request_seq))
        gate = self.gates.get(request_seq)
        if gate is not None:
            await gate.wait()
        if self.fail_fetch:
            raise httpx.ConnectError("unreachable")
        return _report(self.program_type, request_seq, f"{date_from}")

    async def get_form(self, program_type_id, entry_id=None):
        self.calls.append(("form", entry_id))
        return self.form

    async def create_entry(self, program_type_id, payload):
        self.calls.append(("create", payload))
        if self.fail_write:
            raise httpx.ConnectError("connection refused")
        return {}

    async def update_entry(self, program_type_id, entry_id, payload):
        self.calls.append(("update", entry_id, payload))
        return {}

    async def delete_entry(self, program_type_id, entry_id):
        self.calls.append(("delete", entry_id))

    async def set_booking_report_data(self, program_type_id, booking_id, data):
        self.calls.append(("report-data", booking_id, data))
        return {}


def test_sequencer_only_latest_is_current():
    sequencer = RequestSequencer()
    first = sequencer.issue()
    second = sequencer.issue()
    assert not sequencer.is_current(first)
    assert sequencer.is_current(second)


@pytest.mark.asyncio
async def test_stale_response_is_discarded():
    program_type = _program_type()
    fake = FakeReportsClient(program_type)
    view = ReportView(fake)
    await view.select_program_type(program_type.id)  # seq 1, returns immediately

    fake.gates[2] = asyncio.Event()
    fake.gates[3] = asyncio.Event()
    older = asyncio.create_task(view.set_date_range(date(2024, 1, 1), None))
    await asyncio.sleep(0)
    newer = asyncio.create_task(view.set_date_range(date(2024, 6, 1), None))
    await asyncio.sleep(0)

    # Newer response lands first, older one arrives late
    fake.gates[3].set()
    assert await newer is True
    fake.gates[2].set()
    assert await older is False

    assert view.report.request_seq == 3
    assert view.report.program_name == "2024-06-01"
    assert view.loading is False


@pytest.mark.asyncio
async def test_fetch_failure_clears_rows():
    program_type = _program_type()
    fake = FakeReportsClient(program_type)
    view = ReportView(fake)
    await view.select_program_type(program_type.id)
    assert view.report is not None

    fake.fail_fetch = True
    assert await view.refresh() is False
    assert view.report is None
    assert view.rows == []


@pytest.mark.asyncio
async def test_save_without_date_sends_nothing():
    program_type = _program_type()
    fake = FakeReportsClient(program_type)
    fake.form = _form(entry_date=None)
    view = ReportView(fake)
    await view.select_program_type(program_type.id)
    await view.open_add_form()
    fake.calls.clear()

    with pytest.raises(EntryValidationError, match="Date is required"):
        await view.save()

    assert fake.calls == []
    assert view.draft is not None


@pytest.mark.asyncio
async def test_save_create_then_reload():
    program_type = _program_type()
    fake = FakeReportsClient(program_type)
    view = ReportView(fake)
    await view.select_program_type(program_type.id)
    await view.open_add_form()
    view.set_field_value("amount", "25.5")

    await view.save()

    kinds = [c[0] for c in fake.calls]
    assert kinds[-2:] == ["create", "fetch"]
    payload = fake.calls[-2][1]
    assert payload["date"] == "2024-01-01"
    assert payload["data"] == {"amount": 25.5}
    assert view.draft is None


@pytest.mark.asyncio
async def test_save_failure_keeps_form_open():
    program_type = _program_type()
    fake = FakeReportsClient(program_type)
    fake.fail_write = True
    view = ReportView(fake)
    await view.select_program_type(program_type.id)
    await view.open_add_form()

    with pytest.raises(ReportWriteError, match="Failed to add entry"):
        await view.save()
    assert view.draft is not None


@pytest.mark.asyncio
async def test_booking_save_writes_report_data_only():
    program_type = _program_type(ReportSource.BOOKING)
    fake = FakeReportsClient(program_type)
    booking_id = uuid.uuid4()
    fake.form = _form(entry_id=booking_id, source=ReportSource.BOOKING)
    view = ReportView(fake)
    await view.select_program_type(program_type.id)
    await view.open_edit_form(booking_id)
    view.set_field_value("amount", "10")

    await view.save()

    writes = [c for c in fake.calls if c[0] in ("create", "update", "report-data")]
    assert writes == [("report-data", booking_id, {"amount": 10.0})]


@pytest.mark.asyncio
async def test_view_against_live_api(client, donations):
    view = ReportView(ReportsClient(client))
    assert await view.select_program_type(donations.id) is True
    assert view.rows == []

    await view.open_add_form()
    view.set_field_value("amount", "40")
    await view.save()

    assert view.report.entry_count == 1
    assert view.report.totals["amount"] == 40

    await view.delete(view.rows[0].id)
    assert view.rows == []
