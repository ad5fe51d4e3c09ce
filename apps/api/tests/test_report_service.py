"""Tests for schema-driven report building (projection, totals, columns, forms)."""

import uuid
from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import InvalidSchemaError, NotFoundError, ReadOnlySourceError
from app.db.enums import ReportSource
from app.db.models import ProgramEntry
from app.services import report_service
from app.services.field_rendering import PLACEHOLDER
from app.services.program_type_service import parse_field_schema


def test_booking_report_sums_kids_count(db, field_trip, make_booking):
    for kids in (5, 3, 0):
        make_booking("wildrock-field-trip", kids_count=kids)
    make_booking("birthday-party", kids_count=40)  # other category

    report = report_service.get_report(db, field_trip)

    assert report.source is ReportSource.BOOKING
    assert report.entry_count == 3
    assert report.totals["children_count"] == 8
    assert report.totals["adults_count"] == 0
    children = next(a for a in report.aggregations if a.key == "children_count")
    assert children.display == "8"


def test_booking_annotation_overrides_booking_column(db, field_trip, make_booking):
    booking = make_booking(
        "wildrock-field-trip", kids_count=5, report_data={"children_count": 7}
    )

    report = report_service.get_report(db, field_trip)

    assert report.totals["children_count"] == 7
    row = report.rows[0]
    assert row.id == booking.id
    assert row.data["children_count"] == 7
    assert row.cells["children_count"] == "7"


def test_booking_without_extractor_or_annotation_leaves_field_unset(db, field_trip, make_booking):
    make_booking("wildrock-field-trip", kids_count=None)

    row = report_service.get_report(db, field_trip).rows[0]

    assert row.data == {"children_count": 0}
    assert row.cells["adults_count"] == PLACEHOLDER


def test_booking_report_hides_boolean_fields(db, field_trip, make_booking):
    make_booking("wildrock-field-trip", kids_count=2, report_data={"waivers_collected": True})

    report = report_service.get_report(db, field_trip)

    column_keys = [c.key for c in report.columns]
    assert "waivers_collected" not in column_keys
    assert "waivers_collected" not in report.rows[0].cells
    assert column_keys == ["date", "contact", "children_count", "adults_count"]
    assert report.can_create is False
    assert report.can_delete is False
    assert report.empty_message.startswith("No bookings found")


def test_entry_report_currency_totals(db, donations):
    for amount in (100.5, 49.5):
        db.add(ProgramEntry(program_type_id=donations.id, date=date(2024, 3, 1), data={"amount": amount}))
    db.add(ProgramEntry(program_type_id=donations.id, date=date(2024, 3, 2), data={"method": "cash"}))
    db.commit()

    report = report_service.get_report(db, donations)

    assert report.source is ReportSource.ENTRY
    assert report.totals == {"amount": 150.0}
    assert report.aggregations[0].display == "$150.00"
    assert [c.key for c in report.columns] == [
        "date", "contact", "entity", "amount", "method", "recurring", "notes",
    ]
    assert report.can_create is True


def test_entry_report_date_range_is_inclusive(db, donations):
    for day in (1, 10, 20):
        db.add(ProgramEntry(program_type_id=donations.id, date=date(2024, 3, day), data={"amount": day}))
    db.commit()

    report = report_service.get_report(db, donations, date(2024, 3, 10), date(2024, 3, 20))

    assert [r.date for r in report.rows] == [date(2024, 3, 20), date(2024, 3, 10)]
    assert report.totals["amount"] == 30


def test_entry_rows_render_placeholders(db, donations):
    db.add(ProgramEntry(program_type_id=donations.id, date=date(2024, 3, 1), data={}))
    db.commit()

    cells = report_service.get_report(db, donations).rows[0].cells

    assert cells["contact"] == PLACEHOLDER
    assert cells["entity"] == PLACEHOLDER
    assert cells["amount"] == PLACEHOLDER
    assert cells["notes"] == PLACEHOLDER
    assert cells["date"] == "2024-03-01"


def test_aggregation_of_undeclared_field_is_totalled_but_not_shown(db, make_program_type):
    program_type = make_program_type(
        "drop-in-play",
        {"fields": [{"key": "visitors", "label": "Visitors", "type": "number"}], "aggregations": ["visitors", "legacy"]},
    )
    db.add(ProgramEntry(program_type_id=program_type.id, date=date(2024, 1, 1), data={"visitors": 4, "legacy": "2"}))
    db.commit()

    report = report_service.get_report(db, program_type)

    assert report.totals == {"visitors": 4, "legacy": 2}
    assert [a.key for a in report.aggregations] == ["visitors"]


def test_fetch_failure_yields_empty_rows(db, donations, monkeypatch):
    def boom(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(report_service, "fetch_report_rows", boom)

    report = report_service.get_report(db, donations)

    assert report.rows == []
    assert report.totals == {"amount": 0}


def test_invalid_stored_schema_raises(db, make_program_type):
    program_type = make_program_type(
        "broken", {"fields": [{"key": "x", "label": "X", "type": "date"}]}
    )
    with pytest.raises(InvalidSchemaError):
        parse_field_schema(program_type)


def test_non_numeric_aggregations_are_totalled_but_not_shown(db, make_program_type):
    program_type = make_program_type(
        "open-house",
        {
            "fields": [
                {"key": "visitors", "label": "Visitors", "type": "number"},
                {"key": "note", "label": "Note", "type": "text"},
                {"key": "catered", "label": "Catered", "type": "boolean"},
            ],
            "aggregations": ["visitors", "note", "catered"],
        },
    )
    db.add_all(
        [
            ProgramEntry(
                program_type_id=program_type.id,
                date=date(2024, 4, 1),
                data={"visitors": 12, "note": "rainy", "catered": True},
            ),
            ProgramEntry(
                program_type_id=program_type.id,
                date=date(2024, 4, 2),
                data={"visitors": "8", "note": "sunny", "catered": False},
            ),
        ]
    )
    db.commit()

    report = report_service.get_report(db, program_type)

    assert report.entry_count == 2
    assert [a.key for a in report.aggregations] == ["visitors"]
    assert report.totals == {"visitors": 20, "note": 0, "catered": 1}
    assert report.rows[0].cells["catered"] == "No"


def test_booking_report_with_boolean_aggregation_still_renders(db, make_program_type, make_booking):
    program_type = make_program_type(
        "field-trip",
        {
            "fields": [
                {"key": "children_count", "label": "Children", "type": "number"},
                {"key": "waivers", "label": "Waivers", "type": "boolean"},
            ],
            "aggregations": ["children_count", "waivers"],
        },
    )
    make_booking("wildrock-field-trip", kids_count=6)

    report = report_service.get_report(db, program_type)

    assert report.entry_count == 1
    assert [a.key for a in report.aggregations] == ["children_count"]
    assert "waivers" not in report.rows[0].cells


# =============================================================================
# Entry Form
# =============================================================================


def test_create_form_uses_today_and_defaults(db, donations):
    form = report_service.build_entry_form(db, donations)

    assert form.mode == "create"
    assert form.title == "Add Donations Entry"
    assert form.submit_label == "Add Entry"
    assert form.date == date.today()
    assert form.data == {"method": "check"}
    assert [f.key for f in form.fields] == ["amount", "method", "recurring"]
    assert form.show_contact and form.show_entity


def test_edit_form_for_entry(db, donations, make_contact):
    contact = make_contact("Maya Thompson")
    entry = ProgramEntry(
        program_type_id=donations.id,
        date=date(2024, 2, 2),
        contact_id=contact.id,
        data={"amount": 20, "recurring": True},
        notes="monthly",
    )
    db.add(entry)
    db.commit()

    form = report_service.build_entry_form(db, donations, entry.id)

    assert form.mode == "edit"
    assert form.title == "Edit Donations Entry"
    assert form.submit_label == "Save Changes"
    assert form.contact_name == "Maya Thompson"
    assert form.notes == "monthly"
    recurring = next(f for f in form.fields if f.key == "recurring")
    assert recurring.checked is True


def test_booking_form_edits_report_details_only(db, field_trip, make_booking):
    booking = make_booking("wildrock-field-trip", kids_count=12)

    form = report_service.build_entry_form(db, field_trip, booking.id)

    assert form.title == "Update Field Trip Details"
    assert form.submit_label == "Save Details"
    assert not (form.show_date or form.show_contact or form.show_entity or form.show_notes)
    assert [f.key for f in form.fields] == ["children_count", "adults_count"]
    assert form.fields[0].value == "12"


def test_booking_add_form_is_rejected(db, field_trip):
    with pytest.raises(ReadOnlySourceError):
        report_service.build_entry_form(db, field_trip)


def test_edit_form_unknown_entry(db, donations):
    with pytest.raises(NotFoundError):
        report_service.build_entry_form(db, donations, uuid.uuid4())
