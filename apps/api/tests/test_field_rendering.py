"""Tests for per-type cell rendering, totals and form input mapping."""

import pytest

from app.db.enums import FieldType
from app.schemas.program import FieldDefinition
from app.services.field_rendering import (
    PLACEHOLDER,
    coerce_entry_data,
    coerce_input,
    format_number,
    render_cell,
    render_input,
    render_total,
    to_number,
)


def _field(field_type: FieldType, key: str = "value") -> FieldDefinition:
    return FieldDefinition(key=key, label=key.title(), type=field_type)


TEXT = _field(FieldType.TEXT)
NUMBER = _field(FieldType.NUMBER)
BOOLEAN = _field(FieldType.BOOLEAN)
CURRENCY = _field(FieldType.CURRENCY)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, 0),
        ("", 0),
        ("abc", 0),
        (float("nan"), 0),
        (float("inf"), 0),
        ("inf", 0),
        ("1e999", 0),
        ("1_000", 0),
        ("0x10", 0),
        ("1e3", 1000),
        ("12.5", 12.5),
        (" 3 ", 3),
        (7, 7),
        (True, 1),
        (False, 0),
        ([1, 2], 0),
    ],
)
def test_to_number_counts_unusable_values_as_zero(value, expected):
    assert to_number(value) == expected


def test_render_cell_absent_value_is_placeholder_for_every_type():
    for field in (TEXT, NUMBER, BOOLEAN, CURRENCY):
        assert render_cell(field, None) == PLACEHOLDER


def test_render_cell_boolean():
    assert render_cell(BOOLEAN, True) == "Yes"
    assert render_cell(BOOLEAN, False) == "No"
    # Only a literal true renders as Yes
    assert render_cell(BOOLEAN, "true") == "No"
    assert render_cell(BOOLEAN, 1) == "No"


def test_render_cell_currency_uses_two_decimals():
    assert render_cell(CURRENCY, 100.5) == "$100.50"
    assert render_cell(CURRENCY, 0) == "$0.00"
    assert render_cell(CURRENCY, "49.5") == "$49.50"


def test_render_cell_currency_non_numeric_is_shown_literally():
    assert render_cell(CURRENCY, "pledged") == "pledged"


def test_render_cell_number_and_text_are_literal():
    assert render_cell(NUMBER, 5) == "5"
    assert render_cell(NUMBER, 2.0) == "2"
    assert render_cell(NUMBER, 2.25) == "2.25"
    assert render_cell(TEXT, "grade 3") == "grade 3"
    assert render_cell(TEXT, 0) == "0"


def test_render_total():
    assert render_total(CURRENCY, 150.0) == "$150.00"
    assert render_total(NUMBER, 8.0) == "8"
    assert render_total(NUMBER, 1234.5) == "1,234.5"
    assert format_number(1000000) == "1,000,000"


def test_render_input_widgets():
    number = render_input(NUMBER, 5)
    assert number.widget == "number"
    assert number.value == "5"
    assert number.step is None

    currency = render_input(CURRENCY, None)
    assert currency.widget == "number"
    assert currency.value == ""
    assert currency.step == "0.01"

    checkbox = render_input(BOOLEAN, True)
    assert checkbox.widget == "checkbox"
    assert checkbox.checked is True
    assert render_input(BOOLEAN, "yes").checked is False

    text = render_input(TEXT, "hello")
    assert text.widget == "text"
    assert text.value == "hello"
    assert render_input(TEXT, None).value == ""


def test_coerce_input_number_and_currency():
    assert coerce_input(NUMBER, "5") == 5
    assert coerce_input(NUMBER, "") is None
    assert coerce_input(NUMBER, None) is None
    assert coerce_input(CURRENCY, "100.50") == 100.5
    assert coerce_input(CURRENCY, 20) == 20


def test_coerce_input_rejects_non_numeric_number():
    with pytest.raises(ValueError, match="must be a number"):
        coerce_input(NUMBER, "lots")


@pytest.mark.parametrize("raw", ["1e999", "Infinity", "-inf", "NaN", "1_000", float("inf"), 10**400])
def test_coerce_input_rejects_non_finite_numbers(raw):
    with pytest.raises(ValueError, match="must be a number"):
        coerce_input(CURRENCY, raw)


def test_coerce_input_boolean_and_text():
    assert coerce_input(BOOLEAN, True) is True
    assert coerce_input(BOOLEAN, "on") is False
    assert coerce_input(TEXT, "as typed ") == "as typed "


def test_coerce_entry_data_keeps_unknown_keys():
    fields = [_field(FieldType.NUMBER, "kids")]
    assert coerce_entry_data(fields, {"kids": "4", "legacy": "x"}) == {"kids": 4, "legacy": "x"}
