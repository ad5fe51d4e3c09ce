"""Type dispatch for program schema fields.

Every function here switches over FieldType exhaustively, so adding a type
to the enum is flagged by the type checker (assert_never) in each place that
has to learn about it.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, assert_never

from app.core.config import settings
from app.db.enums import FieldType
from app.schemas.program import FieldDefinition
from app.schemas.report import FieldWidget

PLACEHOLDER = "—"


# =============================================================================
# Numeric helpers
# =============================================================================


# Plain decimal literals only; "inf", "nan", "1_000" and hex are not numbers
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _parse_number(value: Any) -> float | None:
    """Strict numeric parse: None when the value is not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.match(text):
            return None
        number = float(text)
    else:
        return None
    return number if math.isfinite(number) else None


def to_number(value: Any) -> float:
    """Lenient numeric coercion used for sums.

    None, empty strings, non-numeric values and non-finite numbers count
    as 0; booleans count as 1/0; numeric strings are parsed.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    number = _parse_number(value)
    return 0.0 if number is None else number


def format_number(value: float) -> str:
    """Group thousands and keep up to three decimals (1234.5 -> "1,234.5")."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_currency(value: float) -> str:
    return f"{settings.CURRENCY_SYMBOL}{value:.2f}"


def to_display_string(value: Any) -> str:
    """Literal string form of a stored JSON value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(to_display_string(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


# =============================================================================
# Rendering
# =============================================================================


def render_cell(field: FieldDefinition, value: Any) -> str:
    """Render a stored value for a report table cell."""
    if value is None:
        return PLACEHOLDER

    field_type = field.type
    if field_type is FieldType.BOOLEAN:
        return "Yes" if value is True else "No"
    elif field_type is FieldType.CURRENCY:
        number = _parse_number(value)
        if number is None:
            return to_display_string(value)
        return format_currency(number)
    elif field_type is FieldType.NUMBER or field_type is FieldType.TEXT:
        return to_display_string(value)
    else:
        assert_never(field_type)


def render_total(field: FieldDefinition, total: float) -> str:
    """Render an aggregate total for the summary bar."""
    if field.type is FieldType.CURRENCY:
        return format_currency(total)
    return format_number(total)


def render_input(field: FieldDefinition, value: Any) -> FieldWidget:
    """Describe the form input for a field holding the given value."""
    field_type = field.type
    if field_type is FieldType.NUMBER:
        return FieldWidget(
            key=field.key,
            label=field.label,
            field_type=field_type,
            widget="number",
            value="" if value is None else to_display_string(value),
        )
    elif field_type is FieldType.CURRENCY:
        return FieldWidget(
            key=field.key,
            label=field.label,
            field_type=field_type,
            widget="number",
            value="" if value is None else to_display_string(value),
            step="0.01",
        )
    elif field_type is FieldType.BOOLEAN:
        return FieldWidget(
            key=field.key,
            label=field.label,
            field_type=field_type,
            widget="checkbox",
            checked=value is True,
        )
    elif field_type is FieldType.TEXT:
        return FieldWidget(
            key=field.key,
            label=field.label,
            field_type=field_type,
            widget="text",
            value=value if isinstance(value, str) else "",
        )
    else:
        assert_never(field_type)


# =============================================================================
# Input coercion
# =============================================================================


def coerce_input(field: FieldDefinition, raw: Any) -> Any:
    """
    Convert a submitted form value to the stored value for a field.

    Raises:
        ValueError: a number/currency field received a non-numeric value
    """
    field_type = field.type
    if field_type is FieldType.NUMBER or field_type is FieldType.CURRENCY:
        if raw is None or raw == "":
            return None
        number = _parse_number(raw)
        if number is None:
            raise ValueError(f"Field '{field.key}' must be a number")
        if isinstance(raw, int):
            return raw
        return int(number) if number.is_integer() and field_type is FieldType.NUMBER else number
    elif field_type is FieldType.BOOLEAN:
        return raw is True
    elif field_type is FieldType.TEXT:
        return raw
    else:
        assert_never(field_type)


def coerce_entry_data(
    fields: list[FieldDefinition],
    data: dict[str, Any],
) -> dict[str, Any]:
    """Coerce every submitted value whose key is in the schema; keep the rest as given."""
    by_key = {field.key: field for field in fields}
    coerced: dict[str, Any] = {}
    for key, raw in data.items():
        field = by_key.get(key)
        coerced[key] = coerce_input(field, raw) if field is not None else raw
    return coerced
