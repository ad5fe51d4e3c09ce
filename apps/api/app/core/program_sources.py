"""Static wiring between program types and synced Cal.com bookings.

A program type whose slug appears in BOOKING_SOURCE_MAP is "booking-sourced":
its report rows are projections over bookings with the mapped program_name
instead of manually entered ProgramEntry rows.
"""

from __future__ import annotations

from typing import Any, Callable

from app.db.enums import ReportSource
from app.db.models import Booking


# program_types.slug -> bookings.program_name
BOOKING_SOURCE_MAP: dict[str, str] = {
    "birthday-party": "birthday-party",
    "field-trip": "wildrock-field-trip",
}

# Schema field key -> value pulled from the booking when no annotation value exists
BOOKING_FIELD_DEFAULTS: dict[str, Callable[[Booking], Any]] = {
    "children_count": lambda booking: booking.kids_count or 0,
}


def get_booking_program_name(slug: str) -> str | None:
    """Return the booking category a program slug shadows, if any."""
    return BOOKING_SOURCE_MAP.get(slug)


def get_report_source(slug: str) -> ReportSource:
    if slug in BOOKING_SOURCE_MAP:
        return ReportSource.BOOKING
    return ReportSource.ENTRY
