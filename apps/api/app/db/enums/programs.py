"""Program report enums."""

from enum import Enum


class FieldType(str, Enum):
    """Value type of a field in a program type's field schema."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    CURRENCY = "currency"


class ReportSource(str, Enum):
    """Where the rows of a program report come from."""

    ENTRY = "entry"  # Manually entered ProgramEntry rows
    BOOKING = "booking"  # Projections over synced bookings
