"""Booking enums."""

from enum import Enum


class BookingType(str, Enum):
    """How a booking row was created."""

    CAL_SYNC = "cal_sync"
    MANUAL = "manual"


class ContactType(str, Enum):
    """Well-known contact types (contacts may carry free-form types too)."""

    PARENT = "parent"
    TEACHER = "teacher"
    MEMBER = "member"
