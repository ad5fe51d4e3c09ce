"""Pydantic schemas for synced bookings."""

import datetime as dt
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class BookingRead(BaseModel):
    id: UUID
    contact_id: UUID | None
    contact_name: str | None
    booking_type: str | None
    date: dt.date | None
    timeslot: str | None
    program_name: str | None
    kids_count: int | None
    notes: str | None
    form_responses: dict[str, Any] | None
