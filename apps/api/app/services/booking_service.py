"""Booking queries and Cal.com booking ingest."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.db.enums import DEFAULT_SYNCED_BOOKING_TYPE, DEFAULT_SYNCED_CONTACT_TYPE
from app.db.models import Booking
from app.schemas.booking import BookingRead
from app.services import contact_service

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
KIDS_COUNT_KEYS = ("kids_count", "kids")


class BookingPayloadError(ValueError):
    """Webhook payload is missing data needed to create a booking."""


# =============================================================================
# Queries
# =============================================================================


def list_bookings(
    db: Session,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
    booking_type: str | None = None,
    contact_id: UUID | None = None,
) -> list[Booking]:
    query = db.query(Booking).options(joinedload(Booking.contact))
    if date_from:
        query = query.filter(Booking.date >= date_from)
    if date_to:
        query = query.filter(Booking.date <= date_to)
    if booking_type and booking_type != "all":
        query = query.filter(Booking.booking_type == booking_type)
    if contact_id:
        query = query.filter(Booking.contact_id == contact_id)
    return query.order_by(Booking.date.desc(), Booking.created_at.desc()).all()


def list_booking_types(db: Session) -> list[str]:
    rows = db.query(Booking.booking_type).distinct().all()
    return sorted(value for (value,) in rows if value)


def to_booking_read(booking: Booking) -> BookingRead:
    return BookingRead(
        id=booking.id,
        contact_id=booking.contact_id,
        contact_name=booking.contact.name if booking.contact else None,
        booking_type=booking.booking_type,
        date=booking.date,
        timeslot=booking.timeslot,
        program_name=booking.program_name,
        kids_count=booking.kids_count,
        notes=booking.notes,
        form_responses=booking.form_responses,
    )


# =============================================================================
# Cal.com ingest
# =============================================================================


@dataclass
class ParsedCalBooking:
    attendee_name: str | None
    attendee_email: str
    event_type: str | None
    booking_date: date
    timeslot: str
    kids_count: int
    responses: dict[str, Any]


def _response_value(value: Any) -> Any:
    """Cal.com may wrap answers as {"value": ..., "label": ...}."""
    if isinstance(value, dict) and "value" in value:
        return value["value"]
    return value


def parse_kids_count(responses: dict[str, Any]) -> int:
    """First non-empty kids answer, parsed as a leading integer; anything else is 0."""
    raw: Any = None
    for key in KIDS_COUNT_KEYS:
        candidate = _response_value(responses.get(key))
        if candidate not in (None, "", 0):
            raw = candidate
            break
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return int(raw)
    match = _LEADING_INT_RE.match(str(raw))
    return int(match.group(1)) if match else 0


def _parse_start_time(value: Any) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise BookingPayloadError("No start time found")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise BookingPayloadError("Invalid start time") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_cal_payload(body: dict[str, Any]) -> ParsedCalBooking:
    """
    Extract booking fields from a Cal.com webhook body.

    Raises:
        BookingPayloadError: no booking data, attendee or start time
    """
    booking_data = body.get("payload") or body
    if not isinstance(booking_data, dict) or not booking_data:
        raise BookingPayloadError("No booking data found")

    attendees = booking_data.get("attendees") or []
    if not isinstance(attendees, list):
        raise BookingPayloadError("No attendee found")
    attendee = attendees[0] if attendees else None
    if not isinstance(attendee, dict) or not attendee.get("email"):
        raise BookingPayloadError("No attendee found")

    start = _parse_start_time(booking_data.get("startTime"))
    responses = booking_data.get("responses") or {}
    if not isinstance(responses, dict):
        responses = {}

    return ParsedCalBooking(
        attendee_name=attendee.get("name"),
        attendee_email=attendee["email"],
        event_type=booking_data.get("type"),
        booking_date=start.date(),
        timeslot=start.strftime("%I:%M %p"),
        kids_count=parse_kids_count(responses),
        responses=responses,
    )


def ingest_cal_booking(db: Session, body: dict[str, Any]) -> Booking:
    """
    Create a booking (and its contact if new) from a Cal.com webhook body.

    Raises:
        BookingPayloadError: payload cannot be turned into a booking
    """
    parsed = parse_cal_payload(body)

    contact = contact_service.get_contact_by_email(db, parsed.attendee_email)
    if contact is None:
        contact = contact_service.create_contact(
            db,
            name=parsed.attendee_name or parsed.attendee_email,
            email=parsed.attendee_email,
            contact_types=[DEFAULT_SYNCED_CONTACT_TYPE.value],
            notes="Added automatically via Cal.com",
            commit=False,
        )
        logger.info(f"Created contact {contact.id} from Cal.com booking")

    booking = Booking(
        contact_id=contact.id,
        date=parsed.booking_date,
        timeslot=parsed.timeslot,
        program_name=parsed.event_type,
        booking_type=DEFAULT_SYNCED_BOOKING_TYPE.value,
        kids_count=parsed.kids_count,
        notes=f"Cal.com Booking: {parsed.event_type}",
        form_responses=parsed.responses or None,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info(f"Ingested Cal.com booking {booking.id} program={parsed.event_type}")
    return booking
