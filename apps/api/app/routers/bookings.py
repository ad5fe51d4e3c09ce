"""Bookings router - read-only view of bookings synced from Cal.com."""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.schemas.booking import BookingRead
from app.services import booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=list[BookingRead])
def list_bookings(
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    type: Optional[str] = Query(None, description="Booking type filter ('all' for none)"),
    contact_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
):
    bookings = booking_service.list_bookings(
        db,
        date_from=date_from,
        date_to=date_to,
        booking_type=type,
        contact_id=contact_id,
    )
    return [booking_service.to_booking_read(b) for b in bookings]


@router.get("/types", response_model=list[str])
def list_booking_types(db: Session = Depends(get_db)):
    return booking_service.list_booking_types(db)
