"""Enum definitions for application constants."""

from app.db.enums.bookings import BookingType, ContactType
from app.db.enums.defaults import (
    DEFAULT_DOCUMENT_TYPE,
    DEFAULT_ENTITY_TYPE,
    DEFAULT_MEMBERSHIP_STATUS,
    DEFAULT_SYNCED_BOOKING_TYPE,
    DEFAULT_SYNCED_CONTACT_TYPE,
)
from app.db.enums.documents import DocumentType
from app.db.enums.entities import ENTITY_TYPE_LABELS, EntityType
from app.db.enums.memberships import MembershipStatus
from app.db.enums.programs import FieldType, ReportSource

__all__ = [
    "BookingType",
    "ContactType",
    "DEFAULT_DOCUMENT_TYPE",
    "DEFAULT_ENTITY_TYPE",
    "DEFAULT_MEMBERSHIP_STATUS",
    "DEFAULT_SYNCED_BOOKING_TYPE",
    "DEFAULT_SYNCED_CONTACT_TYPE",
    "DocumentType",
    "ENTITY_TYPE_LABELS",
    "EntityType",
    "FieldType",
    "MembershipStatus",
    "ReportSource",
]
