"""Centralized defaults for enums."""

from app.db.enums.bookings import BookingType, ContactType
from app.db.enums.documents import DocumentType
from app.db.enums.entities import EntityType
from app.db.enums.memberships import MembershipStatus


DEFAULT_MEMBERSHIP_STATUS: MembershipStatus = MembershipStatus.ACTIVE
DEFAULT_ENTITY_TYPE: EntityType = EntityType.HOUSEHOLD
DEFAULT_SYNCED_BOOKING_TYPE: BookingType = BookingType.CAL_SYNC
DEFAULT_SYNCED_CONTACT_TYPE: ContactType = ContactType.PARENT
DEFAULT_DOCUMENT_TYPE: DocumentType = DocumentType.WAIVER
