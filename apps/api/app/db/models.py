"""SQLAlchemy ORM models for contacts, relationships, bookings and program reports."""

import datetime as dt
import uuid

from sqlalchemy import (
    Boolean, Date, ForeignKey, Index, Integer, String, Text, UniqueConstraint, Uuid, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, JSONType
from app.db.enums import DEFAULT_DOCUMENT_TYPE, DEFAULT_MEMBERSHIP_STATUS


# =============================================================================
# Contacts & Relationships
# =============================================================================

class Contact(Base):
    """A person the organization works with (parent, teacher, member...)."""
    __tablename__ = "contacts"
    __table_args__ = (
        Index("idx_contacts_email", "email"),
        Index("idx_contacts_name", "name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_types: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    tags: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    referred_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    marketing_consent: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)

    entity_roles: Mapped[list["ContactEntityRole"]] = relationship(
        back_populates="contact",
        cascade="all, delete-orphan",
    )


class Entity(Base):
    """
    A household, school or organization that groups contacts.

    Members are linked through ContactEntityRole with a free-form role name.
    """
    __tablename__ = "entities"
    __table_args__ = (
        Index("idx_entities_type", "entity_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(30), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)

    members: Mapped[list["ContactEntityRole"]] = relationship(
        back_populates="entity",
        cascade="all, delete-orphan",
    )


class RelationshipType(Base):
    """Role names offered when adding a member to an entity of a given type."""
    __tablename__ = "relationship_types"
    __table_args__ = (
        UniqueConstraint("entity_type", "name", name="uq_relationship_type_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    entity_type: Mapped[str] = mapped_column(String(30), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ContactEntityRole(Base):
    __tablename__ = "contact_entity_roles"
    __table_args__ = (
        UniqueConstraint("contact_id", "entity_id", "role", name="uq_contact_entity_role"),
        Index("idx_contact_entity_roles_entity", "entity_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    entity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("entities.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)

    contact: Mapped["Contact"] = relationship(back_populates="entity_roles")
    entity: Mapped["Entity"] = relationship(back_populates="members")


# =============================================================================
# Memberships
# =============================================================================

class Membership(Base):
    __tablename__ = "memberships"
    __table_args__ = (
        Index("idx_memberships_contact", "contact_id"),
        Index("idx_memberships_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True
    )
    membership_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    code: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(30), default=DEFAULT_MEMBERSHIP_STATUS.value, nullable=False
    )

    contact: Mapped["Contact | None"] = relationship()


# =============================================================================
# Bookings (synced from Cal.com)
# =============================================================================

class Booking(Base):
    """
    An event booking synced from the external scheduling service.

    Core columns are written only by the webhook ingest. Report data
    entered against a booking lives in BookingReportAnnotation.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_program_date", "program_name", "date"),
        Index("idx_bookings_contact", "contact_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True
    )
    booking_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    timeslot: Mapped[str | None] = mapped_column(String(20), nullable=True)
    program_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    kids_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    form_responses: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)

    contact: Mapped["Contact | None"] = relationship()
    annotation: Mapped["BookingReportAnnotation | None"] = relationship(
        back_populates="booking",
        uselist=False,
        cascade="all, delete-orphan",
    )


class BookingReportAnnotation(Base):
    """
    Report data attached to a booking, one row per booking.

    Values here override the booking's own columns field by field when the
    booking is projected into a program report.
    """
    __tablename__ = "booking_report_annotations"

    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("bookings.id", ondelete="CASCADE"), primary_key=True
    )
    data: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    booking: Mapped["Booking"] = relationship(back_populates="annotation")


# =============================================================================
# Documents (file metadata; the files live in external storage)
# =============================================================================

class Document(Base):
    """A signed waiver, medical form or other file kept for a contact."""
    __tablename__ = "documents"
    __table_args__ = (
        Index("idx_documents_contact_uploaded", "contact_id", "uploaded_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False
    )
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Storage key, e.g. "<contact_id>/waiver-1700000000000.pdf"
    url: Mapped[str] = mapped_column(String(512), nullable=False)
    type: Mapped[str] = mapped_column(
        String(30), default=DEFAULT_DOCUMENT_TYPE.value, nullable=False
    )
    uploaded_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)


# =============================================================================
# Program Reports
# =============================================================================

class ProgramType(Base):
    """
    A trackable program (field trip, birthday party, donations...).

    field_schema drives the entry form, the report table and its totals:
    {"fields": [...], "aggregations": [...], "show_contact": bool, "show_entity": bool}
    """
    __tablename__ = "program_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    field_schema: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)

    entries: Mapped[list["ProgramEntry"]] = relationship(
        back_populates="program_type",
        cascade="all, delete-orphan",
    )


class ProgramEntry(Base):
    """A manually entered report row for an entry-sourced program type."""
    __tablename__ = "program_entries"
    __table_args__ = (
        Index("idx_program_entries_type_date", "program_type_id", "date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    program_type_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("program_types.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    contact_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("contacts.id", ondelete="SET NULL"), nullable=True
    )
    entity_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("entities.id", ondelete="SET NULL"), nullable=True
    )
    data: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(server_default=func.now(), nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now(), nullable=False
    )

    program_type: Mapped["ProgramType"] = relationship(back_populates="entries")
    contact: Mapped["Contact | None"] = relationship()
    entity: Mapped["Entity | None"] = relationship()
