"""Membership service."""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError
from app.db.models import Contact, Membership
from app.schemas.membership import MembershipRead


def list_memberships(
    db: Session,
    *,
    q: str | None = None,
    status: str | None = None,
) -> list[Membership]:
    """Memberships by start date (newest first); q matches contact name or code."""
    query = db.query(Membership).options(joinedload(Membership.contact))
    if status and status != "all":
        query = query.filter(Membership.status == status)
    memberships = query.order_by(Membership.start_date.desc()).all()
    if q:
        needle = q.strip().lower()
        memberships = [
            m
            for m in memberships
            if needle in ((m.contact.name if m.contact else None) or "").lower()
            or needle in (m.code or "").lower()
        ]
    return memberships


def get_membership(db: Session, membership_id: UUID) -> Membership | None:
    return (
        db.query(Membership)
        .options(joinedload(Membership.contact))
        .filter(Membership.id == membership_id)
        .first()
    )


def create_membership(
    db: Session,
    *,
    contact_id: UUID,
    membership_type: str,
    start_date: date | None,
    end_date: date | None,
    code: str | None,
    status: str,
) -> Membership:
    if not db.query(Contact.id).filter(Contact.id == contact_id).first():
        raise NotFoundError("Contact not found")
    membership = Membership(
        contact_id=contact_id,
        membership_type=membership_type,
        start_date=start_date,
        end_date=end_date,
        code=code,
        status=status,
    )
    db.add(membership)
    db.commit()
    db.refresh(membership)
    return membership


def update_membership(
    db: Session,
    membership: Membership,
    *,
    membership_type: str,
    start_date: date | None,
    end_date: date | None,
    code: str | None,
    status: str,
) -> Membership:
    membership.membership_type = membership_type
    membership.start_date = start_date
    membership.end_date = end_date
    membership.code = code
    membership.status = status
    db.commit()
    db.refresh(membership)
    return membership


def delete_membership(db: Session, membership: Membership) -> None:
    db.delete(membership)
    db.commit()


def to_membership_read(membership: Membership) -> MembershipRead:
    return MembershipRead(
        id=membership.id,
        contact_id=membership.contact_id,
        contact_name=membership.contact.name if membership.contact else None,
        membership_type=membership.membership_type,
        start_date=membership.start_date,
        end_date=membership.end_date,
        code=membership.code,
        status=membership.status,
    )
