"""Contact service: search, create and light edits."""

from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.db.models import Contact
from app.utils.normalization import escape_like_string, normalize_search_text


def list_contacts(
    db: Session,
    *,
    q: str | None = None,
    contact_type: str | None = None,
) -> list[Contact]:
    """List contacts by name (unnamed last), optionally filtered.

    q matches name, email or organization case-insensitively.
    """
    query = db.query(Contact)
    search = normalize_search_text(q)
    if search:
        pattern = f"%{escape_like_string(search)}%"
        query = query.filter(
            or_(
                func.lower(Contact.name).like(pattern, escape="\\"),
                func.lower(Contact.email).like(pattern, escape="\\"),
                func.lower(Contact.organization).like(pattern, escape="\\"),
            )
        )
    contacts = query.order_by(Contact.name.is_(None), Contact.name).all()
    if contact_type and contact_type != "all":
        # contact_types is a JSON list; filtered in memory to stay portable
        contacts = [c for c in contacts if contact_type in (c.contact_types or [])]
    return contacts


def get_contact(db: Session, contact_id: UUID) -> Contact | None:
    return db.query(Contact).filter(Contact.id == contact_id).first()


def get_contact_by_email(db: Session, email: str) -> Contact | None:
    return (
        db.query(Contact)
        .filter(func.lower(Contact.email) == email.strip().lower())
        .first()
    )


def list_contact_types(db: Session) -> list[str]:
    """Distinct contact types in use, sorted."""
    types: set[str] = set()
    for (contact_types,) in db.query(Contact.contact_types).all():
        types.update(t for t in (contact_types or []) if t)
    return sorted(types)


def create_contact(
    db: Session,
    *,
    name: str,
    email: str | None = None,
    phone: str | None = None,
    organization: str | None = None,
    contact_types: list[str] | None = None,
    referred_by: str | None = None,
    marketing_consent: bool | None = None,
    notes: str = "",
    commit: bool = True,
) -> Contact:
    contact = Contact(
        name=name,
        email=email or None,
        phone=phone or None,
        organization=organization or None,
        contact_types=contact_types or None,
        referred_by=referred_by or None,
        marketing_consent=marketing_consent,
        tags=[],
        notes=notes,
    )
    db.add(contact)
    if commit:
        db.commit()
        db.refresh(contact)
    else:
        db.flush()
    return contact


def update_contact(
    db: Session,
    contact: Contact,
    *,
    notes: str | None = None,
    tags: list[str] | None = None,
) -> Contact:
    if notes is not None:
        contact.notes = notes
    if tags is not None:
        contact.tags = tags
    db.commit()
    db.refresh(contact)
    return contact
