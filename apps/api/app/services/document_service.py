"""Document records: metadata for files kept in external storage."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.models import Booking, Contact, Document

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf"}


def validate_document_name(name: str) -> None:
    """
    Raises:
        ValueError: extension is not allowed
    """
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext not in ALLOWED_EXTENSIONS:
        raise ValueError(f"File extension '.{ext}' not allowed")


def list_documents(db: Session, contact_id: UUID) -> list[Document]:
    """Documents for a contact, newest first."""
    return (
        db.query(Document)
        .filter(Document.contact_id == contact_id)
        .order_by(Document.uploaded_at.desc(), Document.name)
        .all()
    )


def create_document(
    db: Session,
    *,
    contact_id: UUID,
    name: str,
    url: str,
    doc_type: str,
    booking_id: UUID | None = None,
) -> Document:
    """
    Record a stored file against a contact (and optionally a booking).

    Raises:
        ValueError: file name has a disallowed extension
        NotFoundError: contact or booking does not exist
    """
    validate_document_name(name)
    if not db.query(Contact.id).filter(Contact.id == contact_id).first():
        raise NotFoundError("Contact not found")
    if booking_id and not db.query(Booking.id).filter(Booking.id == booking_id).first():
        raise NotFoundError("Booking not found")

    document = Document(
        contact_id=contact_id,
        booking_id=booking_id,
        name=name,
        url=url,
        type=doc_type,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    logger.info(f"Recorded {doc_type} document {document.id}")
    return document
