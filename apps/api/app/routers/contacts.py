"""Contacts router - directory of parents, teachers and members."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_csrf_header
from app.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from app.services import contact_service

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=list[ContactRead])
def list_contacts(
    q: Optional[str] = Query(None, max_length=100, description="Search name, email or organization"),
    type: Optional[str] = Query(None, description="Contact type filter ('all' for none)"),
    db: Session = Depends(get_db),
):
    return contact_service.list_contacts(db, q=q, contact_type=type)


@router.get("/types", response_model=list[str])
def list_contact_types(db: Session = Depends(get_db)):
    """Distinct contact types, for the type filter."""
    return contact_service.list_contact_types(db)


@router.post(
    "",
    response_model=ContactRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_contact(data: ContactCreate, db: Session = Depends(get_db)):
    return contact_service.create_contact(
        db,
        name=data.name,
        email=data.email,
        phone=data.phone,
        organization=data.organization,
        contact_types=data.contact_types,
        referred_by=data.referred_by,
        marketing_consent=data.marketing_consent,
    )


@router.get("/{contact_id:uuid}", response_model=ContactRead)
def get_contact(contact_id: UUID, db: Session = Depends(get_db)):
    contact = contact_service.get_contact(db, contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact


@router.patch(
    "/{contact_id:uuid}",
    response_model=ContactRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_contact(contact_id: UUID, data: ContactUpdate, db: Session = Depends(get_db)):
    """Update notes and tags."""
    contact = contact_service.get_contact(db, contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return contact_service.update_contact(db, contact, notes=data.notes, tags=data.tags)
