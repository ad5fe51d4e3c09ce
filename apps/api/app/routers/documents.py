"""Documents router - waiver and form records per contact."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_csrf_header
from app.core.errors import NotFoundError
from app.schemas.document import DocumentCreate, DocumentRead
from app.services import contact_service, document_service

router = APIRouter(prefix="/contacts", tags=["documents"])


@router.get("/{contact_id:uuid}/documents", response_model=list[DocumentRead])
def list_documents(contact_id: UUID, db: Session = Depends(get_db)):
    if not contact_service.get_contact(db, contact_id):
        raise HTTPException(status_code=404, detail="Contact not found")
    return document_service.list_documents(db, contact_id)


@router.post(
    "/{contact_id:uuid}/documents",
    response_model=DocumentRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_document(contact_id: UUID, data: DocumentCreate, db: Session = Depends(get_db)):
    try:
        return document_service.create_document(
            db,
            contact_id=contact_id,
            name=data.name,
            url=data.url,
            doc_type=data.type.value,
            booking_id=data.booking_id,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
