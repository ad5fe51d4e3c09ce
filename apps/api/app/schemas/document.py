"""Pydantic schemas for document records."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.db.enums import DEFAULT_DOCUMENT_TYPE, DocumentType


class DocumentCreate(BaseModel):
    """Metadata recorded after a file has been stored."""

    name: str = Field(min_length=1, max_length=255)
    url: str = Field(min_length=1, max_length=512, description="Storage key of the uploaded file")
    type: DocumentType = DEFAULT_DOCUMENT_TYPE
    booking_id: UUID | None = None

    @field_validator("name", "url")
    @classmethod
    def strip_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value is required")
        return v.strip()


class DocumentRead(BaseModel):
    id: UUID
    contact_id: UUID
    booking_id: UUID | None
    name: str
    url: str
    type: str
    uploaded_at: datetime

    model_config = {"from_attributes": True}
