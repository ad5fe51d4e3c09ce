"""Pydantic schemas for contacts."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class ContactCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    organization: str | None = Field(default=None, max_length=255)
    contact_types: list[str] = Field(default_factory=list)
    referred_by: str | None = Field(default=None, max_length=255)
    marketing_consent: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("contact_types")
    @classmethod
    def normalize_contact_types(cls, v: list[str]) -> list[str]:
        """Lowercase, trimmed, unique, in submitted order."""
        normalized = [t.strip().lower() for t in v if t and t.strip()]
        return list(dict.fromkeys(normalized))


class ContactUpdate(BaseModel):
    """Notes and tags are the only fields edited after creation."""

    notes: str | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return list(dict.fromkeys(t.strip() for t in v if t and t.strip()))


class ContactRead(BaseModel):
    id: UUID
    name: str | None
    email: str | None
    phone: str | None
    organization: str | None
    contact_types: list[str] | None
    tags: list[str] | None
    notes: str | None
    referred_by: str | None
    marketing_consent: bool | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ContactSummary(BaseModel):
    id: UUID
    name: str | None

    model_config = {"from_attributes": True}
