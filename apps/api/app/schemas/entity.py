"""Pydantic schemas for relationship entities (households, schools, organizations)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.db.enums import DEFAULT_ENTITY_TYPE, EntityType


def _require_name(v: str) -> str:
    if not v.strip():
        raise ValueError("Name is required")
    return v.strip()


class EntityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    entity_type: EntityType = DEFAULT_ENTITY_TYPE
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_name(v)


class EntityUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_name(v)


class EntityRead(BaseModel):
    id: UUID
    name: str
    entity_type: EntityType
    entity_type_label: str
    description: str | None
    member_count: int = 0
    created_at: datetime


class EntityMemberAdd(BaseModel):
    contact_id: UUID
    role: str = Field(min_length=1, max_length=100)
    is_custom_role: bool = False

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please select or enter a role")
        return v.strip()


class EntityMemberRead(BaseModel):
    id: UUID
    contact_id: UUID
    contact_name: str | None
    contact_email: str | None
    entity_id: UUID
    role: str
    created_at: datetime


class RelationshipTypeRead(BaseModel):
    id: UUID
    entity_type: EntityType
    name: str
    is_default: bool

    model_config = {"from_attributes": True}
