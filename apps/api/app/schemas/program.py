"""Pydantic schemas for program types and their field schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.db.enums import FieldType, ReportSource


# =============================================================================
# Field Schema
# =============================================================================


class FieldDefinition(BaseModel):
    """One column of a program type's report."""

    key: str = Field(min_length=1, max_length=100)
    label: str = Field(min_length=1, max_length=255)
    type: FieldType = FieldType.TEXT
    default: Any = None

    @property
    def is_numeric(self) -> bool:
        return self.type in (FieldType.NUMBER, FieldType.CURRENCY)


class FieldSchema(BaseModel):
    """Declarative schema stored in program_types.field_schema."""

    fields: list[FieldDefinition] = Field(default_factory=list)
    aggregations: list[str] = Field(default_factory=list)
    show_contact: bool = False
    show_entity: bool = False

    @field_validator("fields")
    @classmethod
    def validate_unique_keys(cls, v: list[FieldDefinition]) -> list[FieldDefinition]:
        seen: set[str] = set()
        for field in v:
            if field.key in seen:
                raise ValueError(f"Duplicate field key: {field.key}")
            seen.add(field.key)
        return v

    @field_validator("aggregations")
    @classmethod
    def dedupe_aggregations(cls, v: list[str]) -> list[str]:
        """Aggregations behave as a set; keep first-seen order."""
        return list(dict.fromkeys(v))

    def get_field(self, key: str) -> FieldDefinition | None:
        for field in self.fields:
            if field.key == key:
                return field
        return None


# =============================================================================
# Program Types
# =============================================================================


class ProgramTypeListItem(BaseModel):
    id: UUID
    name: str
    slug: str
    description: str | None

    model_config = {"from_attributes": True}


class ProgramTypeRead(ProgramTypeListItem):
    """Program type with its parsed schema and report source."""

    field_schema: FieldSchema
    source: ReportSource
    booking_program_name: str | None = None
    display_fields: list[FieldDefinition]
    created_at: datetime
