"""Pydantic schemas for memberships."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.db.enums import DEFAULT_MEMBERSHIP_STATUS, MembershipStatus


class MembershipBase(BaseModel):
    membership_type: str = Field(min_length=1, max_length=100)
    start_date: date | None = None
    end_date: date | None = None
    code: str | None = Field(default=None, max_length=100)
    status: MembershipStatus = DEFAULT_MEMBERSHIP_STATUS

    @field_validator("code")
    @classmethod
    def blank_code_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class MembershipCreate(MembershipBase):
    contact_id: UUID


class MembershipUpdate(MembershipBase):
    pass


class MembershipRead(BaseModel):
    id: UUID
    contact_id: UUID | None
    contact_name: str | None
    membership_type: str | None
    start_date: date | None
    end_date: date | None
    code: str | None
    status: str
