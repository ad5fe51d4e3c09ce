"""Program type lookups and field schema interpretation."""

import logging
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.errors import InvalidSchemaError
from app.core.program_sources import get_booking_program_name, get_report_source
from app.db.enums import FieldType, ReportSource
from app.db.models import ProgramType
from app.schemas.program import FieldDefinition, FieldSchema, ProgramTypeRead

logger = logging.getLogger(__name__)


def list_program_types(db: Session) -> list[ProgramType]:
    return db.query(ProgramType).order_by(ProgramType.name).all()


def get_program_type(db: Session, program_type_id: UUID) -> ProgramType | None:
    return db.query(ProgramType).filter(ProgramType.id == program_type_id).first()


def get_program_type_by_slug(db: Session, slug: str) -> ProgramType | None:
    return db.query(ProgramType).filter(ProgramType.slug == slug).first()


def parse_field_schema(program_type: ProgramType) -> FieldSchema:
    """
    Parse the stored JSON schema of a program type.

    Raises:
        InvalidSchemaError: stored schema has unknown field types or duplicate
            keys
    """
    try:
        return FieldSchema.model_validate(program_type.field_schema or {})
    except ValidationError as exc:
        logger.warning(
            f"Invalid field schema for program type {program_type.slug}: {exc.error_count()} errors"
        )
        raise InvalidSchemaError(
            f"Program type '{program_type.slug}' has an invalid field schema"
        ) from exc


def display_fields(schema: FieldSchema, source: ReportSource) -> list[FieldDefinition]:
    """Fields shown in the table, form and totals bar.

    Booking-sourced reports hide boolean fields.
    """
    if source is ReportSource.BOOKING:
        return [f for f in schema.fields if f.type is not FieldType.BOOLEAN]
    return list(schema.fields)


def to_program_type_read(program_type: ProgramType) -> ProgramTypeRead:
    schema = parse_field_schema(program_type)
    source = get_report_source(program_type.slug)
    return ProgramTypeRead(
        id=program_type.id,
        name=program_type.name,
        slug=program_type.slug,
        description=program_type.description,
        field_schema=schema,
        source=source,
        booking_program_name=get_booking_program_name(program_type.slug),
        display_fields=display_fields(schema, source),
        created_at=program_type.created_at,
    )
