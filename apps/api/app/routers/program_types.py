"""Program type endpoints (read-only; program types are managed outside the app)."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.errors import InvalidSchemaError
from app.schemas.program import ProgramTypeListItem, ProgramTypeRead
from app.services import program_type_service


router = APIRouter(prefix="/program-types", tags=["program-types"])


@router.get("", response_model=list[ProgramTypeListItem])
def list_program_types(db: Session = Depends(get_db)):
    return program_type_service.list_program_types(db)


@router.get("/{program_type_id:uuid}", response_model=ProgramTypeRead)
def get_program_type(program_type_id: UUID, db: Session = Depends(get_db)):
    program_type = program_type_service.get_program_type(db, program_type_id)
    if not program_type:
        raise HTTPException(status_code=404, detail="Program type not found")
    try:
        return program_type_service.to_program_type_read(program_type)
    except InvalidSchemaError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
