"""Entities router - households, schools and organizations with their members."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_csrf_header
from app.core.errors import ConflictError, NotFoundError
from app.db.enums import EntityType
from app.db.models import Entity
from app.schemas.entity import (
    EntityCreate,
    EntityMemberAdd,
    EntityMemberRead,
    EntityRead,
    EntityUpdate,
    RelationshipTypeRead,
)
from app.services import entity_service

router = APIRouter(tags=["entities"])


def _get_entity_or_404(db: Session, entity_id: UUID) -> Entity:
    entity = entity_service.get_entity(db, entity_id)
    if not entity:
        raise HTTPException(status_code=404, detail="Entity not found")
    return entity


@router.get("/entities", response_model=list[EntityRead])
def list_entities(
    q: Optional[str] = Query(None, max_length=100),
    type: Optional[str] = Query(None, description="Entity type filter ('all' for none)"),
    db: Session = Depends(get_db),
):
    return [
        entity_service.to_entity_read(entity, count)
        for entity, count in entity_service.list_entities(db, q=q, entity_type=type)
    ]


@router.post(
    "/entities",
    response_model=EntityRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_entity(data: EntityCreate, db: Session = Depends(get_db)):
    entity = entity_service.create_entity(
        db, name=data.name, entity_type=data.entity_type.value, description=data.description
    )
    return entity_service.to_entity_read(entity)


@router.get("/entities/{entity_id:uuid}", response_model=EntityRead)
def get_entity(entity_id: UUID, db: Session = Depends(get_db)):
    entity = _get_entity_or_404(db, entity_id)
    return entity_service.to_entity_read(entity, entity_service.count_members(db, entity.id))


@router.patch(
    "/entities/{entity_id:uuid}",
    response_model=EntityRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_entity(entity_id: UUID, data: EntityUpdate, db: Session = Depends(get_db)):
    entity = _get_entity_or_404(db, entity_id)
    entity = entity_service.update_entity(db, entity, name=data.name, description=data.description)
    return entity_service.to_entity_read(entity, entity_service.count_members(db, entity.id))


@router.delete(
    "/entities/{entity_id:uuid}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_entity(entity_id: UUID, db: Session = Depends(get_db)):
    """Delete an entity; member associations go with it, contacts stay."""
    entity = _get_entity_or_404(db, entity_id)
    entity_service.delete_entity(db, entity)


# =============================================================================
# Members
# =============================================================================


@router.get("/entities/{entity_id:uuid}/members", response_model=list[EntityMemberRead])
def list_members(entity_id: UUID, db: Session = Depends(get_db)):
    _get_entity_or_404(db, entity_id)
    return [entity_service.to_member_read(m) for m in entity_service.list_members(db, entity_id)]


@router.post(
    "/entities/{entity_id:uuid}/members",
    response_model=EntityMemberRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def add_member(entity_id: UUID, data: EntityMemberAdd, db: Session = Depends(get_db)):
    entity = _get_entity_or_404(db, entity_id)
    try:
        member = entity_service.add_member(
            db,
            entity,
            contact_id=data.contact_id,
            role=data.role,
            is_custom_role=data.is_custom_role,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return entity_service.to_member_read(member)


@router.delete(
    "/entities/{entity_id:uuid}/members/{role_id:uuid}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def remove_member(entity_id: UUID, role_id: UUID, db: Session = Depends(get_db)):
    member = entity_service.get_member(db, entity_id, role_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    entity_service.remove_member(db, member)


@router.get("/relationship-types", response_model=list[RelationshipTypeRead])
def list_relationship_types(
    entity_type: Optional[EntityType] = Query(None),
    db: Session = Depends(get_db),
):
    """Role names offered when adding a member, defaults first."""
    return entity_service.list_relationship_types(
        db, entity_type.value if entity_type else None
    )
