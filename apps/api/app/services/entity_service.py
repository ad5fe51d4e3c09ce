"""Relationship entities (households, schools, organizations) and their members."""

import logging
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConflictError, NotFoundError
from app.db.enums import ENTITY_TYPE_LABELS
from app.db.models import Contact, ContactEntityRole, Entity, RelationshipType
from app.schemas.entity import EntityMemberRead, EntityRead
from app.utils.normalization import escape_like_string, normalize_search_text

logger = logging.getLogger(__name__)


# =============================================================================
# Entities
# =============================================================================


def list_entities(
    db: Session,
    *,
    q: str | None = None,
    entity_type: str | None = None,
) -> list[tuple[Entity, int]]:
    """Entities by name with their member counts."""
    member_count = (
        db.query(ContactEntityRole.entity_id, func.count(ContactEntityRole.id).label("n"))
        .group_by(ContactEntityRole.entity_id)
        .subquery()
    )
    query = db.query(Entity, func.coalesce(member_count.c.n, 0)).outerjoin(
        member_count, member_count.c.entity_id == Entity.id
    )
    if entity_type and entity_type != "all":
        query = query.filter(Entity.entity_type == entity_type)
    search = normalize_search_text(q)
    if search:
        query = query.filter(
            func.lower(Entity.name).like(f"%{escape_like_string(search)}%", escape="\\")
        )
    return [(entity, int(count)) for entity, count in query.order_by(Entity.name).all()]


def get_entity(db: Session, entity_id: UUID) -> Entity | None:
    return db.query(Entity).filter(Entity.id == entity_id).first()


def count_members(db: Session, entity_id: UUID) -> int:
    return (
        db.query(func.count(ContactEntityRole.id))
        .filter(ContactEntityRole.entity_id == entity_id)
        .scalar()
        or 0
    )


def create_entity(
    db: Session,
    *,
    name: str,
    entity_type: str,
    description: str | None = None,
) -> Entity:
    entity = Entity(name=name, entity_type=entity_type, description=description or None)
    db.add(entity)
    db.commit()
    db.refresh(entity)
    return entity


def update_entity(
    db: Session,
    entity: Entity,
    *,
    name: str,
    description: str | None = None,
) -> Entity:
    entity.name = name
    entity.description = description or None
    db.commit()
    db.refresh(entity)
    return entity


def delete_entity(db: Session, entity: Entity) -> None:
    """Delete an entity and all of its member associations."""
    db.delete(entity)
    db.commit()


def to_entity_read(entity: Entity, member_count: int = 0) -> EntityRead:
    return EntityRead(
        id=entity.id,
        name=entity.name,
        entity_type=entity.entity_type,
        entity_type_label=ENTITY_TYPE_LABELS.get(entity.entity_type, entity.entity_type),
        description=entity.description,
        member_count=member_count,
        created_at=entity.created_at,
    )


# =============================================================================
# Members
# =============================================================================


def list_members(db: Session, entity_id: UUID) -> list[ContactEntityRole]:
    return (
        db.query(ContactEntityRole)
        .options(joinedload(ContactEntityRole.contact))
        .filter(ContactEntityRole.entity_id == entity_id)
        .order_by(ContactEntityRole.created_at)
        .all()
    )


def add_member(
    db: Session,
    entity: Entity,
    *,
    contact_id: UUID,
    role: str,
    is_custom_role: bool = False,
) -> ContactEntityRole:
    """
    Link a contact to an entity with a role.

    Custom roles are remembered as relationship types for the entity's type.

    Raises:
        NotFoundError: contact does not exist
        ConflictError: contact already has this role in this entity
    """
    if not db.query(Contact.id).filter(Contact.id == contact_id).first():
        raise NotFoundError("Contact not found")

    existing = (
        db.query(ContactEntityRole.id)
        .filter(
            ContactEntityRole.contact_id == contact_id,
            ContactEntityRole.entity_id == entity.id,
            ContactEntityRole.role == role,
        )
        .first()
    )
    if existing:
        raise ConflictError("This contact already has this role in this entity")

    if is_custom_role:
        upsert_relationship_type(db, entity_type=entity.entity_type, name=role)

    member = ContactEntityRole(contact_id=contact_id, entity_id=entity.id, role=role)
    db.add(member)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("This contact already has this role in this entity") from exc
    db.refresh(member)
    return member


def get_member(db: Session, entity_id: UUID, role_id: UUID) -> ContactEntityRole | None:
    return (
        db.query(ContactEntityRole)
        .filter(ContactEntityRole.entity_id == entity_id, ContactEntityRole.id == role_id)
        .first()
    )


def remove_member(db: Session, member: ContactEntityRole) -> None:
    db.delete(member)
    db.commit()


def to_member_read(member: ContactEntityRole) -> EntityMemberRead:
    return EntityMemberRead(
        id=member.id,
        contact_id=member.contact_id,
        contact_name=member.contact.name if member.contact else None,
        contact_email=member.contact.email if member.contact else None,
        entity_id=member.entity_id,
        role=member.role,
        created_at=member.created_at,
    )


# =============================================================================
# Relationship Types
# =============================================================================


def list_relationship_types(db: Session, entity_type: str | None = None) -> list[RelationshipType]:
    query = db.query(RelationshipType)
    if entity_type:
        query = query.filter(RelationshipType.entity_type == entity_type)
    return query.order_by(RelationshipType.is_default.desc(), RelationshipType.name).all()


def upsert_relationship_type(db: Session, *, entity_type: str, name: str) -> RelationshipType:
    """Get or create a role name for an entity type (flushes, does not commit)."""
    existing = (
        db.query(RelationshipType)
        .filter(RelationshipType.entity_type == entity_type, RelationshipType.name == name)
        .first()
    )
    if existing:
        return existing
    relationship_type = RelationshipType(entity_type=entity_type, name=name, is_default=False)
    db.add(relationship_type)
    db.flush()
    logger.info(f"Added relationship type '{name}' for {entity_type}")
    return relationship_type
