"""Relationship entity enums."""

from enum import Enum


class EntityType(str, Enum):
    """Kinds of relationship entity a contact can belong to."""

    HOUSEHOLD = "household"
    SCHOOL = "school"
    ORGANIZATION = "organization"


ENTITY_TYPE_LABELS: dict[str, str] = {
    EntityType.HOUSEHOLD.value: "Household",
    EntityType.SCHOOL.value: "School",
    EntityType.ORGANIZATION.value: "Organization",
}
