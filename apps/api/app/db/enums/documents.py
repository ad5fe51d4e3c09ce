"""Document enums."""

from enum import Enum


class DocumentType(str, Enum):
    WAIVER = "waiver"
    MEDICAL_FORM = "medical_form"
    OTHER = "other"
