"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class OnixVersion(StrEnum):
    """ONIX dialect detected for an uploaded message."""

    V2_1 = "2.1"
    V3_0 = "3.0"
    V3_1 = "3.1"
    UNKNOWN = "unknown"


class PublicationStatus(StrEnum):
    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"
    OUT_OF_PRINT = "out_of_print"


class ContributorKind(StrEnum):
    """Simplified contributor roles understood by the catalog."""

    AUTHOR = "author"
    EDITOR = "editor"
    TRANSLATOR = "translator"
    NARRATOR = "narrator"
    OTHER = "other"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class ConflictAction(StrEnum):
    """Wire spellings of the choices offered when an ISBN already exists."""

    SKIP = "skip"
    UPDATE = "update"
    CREATE_NEW = "create-new"


class InstructionKind(StrEnum):
    """What the persistence step is told to do with one imported product."""

    CREATE = "create"
    UPDATE = "update"
    SKIP = "skip"
    INVALID = "invalid"
