from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidationError:
    level: str
    message: str
    object_id: str


class DiscourseGraphError(Exception):
    """Base class for all discourse graph errors."""


class InvalidFormat(DiscourseGraphError, ValueError):
    """Raised when a node type title format fails validation."""

    def __init__(self, format: str, message: str):
        super().__init__(message)
        self.format = format
        self.message = message


class UnknownType(DiscourseGraphError, LookupError):
    """A node or relation type id no longer resolves against the settings."""

    kind = "type"

    def __init__(self, type_id: str):
        super().__init__(f"Unknown {self.kind} '{type_id}'")
        self.type_id = type_id


class UnknownNodeType(UnknownType):
    kind = "node type"


class UnknownRelationType(UnknownType):
    kind = "relation type"


class MeasurementFailure(DiscourseGraphError):
    """Text or image measurement failed."""

    def __init__(self, message: str, src: Optional[str] = None):
        super().__init__(message)
        self.src = src


class MeasurementTimeout(MeasurementFailure):
    """Image loading did not finish within the allowed time."""


class MigrationSkip(DiscourseGraphError):
    """
    Raised by an upgrader for a record it cannot apply to.

    The migrator treats it as a pass-through, not an error: the record keeps
    its current form and the remaining migrations still run.
    """


class SyncError(DiscourseGraphError):
    """A relation write to a document's frontmatter failed."""

    def __init__(self, message: str, document: str, direction: str, relation_type_id: str):
        super().__init__(message)
        self.document = document
        self.direction = direction
        self.relation_type_id = relation_type_id


class PartialSyncFailure(SyncError):
    """
    The first directional write succeeded but the second failed.

    `direction` names the direction that still needs to be applied so the
    caller can retry just that one.
    """

    def __init__(self, document: str, direction: str, relation_type_id: str, cause: BaseException):
        super().__init__(
            f"Relation '{relation_type_id}' was only half applied: "
            f"writing {direction} link to '{document}' failed ({cause})",
            document=document,
            direction=direction,
            relation_type_id=relation_type_id,
        )
        self.cause = cause
