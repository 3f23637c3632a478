from .errors import (
    DiscourseGraphError,
    InvalidFormat,
    MeasurementFailure,
    MeasurementTimeout,
    MigrationSkip,
    PartialSyncFailure,
    SyncError,
    UnknownNodeType,
    UnknownRelationType,
    UnknownType,
    ValidationError,
)
from .validation import ValidationResult

__all__ = [
    "DiscourseGraphError",
    "InvalidFormat",
    "MeasurementFailure",
    "MeasurementTimeout",
    "MigrationSkip",
    "PartialSyncFailure",
    "SyncError",
    "UnknownNodeType",
    "UnknownRelationType",
    "UnknownType",
    "ValidationError",
    "ValidationResult",
]
