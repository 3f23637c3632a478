from dataclasses import dataclass, field
from typing import List, Optional
from .errors import ValidationError


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def error(self) -> Optional[str]:
        return self.errors[0].message if self.errors else None

    @classmethod
    def success(cls):
        return cls(is_valid=True, errors=[])

    @classmethod
    def failure(cls, errors: List[ValidationError]):
        return cls(is_valid=False, errors=errors)

    @classmethod
    def invalid(cls, message: str, object_id: str = "", level: str = "error"):
        return cls.failure([ValidationError(level=level, message=message, object_id=object_id)])

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "error": self.error}
