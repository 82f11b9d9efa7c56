"""Record codec base: typed entity <-> flat string row"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from seating.exceptions import EntityValidationError

T = TypeVar("T")

Row = Dict[str, str]

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def format_value(value: Any) -> str:
    """Render a field for the flat file; None becomes the empty string"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    return None if is_blank(value) else value


class RecordCodec(ABC, Generic[T]):
    """
    Converts one entity type to and from a flat key/value row.
    
    Subclasses declare the column layout and the primary key column, and
    implement the field rules for both directions.
    """
    
    entity_name: str = "Entity"
    columns: List[str] = []
    primary_key_field: str = ""
    
    def to_row(self, entity: T) -> Row:
        """Validate an entity and serialise it in column order"""
        if entity is None:
            raise EntityValidationError(f"{self.entity_name} entity cannot be null")
        self._check_primary_key(getattr(entity, self.primary_key_field))
        self.validate_entity(entity)
        return {column: format_value(getattr(entity, column)) for column in self.columns}
    
    def from_row(self, row: Mapping[str, Optional[str]]) -> T:
        """Validate a raw row and build the entity from it"""
        if row is None:
            raise EntityValidationError("Record cannot be null")
        self.validate_row(row)
        return self.decode(row)
    
    def get_primary_key(self, entity: T) -> Optional[int]:
        if entity is None:
            raise EntityValidationError(f"{self.entity_name} entity cannot be null")
        return getattr(entity, self.primary_key_field)
    
    def set_primary_key(self, entity: T, value: Any) -> None:
        if entity is None:
            raise EntityValidationError(f"{self.entity_name} entity cannot be null")
        if isinstance(value, str):
            value = self._to_int(value, self.primary_key_field)
        if not isinstance(value, int) or isinstance(value, bool):
            raise EntityValidationError(f"{self.entity_name} ID must be an integer")
        self._check_primary_key(value)
        setattr(entity, self.primary_key_field, value)
    
    def _check_primary_key(self, value: Optional[int]) -> None:
        if value is not None and value <= 0:
            raise EntityValidationError(f"{self.entity_name} ID must be positive: {value}")
    
    def header(self) -> List[str]:
        return list(self.columns)
    
    @abstractmethod
    def decode(self, row: Mapping[str, Optional[str]]) -> T:
        """Build an entity from a row that already passed validate_row"""
    
    @abstractmethod
    def validate_entity(self, entity: T) -> None:
        """Raise EntityValidationError if the entity breaks a field rule"""
    
    @abstractmethod
    def validate_row(self, row: Mapping[str, Optional[str]]) -> None:
        """Raise EntityValidationError if a raw row is malformed"""
    
    # Row helpers
    
    def _to_int(self, text: str, field: str) -> int:
        try:
            return int(text.strip())
        except ValueError:
            raise EntityValidationError(
                f"Invalid {field} format in {self.entity_name} record: {text}"
            )
    
    def _to_datetime(self, text: str, field: str) -> datetime:
        try:
            value = datetime.fromisoformat(text.strip())
        except ValueError:
            raise EntityValidationError(
                f"Invalid {field} format in {self.entity_name} record: {text}"
            )
        if value.tzinfo is not None:
            raise EntityValidationError(
                f"{self.entity_name} {field} must be a local date-time without timezone: {text}"
            )
        return value
    
    def _to_bool(self, text: str, field: str) -> bool:
        lowered = text.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise EntityValidationError(
            f"Invalid {field} format in {self.entity_name} record (must be true/false): {text}"
        )
    
    def _require_text(self, row: Mapping[str, Optional[str]], field: str) -> str:
        value = row.get(field)
        if is_blank(value):
            raise EntityValidationError(f"{self.entity_name} {field} is required in record")
        return value
    
    def _require_int(self, row: Mapping[str, Optional[str]], field: str) -> int:
        return self._to_int(self._require_text(row, field), field)
    
    def _optional_int(self, row: Mapping[str, Optional[str]], field: str) -> Optional[int]:
        value = row.get(field)
        if is_blank(value):
            return None
        return self._to_int(value, field)
    
    def _check_optional_id(self, row: Mapping[str, Optional[str]], field: str) -> None:
        value = self._optional_int(row, field)
        if value is not None and value <= 0:
            raise EntityValidationError(f"{self.entity_name} {field} must be positive: {value}")
    
    # Entity helpers
    
    def _require_attr(self, entity: T, field: str) -> Any:
        value = getattr(entity, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise EntityValidationError(f"{self.entity_name} {field} is required")
        return value
    
    def _check_email(self, email: str, field: str = "email") -> None:
        if not EMAIL_PATTERN.match(email.strip()):
            raise EntityValidationError(f"Invalid {field} format: {email}")
