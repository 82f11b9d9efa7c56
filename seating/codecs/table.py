"""Table record codec"""

from typing import Mapping, Optional

from seating.codecs.base import RecordCodec, is_blank
from seating.exceptions import EntityValidationError
from seating.models.table import Table


class TableCodec(RecordCodec[Table]):
    entity_name = "Table"
    columns = ["table_id", "section_id", "table_number", "capacity", "is_active"]
    primary_key_field = "table_id"
    
    def decode(self, row: Mapping[str, Optional[str]]) -> Table:
        is_active = row.get("is_active")
        return Table(
            table_id=self._optional_int(row, "table_id"),
            section_id=self._require_int(row, "section_id"),
            table_number=row.get("table_number"),
            capacity=self._require_int(row, "capacity"),
            # Missing flag means active
            is_active=True if is_blank(is_active) else self._to_bool(is_active, "is_active"),
        )
    
    def validate_entity(self, entity: Table) -> None:
        self._require_attr(entity, "section_id")
        self._require_attr(entity, "table_number")
        capacity = self._require_attr(entity, "capacity")
        if capacity <= 0:
            raise EntityValidationError("Table capacity must be greater than 0")
    
    def validate_row(self, row: Mapping[str, Optional[str]]) -> None:
        self._check_optional_id(row, "table_id")
        self._require_int(row, "section_id")
        self._require_text(row, "table_number")
        capacity = self._require_int(row, "capacity")
        if capacity <= 0:
            raise EntityValidationError(f"Table capacity must be greater than 0: {capacity}")
        is_active = row.get("is_active")
        if not is_blank(is_active):
            self._to_bool(is_active, "is_active")
