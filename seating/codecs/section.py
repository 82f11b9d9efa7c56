"""Section record codec"""

from typing import Mapping, Optional

from seating.codecs.base import RecordCodec, optional_text
from seating.exceptions import EntityValidationError
from seating.models.section import Section


class SectionCodec(RecordCodec[Section]):
    entity_name = "Section"
    columns = ["section_id", "restaurant_id", "name", "num_tables", "notes"]
    primary_key_field = "section_id"
    
    def decode(self, row: Mapping[str, Optional[str]]) -> Section:
        return Section(
            section_id=self._optional_int(row, "section_id"),
            restaurant_id=self._require_int(row, "restaurant_id"),
            name=row.get("name"),
            num_tables=self._optional_int(row, "num_tables"),
            notes=optional_text(row.get("notes")),
        )
    
    def validate_entity(self, entity: Section) -> None:
        self._require_attr(entity, "restaurant_id")
        self._require_attr(entity, "name")
        if entity.num_tables is not None and entity.num_tables < 0:
            raise EntityValidationError("Section num_tables cannot be negative")
    
    def validate_row(self, row: Mapping[str, Optional[str]]) -> None:
        self._check_optional_id(row, "section_id")
        self._require_int(row, "restaurant_id")
        self._require_text(row, "name")
        num_tables = self._optional_int(row, "num_tables")
        if num_tables is not None and num_tables < 0:
            raise EntityValidationError(f"Section num_tables cannot be negative: {num_tables}")
