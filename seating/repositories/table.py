"""Table store"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from seating.codecs.table import TableCodec
from seating.exceptions import EntityNotFoundError, EntityValidationError
from seating.models.table import Table
from seating.storage.store import TabularStore


class TableRepository(TabularStore[Table]):
    """Tables keyed by id; table numbers are unique within a section"""
    
    def __init__(self, path: Union[str, Path]):
        super().__init__(path, TableCodec())
    
    def find_by_section_id(self, section_id: int) -> List[Table]:
        return self.find_by_field("section_id", section_id)
    
    def find_by_table_number(self, table_number: str) -> List[Table]:
        return self.find_by_field("table_number", table_number)
    
    def find_one_by_section_id_and_table_number(self, section_id: int, table_number: str) -> Optional[Table]:
        matches = self.find_by_fields({"section_id": section_id, "table_number": table_number})
        return matches[0] if matches else None
    
    def find_active_by_section_id(self, section_id: int) -> List[Table]:
        return self.find_where(lambda t: t.section_id == section_id and t.is_active)
    
    def find_by_min_capacity(self, min_capacity: int) -> List[Table]:
        return self.find_where(lambda t: t.capacity is not None and t.capacity >= min_capacity)
    
    def find_all_active(self) -> List[Table]:
        return self.find_where(lambda t: t.is_active)
    
    def find_all_inactive(self) -> List[Table]:
        return self.find_where(lambda t: not t.is_active)
    
    def count_by_section_id(self, section_id: int) -> int:
        return len(self.find_by_section_id(section_id))
    
    def count_active_by_section_id(self, section_id: int) -> int:
        return len(self.find_active_by_section_id(section_id))
    
    def delete_by_section_id(self, section_id: int) -> int:
        return self.delete_by_fields({"section_id": section_id})
    
    def activate_table(self, table_id: int) -> Table:
        return self._set_active(table_id, True)
    
    def deactivate_table(self, table_id: int) -> Table:
        return self._set_active(table_id, False)
    
    def _set_active(self, table_id: int, is_active: bool) -> Table:
        with self.locked():
            table = self.find_by_id(table_id)
            if table is None:
                raise EntityNotFoundError("Table", table_id)
            table.is_active = is_active
            return self.update(table)
    
    def _before_write(self, entity: Table, snapshot: Dict[int, Table]) -> None:
        for table_id, other in snapshot.items():
            if (
                table_id != entity.table_id
                and other.section_id == entity.section_id
                and other.table_number == entity.table_number
            ):
                raise EntityValidationError(
                    f"Table number {entity.table_number} already exists in section {entity.section_id}"
                )
