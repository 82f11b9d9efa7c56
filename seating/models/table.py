"""Table model"""

from typing import Optional
from pydantic import BaseModel


class Table(BaseModel):
    """A physical table inside a section"""
    table_id: Optional[int] = None
    section_id: Optional[int] = None
    table_number: Optional[str] = None
    capacity: Optional[int] = None
    is_active: bool = True
    
    def can_seat(self, party_size: int) -> bool:
        return self.capacity is not None and self.capacity >= party_size
