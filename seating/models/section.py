"""Section model"""

from typing import Optional
from pydantic import BaseModel


class Section(BaseModel):
    """Subdivision of a restaurant such as patio or bar"""
    section_id: Optional[int] = None
    restaurant_id: Optional[int] = None
    name: Optional[str] = None
    num_tables: Optional[int] = None
    notes: Optional[str] = None
