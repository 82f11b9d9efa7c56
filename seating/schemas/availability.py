"""Availability schemas"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class TableResponse(BaseModel):
    """Table response"""
    table_id: int
    section_id: int
    table_number: str
    capacity: int
    is_active: bool


class AvailabilityResponse(BaseModel):
    """Tables that can seat a party at a given time, best fit first"""
    restaurant_id: int
    reservation_datetime: datetime
    party_size: int
    available: bool
    tables: List[TableResponse] = []
    optimal_table: Optional[TableResponse] = None


class CapacityResponse(BaseModel):
    """Total seats on tables that are free at a given time"""
    restaurant_id: int
    reservation_datetime: datetime
    available_capacity: int


class AlternativesResponse(BaseModel):
    """Alternatives to a requested table, same section first"""
    requested_table_id: int
    tables: List[TableResponse] = []
