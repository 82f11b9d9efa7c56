"""Reservation schemas"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel

from seating.models.reservation import ReservationStatus


class ReservationCreate(BaseModel):
    """Create reservation request; omit table_id to have one assigned"""
    customer_id: int
    restaurant_id: int
    table_id: Optional[int] = None
    party_size: int
    reservation_datetime: datetime
    special_requests: Optional[str] = None
    duration_minutes: Optional[int] = None


class ReservationUpdate(BaseModel):
    """Update reservation request"""
    table_id: Optional[int] = None
    party_size: Optional[int] = None
    reservation_datetime: Optional[datetime] = None
    special_requests: Optional[str] = None
    duration_minutes: Optional[int] = None
    
    def has_updates(self) -> bool:
        return bool(self.model_dump(exclude_none=True))


class ReservationResponse(BaseModel):
    """Reservation enriched with the names of what it references"""
    reservation_id: int
    customer_id: int
    restaurant_id: int
    table_id: int
    party_size: int
    reservation_datetime: datetime
    end_datetime: datetime
    duration_minutes: int
    status: ReservationStatus
    special_requests: Optional[str]
    created_at: datetime
    updated_at: datetime
    customer_name: Optional[str] = None
    restaurant_name: Optional[str] = None
    table_number: Optional[str] = None
    section_name: Optional[str] = None


class ReservationListResponse(BaseModel):
    """Reservation list"""
    items: List[ReservationResponse]
    total: int
