"""Reservation model"""

import enum
from datetime import datetime, timedelta
from typing import Optional
from pydantic import BaseModel, Field

DEFAULT_DURATION_MINUTES = 120


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    NO_SHOW = "no_show"
    CANCELLED = "cancelled"
    
    @property
    def is_terminal(self) -> bool:
        return self is not ReservationStatus.CONFIRMED
    
    @classmethod
    def from_value(cls, value: str) -> "ReservationStatus":
        """Resolve a status from its stored value or member name"""
        text = value.strip()
        for status in cls:
            if text == status.value or text.upper() == status.name:
                return status
        raise ValueError(f"Unknown reservation status: {value}")


class Reservation(BaseModel):
    """A time-boxed booking of one table for one customer"""
    reservation_id: Optional[int] = None
    customer_id: Optional[int] = None
    restaurant_id: Optional[int] = None
    table_id: Optional[int] = None
    party_size: Optional[int] = None
    reservation_datetime: Optional[datetime] = None
    status: ReservationStatus = ReservationStatus.CONFIRMED
    special_requests: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    
    @property
    def is_active(self) -> bool:
        """Only confirmed reservations occupy their table"""
        return self.status == ReservationStatus.CONFIRMED
    
    @property
    def end_datetime(self) -> Optional[datetime]:
        if self.reservation_datetime is None:
            return None
        return self.reservation_datetime + timedelta(minutes=self.duration_minutes)
    
    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open interval test: [start, end) against this booking's window"""
        if self.reservation_datetime is None:
            return False
        return self.reservation_datetime < end and self.end_datetime > start
    
    def mark_as_updated(self) -> None:
        self.updated_at = datetime.now()
