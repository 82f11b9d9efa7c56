"""Reservation store"""

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional, Union

from seating.codecs.reservation import ReservationCodec
from seating.models.reservation import DEFAULT_DURATION_MINUTES, Reservation, ReservationStatus
from seating.storage.store import TabularStore


class ReservationRepository(TabularStore[Reservation]):
    """
    Reservations plus the time-window queries the availability checks need.
    
    Two bookings conflict when they are both confirmed, share a table and
    their half-open windows [start, start + duration) overlap.
    """
    
    def __init__(self, path: Union[str, Path], default_duration_minutes: int = DEFAULT_DURATION_MINUTES):
        self.default_duration_minutes = default_duration_minutes
        super().__init__(path, ReservationCodec(default_duration_minutes))
    
    def find_by_customer_id(self, customer_id: int) -> List[Reservation]:
        return self.find_by_field("customer_id", customer_id)
    
    def find_by_restaurant_id(self, restaurant_id: int) -> List[Reservation]:
        return self.find_by_field("restaurant_id", restaurant_id)
    
    def find_by_table_id(self, table_id: int) -> List[Reservation]:
        return self.find_by_field("table_id", table_id)
    
    def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return self.find_by_field("status", status)
    
    def find_by_date(self, restaurant_id: int, on_date: date) -> List[Reservation]:
        return self.find_where(
            lambda r: r.restaurant_id == restaurant_id and r.reservation_datetime.date() == on_date
        )
    
    def find_by_table_id_and_date(self, table_id: int, on_date: date) -> List[Reservation]:
        return self.find_where(
            lambda r: r.table_id == table_id and r.reservation_datetime.date() == on_date
        )
    
    def find_by_date_range(self, restaurant_id: int, start: datetime, end: datetime) -> List[Reservation]:
        """Reservations starting within [start, end], both ends inclusive"""
        return self.find_where(
            lambda r: r.restaurant_id == restaurant_id and start <= r.reservation_datetime <= end
        )
    
    def find_active(self, restaurant_id: int, from_datetime: Optional[datetime] = None) -> List[Reservation]:
        """Confirmed reservations, optionally only those starting at or after ``from_datetime``"""
        return self.find_where(
            lambda r: r.restaurant_id == restaurant_id
            and r.is_active
            and (from_datetime is None or r.reservation_datetime >= from_datetime)
        )
    
    def find_upcoming(self, customer_id: int, from_datetime: datetime) -> List[Reservation]:
        return self.find_where(
            lambda r: r.customer_id == customer_id
            and r.is_active
            and r.reservation_datetime >= from_datetime
        )
    
    def find_past(self, customer_id: int, before_datetime: datetime) -> List[Reservation]:
        return self.find_where(
            lambda r: r.customer_id == customer_id and r.reservation_datetime < before_datetime
        )
    
    def count_by_restaurant_and_date(self, restaurant_id: int, on_date: date) -> int:
        return len(self.find_by_date(restaurant_id, on_date))
    
    def delete_by_customer_id(self, customer_id: int) -> int:
        return self.delete_by_fields({"customer_id": customer_id})
    
    def find_conflicting_reservations(
        self,
        table_id: int,
        start: datetime,
        duration_minutes: Optional[int] = None,
        exclude_reservation_id: Optional[int] = None,
    ) -> List[Reservation]:
        """Confirmed reservations on ``table_id`` whose window overlaps the requested one"""
        if duration_minutes is None or duration_minutes <= 0:
            duration_minutes = self.default_duration_minutes
        end = start + timedelta(minutes=duration_minutes)
        return self.find_where(
            lambda r: r.table_id == table_id
            and r.is_active
            and r.reservation_id != exclude_reservation_id
            and r.overlaps(start, end)
        )
    
    def has_conflicting_reservation(
        self,
        table_id: int,
        start: datetime,
        duration_minutes: Optional[int] = None,
        exclude_reservation_id: Optional[int] = None,
    ) -> bool:
        return bool(
            self.find_conflicting_reservations(table_id, start, duration_minutes, exclude_reservation_id)
        )
