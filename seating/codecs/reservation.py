"""Reservation record codec"""

from datetime import datetime
from typing import Mapping, Optional

from seating.codecs.base import RecordCodec, is_blank, optional_text
from seating.exceptions import EntityValidationError
from seating.models.reservation import DEFAULT_DURATION_MINUTES, Reservation, ReservationStatus


class ReservationCodec(RecordCodec[Reservation]):
    """
    Reservation rows carry a trailing duration_minutes column. Files written
    before the column existed load with the default duration.
    """
    
    entity_name = "Reservation"
    columns = [
        "reservation_id",
        "customer_id",
        "restaurant_id",
        "table_id",
        "party_size",
        "reservation_datetime",
        "status",
        "special_requests",
        "created_at",
        "updated_at",
        "duration_minutes",
    ]
    primary_key_field = "reservation_id"
    
    def __init__(self, default_duration_minutes: int = DEFAULT_DURATION_MINUTES):
        if default_duration_minutes <= 0:
            raise ValueError("default_duration_minutes must be positive")
        self.default_duration_minutes = default_duration_minutes
    
    def decode(self, row: Mapping[str, Optional[str]]) -> Reservation:
        now = datetime.now()
        created_at = row.get("created_at")
        updated_at = row.get("updated_at")
        duration = self._optional_int(row, "duration_minutes")
        return Reservation(
            reservation_id=self._optional_int(row, "reservation_id"),
            customer_id=self._require_int(row, "customer_id"),
            restaurant_id=self._require_int(row, "restaurant_id"),
            table_id=self._require_int(row, "table_id"),
            party_size=self._require_int(row, "party_size"),
            reservation_datetime=self._to_datetime(row.get("reservation_datetime"), "reservation_datetime"),
            status=ReservationStatus.from_value(row.get("status")),
            special_requests=optional_text(row.get("special_requests")),
            created_at=now if is_blank(created_at) else self._to_datetime(created_at, "created_at"),
            updated_at=now if is_blank(updated_at) else self._to_datetime(updated_at, "updated_at"),
            duration_minutes=self.default_duration_minutes if duration is None else duration,
        )
    
    def validate_entity(self, entity: Reservation) -> None:
        for field in ("customer_id", "restaurant_id", "table_id"):
            self._require_attr(entity, field)
        party_size = self._require_attr(entity, "party_size")
        if party_size <= 0:
            raise EntityValidationError("Party size must be greater than 0")
        self._require_attr(entity, "reservation_datetime")
        if entity.reservation_datetime.tzinfo is not None:
            raise EntityValidationError("Reservation date-time must not carry a timezone")
        self._require_attr(entity, "status")
        if entity.duration_minutes is None or entity.duration_minutes <= 0:
            raise EntityValidationError("Reservation duration must be greater than 0")
    
    def validate_row(self, row: Mapping[str, Optional[str]]) -> None:
        self._check_optional_id(row, "reservation_id")
        for field in ("customer_id", "restaurant_id", "table_id"):
            self._require_int(row, field)
        party_size = self._require_int(row, "party_size")
        if party_size <= 0:
            raise EntityValidationError(f"Party size must be greater than 0: {party_size}")
        self._to_datetime(self._require_text(row, "reservation_datetime"), "reservation_datetime")
        status = self._require_text(row, "status")
        try:
            ReservationStatus.from_value(status)
        except ValueError:
            raise EntityValidationError(f"Invalid reservation status in record: {status}")
        for field in ("created_at", "updated_at"):
            value = row.get(field)
            if not is_blank(value):
                self._to_datetime(value, field)
        duration = self._optional_int(row, "duration_minutes")
        if duration is not None and duration <= 0:
            raise EntityValidationError(f"Reservation duration must be greater than 0: {duration}")
