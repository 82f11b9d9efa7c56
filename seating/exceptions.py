"""Error hierarchy for the seating core"""

from datetime import datetime
from typing import Any, Optional


class SeatingError(Exception):
    """Base class for every error raised by the package"""


class StorageError(SeatingError):
    """Backing file could not be read or written"""


class EntityValidationError(SeatingError):
    """A record is structurally invalid or violates a field rule"""


class EntityNotFoundError(SeatingError):
    """A referenced entity does not exist"""

    def __init__(self, entity: str, entity_id: Any, message: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} not found with ID: {entity_id}")


class DuplicateEmailError(SeatingError):
    """Customer email is already registered"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already exists: {email}")


class ReservationError(SeatingError):
    """Base class for scheduling failures"""


class TableInactiveError(ReservationError):
    def __init__(self, table_id: int):
        self.table_id = table_id
        super().__init__(f"Table {table_id} is not active")


class ReservationConflictError(ReservationError):
    """The table already holds a confirmed booking in the requested window"""

    def __init__(
        self,
        message: str,
        table_id: Optional[int] = None,
        requested_time: Optional[datetime] = None,
    ):
        self.table_id = table_id
        self.requested_time = requested_time
        super().__init__(message)


class InsufficientCapacityError(ReservationError):
    """Party size exceeds the seating capacity of the table"""

    def __init__(self, message: str, required_capacity: int, available_capacity: int):
        self.required_capacity = required_capacity
        self.available_capacity = available_capacity
        super().__init__(message)


class NoCapacityAvailableError(ReservationError):
    """No table in the restaurant can seat the party at the requested time"""

    def __init__(self, restaurant_id: int, requested_time: datetime, party_size: int):
        self.restaurant_id = restaurant_id
        self.requested_time = requested_time
        self.party_size = party_size
        super().__init__(
            f"No available tables for {party_size} guests at {requested_time.isoformat()}"
        )


class InvalidStatusTransitionError(ReservationError):
    """The reservation is in a terminal status and cannot change"""

    def __init__(self, reservation_id: int, current_status: Any, action: str):
        self.reservation_id = reservation_id
        self.current_status = current_status
        self.action = action
        status_text = getattr(current_status, "value", current_status)
        super().__init__(
            f"Cannot {action} reservation {reservation_id} in status '{status_text}'"
        )
