"""Domain models"""

from seating.models.restaurant import Restaurant
from seating.models.section import Section
from seating.models.table import Table
from seating.models.customer import Customer
from seating.models.reservation import Reservation, ReservationStatus, DEFAULT_DURATION_MINUTES

__all__ = [
    "Restaurant",
    "Section",
    "Table",
    "Customer",
    "Reservation",
    "ReservationStatus",
    "DEFAULT_DURATION_MINUTES",
]
