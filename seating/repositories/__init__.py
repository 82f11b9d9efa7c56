"""Domain stores, one per entity type"""

from seating.repositories.restaurant import RestaurantRepository
from seating.repositories.section import SectionRepository
from seating.repositories.table import TableRepository
from seating.repositories.customer import CustomerRepository
from seating.repositories.reservation import ReservationRepository

__all__ = [
    "RestaurantRepository",
    "SectionRepository",
    "TableRepository",
    "CustomerRepository",
    "ReservationRepository",
]
