"""Services built on the domain stores"""

from seating.services.availability import AvailabilityService
from seating.services.customers import CustomerService
from seating.services.reservations import ReservationService

__all__ = ["AvailabilityService", "CustomerService", "ReservationService"]
