"""Pydantic schemas for request/response validation"""

from seating.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from seating.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
)
from seating.schemas.availability import (
    TableResponse,
    AvailabilityResponse,
    CapacityResponse,
    AlternativesResponse,
)

__all__ = [
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservationListResponse",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerListResponse",
    "TableResponse",
    "AvailabilityResponse",
    "CapacityResponse",
    "AlternativesResponse",
]
