"""Customer API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from seating.database import Database, get_db
from seating.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
)
from seating.schemas.reservation import ReservationListResponse

router = APIRouter()


@router.get("", response_model=CustomerListResponse)
def list_customers(
    q: Optional[str] = None,
    db: Database = Depends(get_db),
):
    """List customers, optionally filtered by a name search"""
    service = db.customer_service
    customers = service.search_customers(q)
    return CustomerListResponse(items=service.to_responses(customers), total=len(customers))


@router.post("", response_model=CustomerResponse, status_code=201)
def create_customer(
    customer_data: CustomerCreate,
    db: Database = Depends(get_db),
):
    """Create a customer profile"""
    service = db.customer_service
    return service.to_response(service.create_customer(customer_data))


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    db: Database = Depends(get_db),
):
    """Get customer details"""
    service = db.customer_service
    customer = service.get_customer(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return service.to_response(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Database = Depends(get_db),
):
    """Update customer"""
    service = db.customer_service
    return service.to_response(service.update_customer(customer_id, customer_data))


@router.delete("/{customer_id}", status_code=204)
def delete_customer(
    customer_id: int,
    db: Database = Depends(get_db),
):
    """Delete a customer; their reservations are kept"""
    db.customer_service.delete_customer(customer_id)


@router.get("/{customer_id}/reservations", response_model=ReservationListResponse)
def customer_reservations(
    customer_id: int,
    db: Database = Depends(get_db),
):
    """All reservations made by a customer"""
    service = db.reservation_service
    reservations = service.get_reservations_by_customer(customer_id)
    return ReservationListResponse(items=service.to_responses(reservations), total=len(reservations))
