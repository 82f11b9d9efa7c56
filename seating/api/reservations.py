"""Reservation API endpoints"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from seating.database import Database, get_db
from seating.models.reservation import ReservationStatus
from seating.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)

router = APIRouter()


@router.get("", response_model=ReservationListResponse)
def list_reservations(
    restaurant_id: int,
    on_date: Optional[date] = None,
    status: Optional[ReservationStatus] = None,
    db: Database = Depends(get_db),
):
    """List reservations for a restaurant, optionally for one day and status"""
    service = db.reservation_service
    if on_date:
        reservations = service.get_reservations_by_restaurant(restaurant_id, on_date)
    else:
        reservations = db.reservations.find_by_restaurant_id(restaurant_id)
    
    if status:
        reservations = [r for r in reservations if r.status == status]
    
    reservations.sort(key=lambda r: r.reservation_datetime)
    return ReservationListResponse(items=service.to_responses(reservations), total=len(reservations))


@router.post("", response_model=ReservationResponse, status_code=201)
def create_reservation(
    reservation_data: ReservationCreate,
    db: Database = Depends(get_db),
):
    """Create a reservation; a table is assigned when none is given"""
    service = db.reservation_service
    if reservation_data.table_id is None:
        reservation = service.create_reservation_with_auto_assignment(reservation_data)
    else:
        reservation = service.create_reservation(reservation_data)
    return service.to_response(reservation)


@router.get("/active", response_model=ReservationListResponse)
def list_active_reservations(
    restaurant_id: int,
    db: Database = Depends(get_db),
):
    """Confirmed reservations for a restaurant"""
    service = db.reservation_service
    reservations = service.get_active_reservations(restaurant_id)
    return ReservationListResponse(items=service.to_responses(reservations), total=len(reservations))


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: int,
    db: Database = Depends(get_db),
):
    """Get reservation details"""
    service = db.reservation_service
    reservation = service.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return service.to_response(reservation)


@router.put("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: int,
    reservation_data: ReservationUpdate,
    db: Database = Depends(get_db),
):
    """Update table, party size, time or notes of a confirmed reservation"""
    service = db.reservation_service
    reservation = service.update_reservation(reservation_id, reservation_data)
    return service.to_response(reservation)


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: int,
    db: Database = Depends(get_db),
):
    """Cancel a reservation"""
    service = db.reservation_service
    return service.to_response(service.cancel_reservation(reservation_id))


@router.post("/{reservation_id}/complete", response_model=ReservationResponse)
def complete_reservation(
    reservation_id: int,
    db: Database = Depends(get_db),
):
    """Mark a reservation as completed"""
    service = db.reservation_service
    return service.to_response(service.mark_as_completed(reservation_id))


@router.post("/{reservation_id}/no_show", response_model=ReservationResponse)
def no_show_reservation(
    reservation_id: int,
    db: Database = Depends(get_db),
):
    """Mark a reservation as a no-show"""
    service = db.reservation_service
    return service.to_response(service.mark_as_no_show(reservation_id))
