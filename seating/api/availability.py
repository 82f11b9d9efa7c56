"""Table availability API endpoints"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from seating.database import Database, get_db
from seating.schemas.availability import (
    AlternativesResponse,
    AvailabilityResponse,
    CapacityResponse,
    TableResponse,
)

router = APIRouter()


@router.get("/restaurants/{restaurant_id}/availability", response_model=AvailabilityResponse)
def check_availability(
    restaurant_id: int,
    reservation_datetime: datetime,
    party_size: int = Query(..., ge=1),
    duration_minutes: Optional[int] = Query(None, ge=1),
    db: Database = Depends(get_db),
):
    """Tables that can seat the party at the requested time, best fit first"""
    tables = db.availability.get_available_tables(
        restaurant_id, reservation_datetime, party_size, duration_minutes
    )
    items = [TableResponse(**t.model_dump()) for t in tables]
    
    return AvailabilityResponse(
        restaurant_id=restaurant_id,
        reservation_datetime=reservation_datetime,
        party_size=party_size,
        available=bool(items),
        tables=items,
        optimal_table=items[0] if items else None,
    )


@router.get("/restaurants/{restaurant_id}/capacity", response_model=CapacityResponse)
def available_capacity(
    restaurant_id: int,
    reservation_datetime: datetime,
    db: Database = Depends(get_db),
):
    """Total seats on tables free at the requested time"""
    return CapacityResponse(
        restaurant_id=restaurant_id,
        reservation_datetime=reservation_datetime,
        available_capacity=db.availability.get_available_capacity(restaurant_id, reservation_datetime),
    )


@router.get("/tables/{table_id}/alternatives", response_model=AlternativesResponse)
def table_alternatives(
    table_id: int,
    reservation_datetime: datetime,
    party_size: int = Query(..., ge=1),
    db: Database = Depends(get_db),
):
    """Other tables for the party, same section first"""
    tables = db.availability.suggest_alternative_tables(table_id, reservation_datetime, party_size)
    return AlternativesResponse(
        requested_table_id=table_id,
        tables=[TableResponse(**t.model_dump()) for t in tables],
    )
