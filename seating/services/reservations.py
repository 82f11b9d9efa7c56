"""Reservation lifecycle: validation, booking, edits and status transitions"""

from datetime import date, datetime, timedelta
from typing import Callable, List, Optional

import structlog

from seating.exceptions import (
    EntityNotFoundError,
    EntityValidationError,
    InvalidStatusTransitionError,
    NoCapacityAvailableError,
    StorageError,
)
from seating.models.customer import Customer
from seating.models.reservation import DEFAULT_DURATION_MINUTES, Reservation, ReservationStatus
from seating.models.restaurant import Restaurant
from seating.models.table import Table
from seating.repositories.customer import CustomerRepository
from seating.repositories.reservation import ReservationRepository
from seating.repositories.restaurant import RestaurantRepository
from seating.repositories.section import SectionRepository
from seating.repositories.table import TableRepository
from seating.schemas.reservation import ReservationCreate, ReservationResponse, ReservationUpdate
from seating.services.availability import AvailabilityService

logger = structlog.get_logger()


class ReservationService:
    """
    Creates and mutates reservations.
    
    New reservations start CONFIRMED. CANCELLED, COMPLETED and NO_SHOW are
    terminal: once reached, neither the status nor any booking field can
    change. Every availability check runs inside the reservation store's
    lock together with the write it guards, so two callers cannot book the
    same slot.
    """
    
    def __init__(
        self,
        reservations: ReservationRepository,
        customers: CustomerRepository,
        restaurants: RestaurantRepository,
        tables: TableRepository,
        sections: SectionRepository,
        availability: AvailabilityService,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
        past_tolerance_minutes: int = 60,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.reservations = reservations
        self.customers = customers
        self.restaurants = restaurants
        self.tables = tables
        self.sections = sections
        self.availability = availability
        self.duration_minutes = duration_minutes
        self.past_tolerance = timedelta(minutes=past_tolerance_minutes)
        self.clock = clock
    
    # Creation
    
    def create_reservation(self, request: ReservationCreate) -> Reservation:
        """Book the table named in the request"""
        if request.table_id is None:
            raise EntityValidationError(
                "Table ID is required. Use create_reservation_with_auto_assignment for automatic table selection."
            )
        self._validate_create_request(request)
        customer = self._get_customer(request.customer_id)
        self._get_restaurant(request.restaurant_id)
        duration = request.duration_minutes or self.duration_minutes
        
        try:
            with self.reservations.locked():
                table = self.availability.check_table_assignment(
                    request.table_id,
                    request.reservation_datetime,
                    request.party_size,
                    duration,
                )
                self._check_table_in_restaurant(table, request.restaurant_id)
                
                reservation = Reservation(
                    customer_id=request.customer_id,
                    restaurant_id=request.restaurant_id,
                    table_id=table.table_id,
                    party_size=request.party_size,
                    reservation_datetime=request.reservation_datetime,
                    status=ReservationStatus.CONFIRMED,
                    special_requests=request.special_requests,
                    duration_minutes=duration,
                )
                reservation = self.reservations.save(reservation)
        except StorageError as e:
            logger.error("Storage error during reservation creation", error=str(e))
            raise
        
        logger.info(
            "Created reservation",
            reservation_id=reservation.reservation_id,
            customer=customer.full_name,
            table_number=table.table_number,
            reservation_datetime=reservation.reservation_datetime.isoformat(),
        )
        return reservation
    
    def create_reservation_with_auto_assignment(self, request: ReservationCreate) -> Reservation:
        """Book the smallest free table that seats the party"""
        self._validate_create_request(request)
        self._get_customer(request.customer_id)
        self._get_restaurant(request.restaurant_id)
        duration = request.duration_minutes or self.duration_minutes
        
        with self.reservations.locked():
            table = self.availability.get_optimal_table(
                request.restaurant_id,
                request.reservation_datetime,
                request.party_size,
                duration,
            )
            if table is None:
                logger.warning(
                    "No table available for auto-assignment",
                    restaurant_id=request.restaurant_id,
                    party_size=request.party_size,
                    reservation_datetime=request.reservation_datetime.isoformat(),
                )
                raise NoCapacityAvailableError(
                    request.restaurant_id, request.reservation_datetime, request.party_size
                )
            assigned = request.model_copy(update={"table_id": table.table_id})
            return self.create_reservation(assigned)
    
    # Edits
    
    def update_reservation(self, reservation_id: int, request: ReservationUpdate) -> Reservation:
        """
        Apply a partial change and re-validate the resulting booking.
        
        The reservation being edited is excluded from its own conflict check.
        """
        if not request.has_updates():
            raise EntityValidationError("No fields to update")
        
        try:
            with self.reservations.locked():
                reservation = self._get_reservation(reservation_id)
                if reservation.status.is_terminal:
                    raise InvalidStatusTransitionError(reservation_id, reservation.status, "update")
                
                table_id = request.table_id if request.table_id is not None else reservation.table_id
                party_size = request.party_size if request.party_size is not None else reservation.party_size
                start = request.reservation_datetime or reservation.reservation_datetime
                duration = request.duration_minutes or reservation.duration_minutes
                
                if request.duration_minutes is not None and request.duration_minutes <= 0:
                    raise EntityValidationError("Reservation duration must be greater than 0")
                if request.reservation_datetime is not None:
                    self._check_datetime(request.reservation_datetime)
                
                table = self.availability.check_table_assignment(
                    table_id,
                    start,
                    party_size,
                    duration,
                    exclude_reservation_id=reservation_id,
                )
                if table_id != reservation.table_id:
                    self._check_table_in_restaurant(table, reservation.restaurant_id)
                
                reservation.table_id = table_id
                reservation.party_size = party_size
                reservation.reservation_datetime = start
                reservation.duration_minutes = duration
                # Blank clears the note
                if request.special_requests is not None:
                    reservation.special_requests = request.special_requests if request.special_requests.strip() else None
                reservation.mark_as_updated()
                reservation = self.reservations.update(reservation)
        except StorageError as e:
            logger.error("Storage error during reservation update", reservation_id=reservation_id, error=str(e))
            raise
        
        logger.info("Updated reservation", reservation_id=reservation_id)
        return reservation
    
    # Status transitions
    
    def cancel_reservation(self, reservation_id: int) -> Reservation:
        return self._transition(reservation_id, ReservationStatus.CANCELLED, "cancel")
    
    def mark_as_completed(self, reservation_id: int) -> Reservation:
        return self._transition(reservation_id, ReservationStatus.COMPLETED, "complete")
    
    def mark_as_no_show(self, reservation_id: int) -> Reservation:
        return self._transition(reservation_id, ReservationStatus.NO_SHOW, "mark as no-show")
    
    # Queries
    
    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        return self.reservations.find_by_id(reservation_id)
    
    def get_reservations_by_customer(self, customer_id: int) -> List[Reservation]:
        return self.reservations.find_by_customer_id(customer_id)
    
    def get_reservations_by_restaurant(self, restaurant_id: int, on_date: date) -> List[Reservation]:
        return self.reservations.find_by_date(restaurant_id, on_date)
    
    def get_reservations_by_table(self, table_id: int, on_date: date) -> List[Reservation]:
        return self.reservations.find_by_table_id_and_date(table_id, on_date)
    
    def get_active_reservations(
        self, restaurant_id: int, from_datetime: Optional[datetime] = None
    ) -> List[Reservation]:
        """Confirmed reservations for the restaurant, optionally from a point in time"""
        return self.reservations.find_active(restaurant_id, from_datetime)
    
    # Views
    
    def to_response(self, reservation: Reservation) -> ReservationResponse:
        """Reservation view with customer, restaurant, table and section names"""
        customer = self.customers.find_by_id(reservation.customer_id)
        restaurant = self.restaurants.find_by_id(reservation.restaurant_id)
        table = self.tables.find_by_id(reservation.table_id)
        section = self.sections.find_by_id(table.section_id) if table else None
        
        return ReservationResponse(
            **reservation.model_dump(),
            end_datetime=reservation.end_datetime,
            customer_name=customer.full_name if customer else None,
            restaurant_name=restaurant.name if restaurant else None,
            table_number=table.table_number if table else None,
            section_name=section.name if section else None,
        )
    
    def to_responses(self, reservations: List[Reservation]) -> List[ReservationResponse]:
        return [self.to_response(r) for r in reservations]
    
    # Internals
    
    def _transition(self, reservation_id: int, status: ReservationStatus, action: str) -> Reservation:
        try:
            with self.reservations.locked():
                reservation = self._get_reservation(reservation_id)
                if reservation.status.is_terminal:
                    raise InvalidStatusTransitionError(reservation_id, reservation.status, action)
                reservation.status = status
                reservation.mark_as_updated()
                reservation = self.reservations.update(reservation)
        except StorageError as e:
            logger.error("Storage error during status update", reservation_id=reservation_id, error=str(e))
            raise
        
        logger.info("Updated reservation status", reservation_id=reservation_id, status=status.value)
        return reservation
    
    def _validate_create_request(self, request: ReservationCreate) -> None:
        if request.customer_id is None:
            raise EntityValidationError("Customer ID is required")
        if request.restaurant_id is None:
            raise EntityValidationError("Restaurant ID is required")
        if request.party_size is None or request.party_size <= 0:
            raise EntityValidationError("Party size must be greater than 0")
        if request.reservation_datetime is None:
            raise EntityValidationError("Reservation date and time is required")
        if request.duration_minutes is not None and request.duration_minutes <= 0:
            raise EntityValidationError("Reservation duration must be greater than 0")
        self._check_datetime(request.reservation_datetime)
    
    def _check_datetime(self, value: datetime) -> None:
        if value.tzinfo is not None:
            raise EntityValidationError("Reservation date and time must be a local time without timezone")
        if value < self.clock() - self.past_tolerance:
            raise EntityValidationError("Reservation time must be in the future")
    
    def _check_table_in_restaurant(self, table: Table, restaurant_id: int) -> None:
        section = self.sections.find_by_id(table.section_id)
        if section is None or section.restaurant_id != restaurant_id:
            raise EntityValidationError(
                f"Table {table.table_id} does not belong to restaurant {restaurant_id}"
            )
    
    def _get_reservation(self, reservation_id: int) -> Reservation:
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            raise EntityNotFoundError("Reservation", reservation_id)
        return reservation
    
    def _get_customer(self, customer_id: int) -> Customer:
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError("Customer", customer_id)
        return customer
    
    def _get_restaurant(self, restaurant_id: int) -> Restaurant:
        restaurant = self.restaurants.find_by_id(restaurant_id)
        if restaurant is None:
            raise EntityNotFoundError("Restaurant", restaurant_id)
        return restaurant
