"""Table availability and best-fit selection"""

from datetime import datetime
from typing import List, Optional

import structlog

from seating.exceptions import (
    EntityNotFoundError,
    EntityValidationError,
    InsufficientCapacityError,
    ReservationConflictError,
    ReservationError,
    TableInactiveError,
)
from seating.models.reservation import DEFAULT_DURATION_MINUTES
from seating.models.table import Table
from seating.repositories.reservation import ReservationRepository
from seating.repositories.section import SectionRepository
from seating.repositories.table import TableRepository

logger = structlog.get_logger()


def _best_fit_order(table: Table):
    return (table.capacity, table.table_id)


class AvailabilityService:
    """
    Answers whether a table can take a party at a given time and ranks
    candidate tables.
    
    A table is available when it exists, is active and holds no confirmed
    reservation overlapping [requested, requested + duration). Candidate
    lists are ordered best fit first: smallest sufficient capacity, then
    table id.
    """
    
    def __init__(
        self,
        tables: TableRepository,
        sections: SectionRepository,
        reservations: ReservationRepository,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ):
        self.tables = tables
        self.sections = sections
        self.reservations = reservations
        self.duration_minutes = duration_minutes
    
    def is_table_available(
        self,
        table_id: int,
        requested_datetime: datetime,
        duration_minutes: Optional[int] = None,
    ) -> bool:
        """Check if a specific table is free at the given time"""
        self._check_requested_datetime(requested_datetime)
        table = self.tables.find_by_id(table_id)
        if table is None:
            logger.warning("Table not found", table_id=table_id)
            return False
        if not table.is_active:
            logger.debug("Table is not active", table_id=table_id)
            return False
        if self._has_conflict(table_id, requested_datetime, duration_minutes):
            logger.debug(
                "Table has conflicting reservation",
                table_id=table_id,
                requested_datetime=requested_datetime.isoformat(),
            )
            return False
        return True
    
    def get_available_tables(
        self,
        restaurant_id: int,
        requested_datetime: datetime,
        party_size: int,
        duration_minutes: Optional[int] = None,
    ) -> List[Table]:
        """All tables in the restaurant that can seat the party, best fit first"""
        self._check_party_size(party_size)
        self._check_requested_datetime(requested_datetime)
        logger.debug(
            "Finding available tables",
            restaurant_id=restaurant_id,
            requested_datetime=requested_datetime.isoformat(),
            party_size=party_size,
        )
        section_ids = {s.section_id for s in self.sections.find_by_restaurant_id(restaurant_id)}
        candidates = self.tables.find_where(
            lambda t: t.section_id in section_ids and t.is_active and t.can_seat(party_size)
        )
        return self._free_tables(candidates, requested_datetime, duration_minutes)
    
    def get_available_tables_in_section(
        self,
        section_id: int,
        requested_datetime: datetime,
        party_size: int,
        duration_minutes: Optional[int] = None,
    ) -> List[Table]:
        self._check_party_size(party_size)
        self._check_requested_datetime(requested_datetime)
        candidates = [t for t in self.tables.find_active_by_section_id(section_id) if t.can_seat(party_size)]
        return self._free_tables(candidates, requested_datetime, duration_minutes)
    
    def check_table_assignment(
        self,
        table_id: int,
        requested_datetime: datetime,
        party_size: int,
        duration_minutes: Optional[int] = None,
        exclude_reservation_id: Optional[int] = None,
    ) -> Table:
        """
        Run every check a table assignment must pass and return the table.
        
        Raises EntityNotFoundError, TableInactiveError,
        InsufficientCapacityError or ReservationConflictError, in that
        order of precedence. Capacity is checked before conflicts so an
        oversized party is reported as such even when the table is free.
        """
        self._check_party_size(party_size)
        self._check_requested_datetime(requested_datetime)
        table = self.tables.find_by_id(table_id)
        if table is None:
            raise EntityNotFoundError("Table", table_id)
        if not table.is_active:
            raise TableInactiveError(table_id)
        if not table.can_seat(party_size):
            raise InsufficientCapacityError(
                f"Table capacity ({table.capacity}) insufficient for party size ({party_size})",
                required_capacity=party_size,
                available_capacity=table.capacity,
            )
        if self._has_conflict(table_id, requested_datetime, duration_minutes, exclude_reservation_id):
            raise ReservationConflictError(
                "Table is already reserved at the requested time",
                table_id=table_id,
                requested_time=requested_datetime,
            )
        return table
    
    def validate_table_assignment(
        self,
        table_id: int,
        requested_datetime: datetime,
        party_size: int,
        duration_minutes: Optional[int] = None,
        exclude_reservation_id: Optional[int] = None,
    ) -> bool:
        """Boolean form of check_table_assignment"""
        try:
            self.check_table_assignment(
                table_id, requested_datetime, party_size, duration_minutes, exclude_reservation_id
            )
        except (EntityNotFoundError, ReservationError) as e:
            logger.warning("Table assignment rejected", table_id=table_id, party_size=party_size, reason=str(e))
            return False
        return True
    
    def get_optimal_table(
        self,
        restaurant_id: int,
        requested_datetime: datetime,
        party_size: int,
        duration_minutes: Optional[int] = None,
    ) -> Optional[Table]:
        """Smallest free table that still seats the party"""
        available = self.get_available_tables(restaurant_id, requested_datetime, party_size, duration_minutes)
        if not available:
            return None
        optimal = available[0]
        logger.debug("Optimal table", table_id=optimal.table_id, capacity=optimal.capacity)
        return optimal
    
    def suggest_alternative_tables(
        self,
        table_id: int,
        requested_datetime: datetime,
        party_size: int,
        duration_minutes: Optional[int] = None,
    ) -> List[Table]:
        """
        Other tables that can take the party instead of ``table_id``:
        same-section tables first, then tables elsewhere in the restaurant,
        each group best fit first.
        """
        self._check_requested_datetime(requested_datetime)
        original = self.tables.find_by_id(table_id)
        if original is None:
            raise EntityNotFoundError("Table", table_id)
        
        same_section = [
            t
            for t in self.get_available_tables_in_section(
                original.section_id, requested_datetime, party_size, duration_minutes
            )
            if t.table_id != table_id
        ]
        section = self.sections.find_by_id(original.section_id)
        if section is None:
            return same_section
        
        elsewhere = [
            t
            for t in self.get_available_tables(
                section.restaurant_id, requested_datetime, party_size, duration_minutes
            )
            if t.section_id != original.section_id
        ]
        return same_section + elsewhere
    
    def get_available_capacity(
        self,
        restaurant_id: int,
        requested_datetime: datetime,
        duration_minutes: Optional[int] = None,
    ) -> int:
        """Sum of seats on every table free at the given time"""
        available = self.get_available_tables(restaurant_id, requested_datetime, 1, duration_minutes)
        total = sum(t.capacity for t in available)
        logger.debug("Total available capacity", restaurant_id=restaurant_id, seats=total)
        return total
    
    def _free_tables(
        self,
        candidates: List[Table],
        requested_datetime: datetime,
        duration_minutes: Optional[int],
    ) -> List[Table]:
        free = [
            t for t in candidates
            if not self._has_conflict(t.table_id, requested_datetime, duration_minutes)
        ]
        return sorted(free, key=_best_fit_order)
    
    def _has_conflict(
        self,
        table_id: int,
        requested_datetime: datetime,
        duration_minutes: Optional[int],
        exclude_reservation_id: Optional[int] = None,
    ) -> bool:
        return self.reservations.has_conflicting_reservation(
            table_id,
            requested_datetime,
            duration_minutes or self.duration_minutes,
            exclude_reservation_id,
        )
    
    @staticmethod
    def _check_requested_datetime(requested_datetime: datetime) -> None:
        if requested_datetime is None:
            raise EntityValidationError("Requested date and time is required")
        if requested_datetime.tzinfo is not None:
            raise EntityValidationError("Requested date and time must be a local time without timezone")
    
    @staticmethod
    def _check_party_size(party_size: int) -> None:
        if party_size is None or party_size <= 0:
            raise EntityValidationError("Party size must be greater than 0")
