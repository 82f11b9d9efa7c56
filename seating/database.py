"""Store wiring: one store per entity type, built from settings"""

from fastapi import Request

from seating.config import Settings
from seating.repositories import (
    CustomerRepository,
    ReservationRepository,
    RestaurantRepository,
    SectionRepository,
    TableRepository,
)
from seating.services.availability import AvailabilityService
from seating.services.customers import CustomerService
from seating.services.reservations import ReservationService


class Database:
    """Owns the stores and the services built on them"""
    
    def __init__(self, settings: Settings):
        self.settings = settings
        self.restaurants = RestaurantRepository(settings.data_path(settings.restaurants_file))
        self.sections = SectionRepository(settings.data_path(settings.sections_file))
        self.tables = TableRepository(settings.data_path(settings.tables_file))
        self.customers = CustomerRepository(settings.data_path(settings.customers_file))
        self.reservations = ReservationRepository(
            settings.data_path(settings.reservations_file),
            default_duration_minutes=settings.reservation_duration_minutes,
        )
        
        self.availability = AvailabilityService(
            tables=self.tables,
            sections=self.sections,
            reservations=self.reservations,
            duration_minutes=settings.reservation_duration_minutes,
        )
        self.reservation_service = ReservationService(
            reservations=self.reservations,
            customers=self.customers,
            restaurants=self.restaurants,
            tables=self.tables,
            sections=self.sections,
            availability=self.availability,
            duration_minutes=settings.reservation_duration_minutes,
            past_tolerance_minutes=settings.past_reservation_tolerance_minutes,
        )
        self.customer_service = CustomerService(customers=self.customers, restaurants=self.restaurants)
    
    def reload(self) -> None:
        for store in (self.restaurants, self.sections, self.tables, self.customers, self.reservations):
            store.reload()


def get_db(request: Request) -> Database:
    """Dependency to get the application's stores"""
    return request.app.state.db
