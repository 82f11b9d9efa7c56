"""Customer profile management"""

from typing import List, Optional

import structlog

from seating.exceptions import EntityNotFoundError, EntityValidationError
from seating.models.customer import Customer
from seating.repositories.customer import CustomerRepository
from seating.repositories.restaurant import RestaurantRepository
from seating.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate

logger = structlog.get_logger()


class CustomerService:
    """Customer CRUD; email uniqueness is enforced by the store"""
    
    def __init__(self, customers: CustomerRepository, restaurants: Optional[RestaurantRepository] = None):
        self.customers = customers
        self.restaurants = restaurants
    
    def create_customer(self, request: CustomerCreate) -> Customer:
        if request.restaurant_id is not None:
            self._check_restaurant(request.restaurant_id)
        customer = Customer(**request.model_dump())
        customer = self.customers.save(customer)
        logger.info(
            "Created customer",
            customer_id=customer.customer_id,
            name=customer.full_name,
        )
        return customer
    
    def update_customer(self, customer_id: int, request: CustomerUpdate) -> Customer:
        if not request.has_updates():
            raise EntityValidationError("No fields to update")
        with self.customers.locked():
            customer = self.get_customer(customer_id)
            if customer is None:
                raise EntityNotFoundError("Customer", customer_id)
            for field, value in request.model_dump(exclude_none=True).items():
                setattr(customer, field, value)
            customer = self.customers.update(customer)
        logger.info("Updated customer", customer_id=customer_id)
        return customer
    
    def delete_customer(self, customer_id: int) -> None:
        """Remove the profile; reservations that reference it are left untouched"""
        if not self.customers.delete_by_id(customer_id):
            raise EntityNotFoundError("Customer", customer_id)
        logger.info("Deleted customer", customer_id=customer_id)
    
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        return self.customers.find_by_id(customer_id)
    
    def get_customer_by_email(self, email: str) -> Optional[Customer]:
        return self.customers.find_by_email(email)
    
    def search_customers(self, search_term: Optional[str]) -> List[Customer]:
        return self.customers.search_by_name(search_term)
    
    def get_all_customers(self) -> List[Customer]:
        return self.customers.find_all()
    
    def get_customers_with_allergies(self) -> List[Customer]:
        return self.customers.find_with_allergies()
    
    def get_customers_by_last_name(self, last_name: str) -> List[Customer]:
        return self.customers.find_by_last_name(last_name)
    
    def to_response(self, customer: Customer) -> CustomerResponse:
        return CustomerResponse(**customer.model_dump(), full_name=customer.full_name)
    
    def to_responses(self, customers: List[Customer]) -> List[CustomerResponse]:
        return [self.to_response(c) for c in customers]
    
    def _check_restaurant(self, restaurant_id: int) -> None:
        if self.restaurants is not None and not self.restaurants.exists_by_id(restaurant_id):
            raise EntityNotFoundError("Restaurant", restaurant_id)
