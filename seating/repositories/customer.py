"""Customer store"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from seating.codecs.customer import CustomerCodec
from seating.exceptions import DuplicateEmailError
from seating.models.customer import Customer
from seating.storage.store import TabularStore


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class CustomerRepository(TabularStore[Customer]):
    """Customers keyed by id; emails are unique across the store, ignoring case"""
    
    def __init__(self, path: Union[str, Path]):
        super().__init__(path, CustomerCodec())
    
    def find_by_email(self, email: str) -> Optional[Customer]:
        wanted = _normalize_email(email)
        return self.find_one_where(lambda c: _normalize_email(c.email) == wanted)
    
    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None
    
    def find_by_last_name(self, last_name: str) -> List[Customer]:
        return self.find_by_field("last_name", last_name)
    
    def find_by_phone(self, phone: str) -> List[Customer]:
        return self.find_by_field("phone", phone)
    
    def find_by_restaurant_id(self, restaurant_id: int) -> List[Customer]:
        return self.find_by_field("restaurant_id", restaurant_id)
    
    def search_by_name(self, search_term: Optional[str]) -> List[Customer]:
        """Case-insensitive substring match on first, last or full name"""
        if not search_term or not search_term.strip():
            return self.find_all()
        term = search_term.strip().lower()
        return self.find_where(
            lambda c: term in (c.first_name or "").lower()
            or term in (c.last_name or "").lower()
            or term in c.full_name.lower()
        )
    
    def find_by_allergy(self, allergy: Optional[str]) -> List[Customer]:
        if not allergy or not allergy.strip():
            return []
        term = allergy.strip().lower()
        return self.find_where(lambda c: term in (c.allergies or "").lower())
    
    def find_with_allergies(self) -> List[Customer]:
        return self.find_where(lambda c: c.has_allergies)
    
    def find_with_notes(self) -> List[Customer]:
        return self.find_where(lambda c: bool(c.notes and c.notes.strip()))
    
    def _before_write(self, entity: Customer, snapshot: Dict[int, Customer]) -> None:
        email = _normalize_email(entity.email)
        for customer_id, other in snapshot.items():
            if customer_id != entity.customer_id and _normalize_email(other.email) == email:
                raise DuplicateEmailError(entity.email)
