"""Customer model"""

from typing import Optional
from pydantic import BaseModel


class Customer(BaseModel):
    """Guest profile scoped to a restaurant"""
    customer_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    allergies: Optional[str] = None
    notes: Optional[str] = None
    restaurant_id: Optional[int] = None
    
    @property
    def full_name(self) -> str:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts)
    
    @property
    def has_allergies(self) -> bool:
        return bool(self.allergies and self.allergies.strip())
