"""Customer schemas"""

from typing import Optional, List
from pydantic import BaseModel


class CustomerCreate(BaseModel):
    """Create customer request"""
    first_name: str
    last_name: str
    email: str
    phone: str
    allergies: Optional[str] = None
    notes: Optional[str] = None
    restaurant_id: Optional[int] = None


class CustomerUpdate(BaseModel):
    """Update customer request"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    allergies: Optional[str] = None
    notes: Optional[str] = None
    
    def has_updates(self) -> bool:
        return bool(self.model_dump(exclude_none=True))


class CustomerResponse(BaseModel):
    """Customer response"""
    customer_id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    allergies: Optional[str]
    notes: Optional[str]
    restaurant_id: Optional[int]


class CustomerListResponse(BaseModel):
    """Customer list"""
    items: List[CustomerResponse]
    total: int
