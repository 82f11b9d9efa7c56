"""Restaurant model"""

from typing import Optional
from pydantic import BaseModel


class Restaurant(BaseModel):
    """A restaurant that owns sections, tables and customers"""
    restaurant_id: Optional[int] = None
    name: Optional[str] = None
    location: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
