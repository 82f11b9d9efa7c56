"""Customer record codec"""

from typing import Mapping, Optional

from seating.codecs.base import RecordCodec, optional_text
from seating.models.customer import Customer


class CustomerCodec(RecordCodec[Customer]):
    entity_name = "Customer"
    columns = [
        "customer_id",
        "first_name",
        "last_name",
        "email",
        "phone",
        "allergies",
        "notes",
        "restaurant_id",
    ]
    primary_key_field = "customer_id"
    
    def decode(self, row: Mapping[str, Optional[str]]) -> Customer:
        return Customer(
            customer_id=self._optional_int(row, "customer_id"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            email=row.get("email"),
            phone=row.get("phone"),
            allergies=optional_text(row.get("allergies")),
            notes=optional_text(row.get("notes")),
            restaurant_id=self._optional_int(row, "restaurant_id"),
        )
    
    def validate_entity(self, entity: Customer) -> None:
        self._require_attr(entity, "first_name")
        self._require_attr(entity, "last_name")
        email = self._require_attr(entity, "email")
        self._check_email(email)
        self._require_attr(entity, "phone")
    
    def validate_row(self, row: Mapping[str, Optional[str]]) -> None:
        self._check_optional_id(row, "customer_id")
        self._require_text(row, "first_name")
        self._require_text(row, "last_name")
        self._check_email(self._require_text(row, "email"))
        self._require_text(row, "phone")
        self._check_optional_id(row, "restaurant_id")
