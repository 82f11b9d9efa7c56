"""Restaurant record codec"""

from typing import Mapping, Optional

from seating.codecs.base import RecordCodec, is_blank, optional_text
from seating.models.restaurant import Restaurant


class RestaurantCodec(RecordCodec[Restaurant]):
    entity_name = "Restaurant"
    columns = ["restaurant_id", "name", "location", "contact_email", "contact_phone"]
    primary_key_field = "restaurant_id"
    
    def decode(self, row: Mapping[str, Optional[str]]) -> Restaurant:
        return Restaurant(
            restaurant_id=self._optional_int(row, "restaurant_id"),
            name=row.get("name"),
            location=optional_text(row.get("location")),
            contact_email=optional_text(row.get("contact_email")),
            contact_phone=optional_text(row.get("contact_phone")),
        )
    
    def validate_entity(self, entity: Restaurant) -> None:
        self._require_attr(entity, "name")
        if not is_blank(entity.contact_email):
            self._check_email(entity.contact_email, "contact_email")
    
    def validate_row(self, row: Mapping[str, Optional[str]]) -> None:
        self._check_optional_id(row, "restaurant_id")
        self._require_text(row, "name")
        email = row.get("contact_email")
        if not is_blank(email):
            self._check_email(email, "contact_email")
