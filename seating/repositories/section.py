"""Section store"""

from pathlib import Path
from typing import List, Optional, Union

from seating.codecs.section import SectionCodec
from seating.models.section import Section
from seating.storage.store import TabularStore


class SectionRepository(TabularStore[Section]):
    def __init__(self, path: Union[str, Path]):
        super().__init__(path, SectionCodec())
    
    def find_by_restaurant_id(self, restaurant_id: int) -> List[Section]:
        return self.find_by_field("restaurant_id", restaurant_id)
    
    def find_by_name(self, name: str) -> List[Section]:
        return self.find_by_field("name", name)
    
    def find_one_by_restaurant_id_and_name(self, restaurant_id: int, name: str) -> Optional[Section]:
        matches = self.find_by_fields({"restaurant_id": restaurant_id, "name": name})
        return matches[0] if matches else None
    
    def count_by_restaurant_id(self, restaurant_id: int) -> int:
        return len(self.find_by_restaurant_id(restaurant_id))
    
    def delete_by_restaurant_id(self, restaurant_id: int) -> int:
        return self.delete_by_fields({"restaurant_id": restaurant_id})
