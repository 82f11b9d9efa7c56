"""Restaurant store"""

from pathlib import Path
from typing import List, Union

from seating.codecs.restaurant import RestaurantCodec
from seating.models.restaurant import Restaurant
from seating.storage.store import TabularStore


class RestaurantRepository(TabularStore[Restaurant]):
    def __init__(self, path: Union[str, Path]):
        super().__init__(path, RestaurantCodec())
    
    def find_by_name(self, name: str) -> List[Restaurant]:
        return self.find_by_field("name", name)
