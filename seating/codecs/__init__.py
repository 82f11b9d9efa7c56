"""Record codecs, one per entity type"""

from seating.codecs.base import RecordCodec, Row, EMAIL_PATTERN
from seating.codecs.restaurant import RestaurantCodec
from seating.codecs.section import SectionCodec
from seating.codecs.table import TableCodec
from seating.codecs.customer import CustomerCodec
from seating.codecs.reservation import ReservationCodec

__all__ = [
    "RecordCodec",
    "Row",
    "EMAIL_PATTERN",
    "RestaurantCodec",
    "SectionCodec",
    "TableCodec",
    "CustomerCodec",
    "ReservationCodec",
]
