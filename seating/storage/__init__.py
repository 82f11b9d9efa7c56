"""Flat-file persistence"""

from seating.storage.csv_file import CsvFile
from seating.storage.store import TabularStore

__all__ = ["CsvFile", "TabularStore"]
