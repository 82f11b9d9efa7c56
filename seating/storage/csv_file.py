"""Atomic whole-file CSV reads and writes"""

import csv
import os
import shutil
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import structlog

from seating.exceptions import StorageError

logger = structlog.get_logger()

RawRow = Dict[Optional[str], Optional[str]]


class CsvFile:
    """
    A delimited file with a header row.
    
    Writes never touch the target in place: the new contents go to a
    sibling temp file which is then renamed over the original, so readers
    see either the old or the new complete file. The previous contents are
    kept as a ``.bak`` copy and restored if the write fails.
    """
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.backup_path = self.path.with_name(self.path.name + ".bak")
        self.temp_path = self.path.with_name(self.path.name + ".tmp")
        self._lock = threading.Lock()
    
    def exists(self) -> bool:
        return self.path.exists()
    
    def create_if_not_exists(self, header: Sequence[str]) -> bool:
        """Create the file holding only the header row; returns True if created"""
        with self._lock:
            if self.path.exists():
                return False
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._write(header, [])
            except OSError as e:
                raise StorageError(f"Failed to create file: {self.path}") from e
        logger.info("Created data file", path=str(self.path))
        return True
    
    def read_rows(self) -> Tuple[List[str], List[RawRow]]:
        """
        Read the header and every data row.
        
        Rows with more fields than the header keep the surplus under the
        ``None`` key; rows with fewer fields have ``None`` values. Callers
        decide what to do with such rows.
        """
        with self._lock:
            try:
                with open(self.path, newline="", encoding="utf-8") as f:
                    reader = csv.DictReader(f)
                    rows = [row for row in reader if any(v for k, v in row.items() if k is not None)]
                    header = list(reader.fieldnames or [])
            except FileNotFoundError:
                return [], []
            except (OSError, csv.Error, UnicodeDecodeError) as e:
                raise StorageError(f"Failed to read file: {self.path}") from e
        logger.debug("Read data file", path=str(self.path), rows=len(rows))
        return header, rows
    
    def write_rows(self, header: Sequence[str], rows: Sequence[Dict[str, str]]) -> None:
        """Replace the whole file with ``header`` followed by ``rows``"""
        with self._lock:
            try:
                if self.path.exists():
                    shutil.copy2(self.path, self.backup_path)
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._write(header, rows)
            except OSError as e:
                self._restore_backup()
                raise StorageError(f"Failed to write file: {self.path}") from e
        logger.debug("Wrote data file", path=str(self.path), rows=len(rows))
    
    def delete(self) -> None:
        with self._lock:
            try:
                for path in (self.path, self.backup_path, self.temp_path):
                    if path.exists():
                        path.unlink()
            except OSError as e:
                raise StorageError(f"Failed to delete file: {self.path}") from e
    
    def _write(self, header: Sequence[str], rows: Sequence[Dict[str, str]]) -> None:
        with open(self.temp_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(header), extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)
            f.flush()
            os.fsync(f.fileno())
        os.replace(self.temp_path, self.path)
    
    def _restore_backup(self) -> None:
        try:
            if self.temp_path.exists():
                self.temp_path.unlink()
            if self.backup_path.exists():
                shutil.copy2(self.backup_path, self.path)
                logger.info("Restored data file from backup", path=str(self.path))
        except OSError as e:
            logger.error("Failed to restore from backup", path=str(self.path), error=str(e))
