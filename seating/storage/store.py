"""Generic file-backed entity store with an in-memory cache"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterable, Iterator, List, Mapping, Optional, TypeVar, Union

import structlog
from pydantic import BaseModel

from seating.codecs.base import RecordCodec
from seating.exceptions import EntityNotFoundError, EntityValidationError
from seating.storage.csv_file import CsvFile

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)


class TabularStore(Generic[T]):
    """
    CRUD and ad-hoc queries over one entity type kept in a single CSV file.
    
    The whole file is parsed into a dict keyed by id when the store is
    built. Reads are served from that dict; every mutation takes the store
    lock, builds the next snapshot, rewrites the entire file from it and only
    then swaps it in. A failed write leaves both the file and the cache in
    their previous state.
    
    Entities handed out are copies. Changing one has no effect until it is
    passed back through ``save`` or ``update``.
    """
    
    def __init__(self, path: Union[str, Path], codec: RecordCodec[T]):
        self.codec = codec
        self.file = CsvFile(path)
        self._lock = threading.RLock()
        self._cache: Dict[int, T] = {}
        self._next_id = 1
        self.file.create_if_not_exists(codec.header())
        self._load()
    
    @property
    def file_path(self) -> Path:
        return self.file.path
    
    @property
    def entity_name(self) -> str:
        return self.codec.entity_name
    
    @contextmanager
    def locked(self) -> Iterator["TabularStore[T]"]:
        """
        Hold the store lock across several calls.
        
        The lock is re-entrant, so ``save``/``update`` may be called inside
        the block. Use it for check-then-write sequences.
        """
        with self._lock:
            yield self
    
    # Writes
    
    def save(self, entity: T) -> T:
        """Insert or replace an entity, assigning the next id when it has none"""
        self.codec.to_row(entity)
        with self._lock:
            entity_id = self.codec.get_primary_key(entity)
            new_id = entity_id is None
            if new_id:
                entity_id = self._next_id
            stored = entity.model_copy(deep=True)
            self.codec.set_primary_key(stored, entity_id)
            self._before_write(stored, self._cache)
            
            snapshot = dict(self._cache)
            snapshot[entity_id] = stored
            self._commit(snapshot)
            
            self._next_id = max(self._next_id, entity_id + 1)
            if new_id:
                self.codec.set_primary_key(entity, entity_id)
        logger.debug("Saved entity", entity=self.entity_name, entity_id=entity_id)
        return entity
    
    def save_all(self, entities: Iterable[T]) -> List[T]:
        """Save several entities with a single file rewrite"""
        entities = list(entities)
        for entity in entities:
            self.codec.to_row(entity)
        with self._lock:
            snapshot = dict(self._cache)
            next_id = self._next_id
            assigned = []
            for entity in entities:
                entity_id = self.codec.get_primary_key(entity)
                if entity_id is None:
                    entity_id = next_id
                stored = entity.model_copy(deep=True)
                self.codec.set_primary_key(stored, entity_id)
                self._before_write(stored, snapshot)
                snapshot[entity_id] = stored
                next_id = max(next_id, entity_id + 1)
                assigned.append(entity_id)
            self._commit(snapshot)
            self._next_id = next_id
            for entity, entity_id in zip(entities, assigned):
                self.codec.set_primary_key(entity, entity_id)
        logger.debug("Saved entities", entity=self.entity_name, count=len(entities))
        return entities
    
    def update(self, entity: T) -> T:
        """Replace an existing entity; its id must already be in the store"""
        self.codec.to_row(entity)
        entity_id = self.codec.get_primary_key(entity)
        if entity_id is None:
            raise EntityValidationError(f"Cannot update {self.entity_name} without ID")
        with self._lock:
            if entity_id not in self._cache:
                raise EntityNotFoundError(self.entity_name, entity_id)
            stored = entity.model_copy(deep=True)
            self._before_write(stored, self._cache)
            snapshot = dict(self._cache)
            snapshot[entity_id] = stored
            self._commit(snapshot)
        logger.debug("Updated entity", entity=self.entity_name, entity_id=entity_id)
        return entity
    
    def delete_by_id(self, entity_id: int) -> bool:
        with self._lock:
            if entity_id not in self._cache:
                return False
            snapshot = dict(self._cache)
            del snapshot[entity_id]
            self._commit(snapshot)
        logger.debug("Deleted entity", entity=self.entity_name, entity_id=entity_id)
        return True
    
    def delete_all_by_id(self, entity_ids: Iterable[int]) -> int:
        with self._lock:
            snapshot = dict(self._cache)
            deleted = 0
            for entity_id in entity_ids:
                if snapshot.pop(entity_id, None) is not None:
                    deleted += 1
            if deleted:
                self._commit(snapshot)
        logger.debug("Deleted entities", entity=self.entity_name, count=deleted)
        return deleted
    
    def delete_by_fields(self, criteria: Mapping[str, Any]) -> int:
        with self._lock:
            ids = [self.codec.get_primary_key(e) for e in self.find_by_fields(criteria)]
            return self.delete_all_by_id(ids)
    
    # Reads
    
    def find_by_id(self, entity_id: int) -> Optional[T]:
        entity = self._cache.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None
    
    def find_all(self) -> List[T]:
        return self.find_where(lambda entity: True)
    
    def exists_by_id(self, entity_id: int) -> bool:
        return entity_id in self._cache
    
    def count(self) -> int:
        return len(self._cache)
    
    def find_where(self, predicate: Callable[[T], bool]) -> List[T]:
        """All entities matching ``predicate``, in id order"""
        cache = self._cache
        return [
            cache[entity_id].model_copy(deep=True)
            for entity_id in sorted(cache)
            if predicate(cache[entity_id])
        ]
    
    def find_one_where(self, predicate: Callable[[T], bool]) -> Optional[T]:
        cache = self._cache
        for entity_id in sorted(cache):
            if predicate(cache[entity_id]):
                return cache[entity_id].model_copy(deep=True)
        return None
    
    def find_by_field(self, field_name: str, value: Any) -> List[T]:
        return self.find_by_fields({field_name: value})
    
    def find_by_fields(self, criteria: Mapping[str, Any]) -> List[T]:
        """Entities whose named columns all equal the given values"""
        for field_name in criteria:
            self._check_field(field_name)
        return self.find_where(
            lambda entity: all(getattr(entity, name) == value for name, value in criteria.items())
        )
    
    def find_one_by_field(self, field_name: str, value: Any) -> Optional[T]:
        self._check_field(field_name)
        return self.find_one_where(lambda entity: getattr(entity, field_name) == value)
    
    def reload(self) -> None:
        """Discard the cache and re-read the backing file"""
        with self._lock:
            self._load()
        logger.info("Reloaded store", entity=self.entity_name, path=str(self.file_path))
    
    # Internals
    
    def _before_write(self, entity: T, snapshot: Dict[int, T]) -> None:
        """Cross-record checks run under the lock before a write; override as needed"""
    
    def _check_field(self, field_name: str) -> None:
        if field_name not in self.codec.columns:
            raise EntityValidationError(f"Unknown {self.entity_name} field: {field_name}")
    
    def _commit(self, snapshot: Dict[int, T]) -> None:
        rows = [self.codec.to_row(snapshot[entity_id]) for entity_id in sorted(snapshot)]
        self.file.write_rows(self.codec.header(), rows)
        self._cache = snapshot
    
    def _load(self) -> None:
        _, rows = self.file.read_rows()
        cache: Dict[int, T] = {}
        for line_number, row in enumerate(rows, start=2):
            if None in row:
                logger.warning(
                    "Skipping row with extra fields",
                    entity=self.entity_name,
                    path=str(self.file_path),
                    line=line_number,
                )
                continue
            try:
                entity = self.codec.from_row(row)
            except (EntityValidationError, ValueError) as e:
                logger.warning(
                    "Skipping unreadable row",
                    entity=self.entity_name,
                    path=str(self.file_path),
                    line=line_number,
                    error=str(e),
                )
                continue
            entity_id = self.codec.get_primary_key(entity)
            if entity_id is None:
                logger.warning(
                    "Skipping row without ID",
                    entity=self.entity_name,
                    path=str(self.file_path),
                    line=line_number,
                )
                continue
            if entity_id in cache:
                logger.warning(
                    "Duplicate ID in data file, keeping last row",
                    entity=self.entity_name,
                    entity_id=entity_id,
                    line=line_number,
                )
            cache[entity_id] = entity
        self._cache = cache
        self._next_id = max(self._next_id, max(cache, default=0) + 1)
        logger.debug("Loaded store", entity=self.entity_name, count=len(cache))
