"""
Storage module for urlalias (in-memory implementation).

Responsibilities:
    - Store alias -> URL records with store-assigned ids
    - Enforce alias uniqueness atomically
    - Look up by alias, delete by id

Design:
    - In-memory reference implementation of the BaseStorage contract, used
      for tests and local runs.
    - A single lock guards both indexes, so the uniqueness check and the
      insert form one critical section under concurrent writers.
    - Ids come from a monotonically increasing counter and are never reused.
"""

import itertools
import threading
from typing import Dict

from .base import AliasRecord, BaseStorage
from .errors import AliasExistsError, URLNotFoundError


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty storage.

        Internal schema:
            self.by_alias = {alias: AliasRecord}
            self.by_id    = {id: alias}
        """
        self.by_alias: Dict[str, AliasRecord] = {}
        self.by_id: Dict[int, str] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def insert(self, alias: str, url: str) -> int:
        with self._lock:
            if alias in self.by_alias:
                raise AliasExistsError(f"alias {alias!r} already exists")
            record = AliasRecord(id=next(self._ids), alias=alias, url=url)
            self.by_alias[alias] = record
            self.by_id[record.id] = alias
            return record.id

    def get_url(self, alias: str) -> str:
        with self._lock:
            record = self.by_alias.get(alias)
        if record is None:
            raise URLNotFoundError(f"alias {alias!r} not found")
        return record.url

    def delete(self, record_id: int) -> None:
        with self._lock:
            alias = self.by_id.pop(record_id, None)
            if alias is None:
                raise URLNotFoundError(f"url id {record_id} not found")
            del self.by_alias[alias]

    def __len__(self) -> int:
        return len(self.by_alias)
