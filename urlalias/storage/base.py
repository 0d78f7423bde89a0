"""
Base storage interface for urlalias.

Purpose:
    Define a small, stable contract that storage backends (in-memory,
    PostgreSQL) implement, so the AliasStore never changes when the
    backend does.

Contract:
    - `insert` is the only write and must be atomic: either the record is
      stored under a fresh id, or AliasExistsError is raised and nothing
      changes. A check followed by a separate insert does not qualify.
    - Not-found conditions raise URLNotFoundError.
    - Any other backend failure raises StorageError with the cause chained.

Testing & Coverage:
    Abstract methods are annotated with `# pragma: no cover`; they are never
    executed directly.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AliasRecord:
    """A stored alias -> URL mapping."""

    id: int
    alias: str
    url: str


class BaseStorage(ABC):
    """Abstract base class for storage backends."""

    @abstractmethod  # pragma: no cover
    def insert(self, alias: str, url: str) -> int:
        """
        Store `alias -> url` if the alias is free.

        Returns:
            int: The id assigned to the new record.

        Raises:
            AliasExistsError: If a live record already uses `alias`.
            StorageError: On any other backend failure.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def get_url(self, alias: str) -> str:
        """
        Return the URL mapped by `alias`.

        Raises:
            URLNotFoundError: If no live record matches.
            StorageError: On backend failure.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete(self, record_id: int) -> None:
        """
        Remove the record with `record_id`.

        Raises:
            URLNotFoundError: If no record has that id.
            StorageError: On backend failure.
        """
        raise NotImplementedError

    def init_schema(self) -> None:
        """Create backend objects (tables, indexes) if needed."""

    def close(self) -> None:
        """Release backend resources."""
