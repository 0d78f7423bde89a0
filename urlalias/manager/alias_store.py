"""
AliasStore module for urlalias.

Responsibilities:
    - Create alias -> URL records, with a caller-chosen or generated alias
    - Resolve aliases to URLs
    - Delete records by id
    - Validate inputs before they reach storage

Design notes:
    - Storage, candidate generator and logger are injected; the store keeps
      no mutable state of its own, so it is safe to share across requests.
    - Uniqueness comes from the storage backend's atomic insert. The store
      never checks for an alias before inserting it.
    - Generated aliases: a bounded retry loop. Each collision discards the
      candidate and asks the generator for a new one of the same length.
      After `max_attempts` collisions the store gives up with
      AliasSpaceExhaustedError.
    - Explicit aliases: a single insert attempt; a collision is reported to
      the caller as AliasExistsError.
"""

import logging
import re
from typing import FrozenSet, Iterable, Optional

from ..storage.base import AliasRecord, BaseStorage
from ..storage.errors import (
    AliasExistsError,
    AliasSpaceExhaustedError,
    InvalidInputError,
)
from .strategies import BaseStrategy, RandomStrategy

ALIAS_PATTERN = re.compile(r"^[0-9a-zA-Z]+$")
MAX_ALIAS_LENGTH = 32

DEFAULT_ALIAS_LENGTH = 6
DEFAULT_MAX_ATTEMPTS = 10


def validate_alias(alias: str, reserved: FrozenSet[str] = frozenset()) -> None:
    """
    Validate alias characters and length (Base62 only, at most 32 chars),
    and that it is not one of the `reserved` names.

    Raises:
        InvalidInputError: If the alias is malformed.
    """
    if not ALIAS_PATTERN.match(alias):
        raise InvalidInputError("alias must contain only 0-9a-zA-Z")
    if len(alias) > MAX_ALIAS_LENGTH:
        raise InvalidInputError("alias too long")
    if alias in reserved:
        raise InvalidInputError(f"alias {alias!r} is reserved")


class AliasStore:
    """
    Uniqueness-enforcing mapping from alias to URL.

    Args:
        storage (BaseStorage): Backend holding the records.
        generator (Optional[BaseStrategy]): Candidate source for generated aliases.
        alias_length (int): Length of generated aliases.
        max_attempts (int): Insert attempts before giving up on generated aliases.
        logger (Optional[logging.Logger]): Logger for store operations.
        reserved (Iterable[str]): Aliases that must never be stored, e.g. names
            shadowed by fixed HTTP routes. Generated candidates hitting one are
            discarded like collisions.
    """

    def __init__(
        self,
        storage: BaseStorage,
        generator: Optional[BaseStrategy] = None,
        alias_length: int = DEFAULT_ALIAS_LENGTH,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        logger: Optional[logging.Logger] = None,
        reserved: Iterable[str] = (),
    ):
        if not 1 <= alias_length <= MAX_ALIAS_LENGTH:
            raise ValueError(f"alias_length must be within 1..{MAX_ALIAS_LENGTH}")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.storage = storage
        self.generator = generator or RandomStrategy()
        self.alias_length = alias_length
        self.max_attempts = max_attempts
        self.log = logger or logging.getLogger(__name__)
        self.reserved = frozenset(reserved)

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def save(self, url: str, alias: str = "") -> str:
        """
        Store `url` under `alias`, or under a generated alias when `alias` is empty.

        Returns:
            str: The alias actually stored.

        Raises:
            InvalidInputError: Empty URL or malformed alias.
            AliasExistsError: The explicit alias is taken.
            AliasSpaceExhaustedError: Every generated candidate collided.
            StorageError: Any other storage failure.
        """
        return self.create(url, alias).alias

    def create(self, url: str, alias: str = "") -> AliasRecord:
        """Same as `save`, but return the whole record, including its id."""
        if not url:
            raise InvalidInputError("url is required")

        if alias:
            validate_alias(alias, self.reserved)
            record_id = self.storage.insert(alias, url)
            self.log.info("url saved", extra={"op": "alias_store.create", "alias": alias, "id": record_id})
            return AliasRecord(id=record_id, alias=alias, url=url)

        return self._create_generated(url)

    def get(self, alias: str) -> str:
        """
        Return the URL stored under `alias`.

        Raises:
            InvalidInputError: Empty alias.
            URLNotFoundError: No record matches.
            StorageError: Storage failure.
        """
        if not alias:
            raise InvalidInputError("alias is required")
        return self.storage.get_url(alias)

    def delete(self, record_id: int) -> None:
        """
        Remove the record with `record_id`.

        Raises:
            URLNotFoundError: No record has that id (including one already deleted).
            StorageError: Storage failure.
        """
        self.storage.delete(record_id)
        self.log.info("url deleted", extra={"op": "alias_store.delete", "id": record_id})

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------
    def _create_generated(self, url: str) -> AliasRecord:
        op = "alias_store.create_generated"
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator.generate(self.alias_length)
            if candidate in self.reserved:
                self.log.debug("reserved alias generated", extra={"op": op, "alias": candidate, "attempt": attempt})
                continue
            try:
                record_id = self.storage.insert(candidate, url)
            except AliasExistsError:
                self.log.debug("alias collision", extra={"op": op, "alias": candidate, "attempt": attempt})
                continue
            self.log.info("url saved", extra={"op": op, "alias": candidate, "id": record_id, "attempt": attempt})
            return AliasRecord(id=record_id, alias=candidate, url=url)

        self.log.warning("alias space exhausted", extra={"op": op, "attempts": self.max_attempts})
        raise AliasSpaceExhaustedError(
            f"no free alias of length {self.alias_length} after {self.max_attempts} attempts"
        )
