"""
Error taxonomy for the alias store.

Backends raise these; the AliasStore passes them through (except a
generated-alias collision, which it retries); HTTP handlers map them to
responses.

    AliasStoreError
    ├── InvalidInputError
    ├── URLNotFoundError
    ├── AliasExistsError
    ├── AliasSpaceExhaustedError
    └── StorageError
"""


class AliasStoreError(Exception):
    """Base class for every error raised by the alias store."""


class InvalidInputError(AliasStoreError, ValueError):
    """Caller passed an empty URL or a malformed alias."""


class URLNotFoundError(AliasStoreError):
    """No live record matches the requested alias or id."""


class AliasExistsError(AliasStoreError):
    """The alias is already mapped by a live record."""


class AliasSpaceExhaustedError(AliasStoreError):
    """Every generated candidate collided within the retry budget."""


class StorageError(AliasStoreError):
    """
    Opaque failure of the underlying storage.

    The original exception is chained as `__cause__`; `op` names the
    storage operation that failed.
    """

    def __init__(self, op: str, message: str = "storage failure"):
        super().__init__(f"{op}: {message}")
        self.op = op
