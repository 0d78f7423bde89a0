"""
Storage factory – switch storage backend from config
====================================================

Centralizes selection of the storage backend (in-memory vs PostgreSQL) so
the rest of the app stays ignorant of where data lives.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- URLALIAS_STORAGE_BACKEND: "memory" (default) or "postgres"
- URLALIAS_DB_DSN:          DSN string if backend == "postgres"
"""

import logging
import os
from typing import Optional

from urlalias.storage.base import BaseStorage
from urlalias.storage.storage import Storage

log = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None, **kwargs) -> BaseStorage:
    """
    Return a storage backend based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads URLALIAS_STORAGE_BACKEND.
    kwargs : dict
        Extra args for the backend constructor. For postgres, use dsn="...".

    Raises
    ------
    ValueError
        If the backend is unknown, or postgres is selected without a DSN.
    """
    be = (backend or os.getenv("URLALIAS_STORAGE_BACKEND", "memory")).strip().lower()
    log.debug("selected storage backend: %s", be)

    if be == "memory":
        return Storage()

    if be == "postgres":
        dsn = kwargs.pop("dsn", None) or os.getenv("URLALIAS_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env URLALIAS_DB_DSN)")
        # Local import to avoid loading psycopg when not using postgres
        from urlalias.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn, **kwargs)

    raise ValueError(f"Unknown storage backend: {be!r}")
