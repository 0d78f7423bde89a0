"""
Global pytest fixtures for the urlalias test suite.

Responsibilities:
    - Provide isolated in-memory Storage and an AliasStore wired to it
    - Provide a scripted candidate generator for deterministic alias tests
    - Provide a fresh FastAPI TestClient via the app factory for integration tests

Why an app factory?
    `create_app()` takes settings, storage and generator as arguments, so each
    test gets fresh in-memory state and no environment is required.
"""

from typing import Iterable, List

import pytest
from fastapi.testclient import TestClient

from main import create_app
from urlalias.config import Settings
from urlalias.logger import discard_logger
from urlalias.manager.alias_store import AliasStore
from urlalias.manager.strategies import BaseStrategy
from urlalias.storage.storage import Storage

TEST_USER = "tester"
TEST_PASSWORD = "s3cret"


class ScriptedStrategy(BaseStrategy):
    """Returns the given candidates in order; records every requested length."""

    def __init__(self, candidates: Iterable[str]):
        self._candidates = iter(candidates)
        self.lengths: List[int] = []

    def generate(self, length: int) -> str:
        self.lengths.append(length)
        return next(self._candidates)

    @property
    def calls(self) -> int:
        return len(self.lengths)


@pytest.fixture
def scripted():
    """Factory fixture: scripted(["abc123", ...]) -> ScriptedStrategy."""
    return ScriptedStrategy


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory storage backend."""
    return Storage()


@pytest.fixture
def alias_store(storage: Storage) -> AliasStore:
    """AliasStore over the storage fixture, with random candidates and a silent logger."""
    return AliasStore(storage=storage, logger=discard_logger())


@pytest.fixture
def settings() -> Settings:
    return Settings(http_user=TEST_USER, http_password=TEST_PASSWORD)


@pytest.fixture
def auth():
    """Valid basic-auth credentials for write routes."""
    return (TEST_USER, TEST_PASSWORD)


@pytest.fixture
def client(settings: Settings, storage: Storage) -> TestClient:
    """Fresh TestClient over the storage fixture."""
    app = create_app(settings=settings, storage=storage, logger=discard_logger())
    return TestClient(app)
