"""
Unit tests for RequestContextMiddleware timeouts.

Reads that overrun the timeout get a 504 envelope; writes are never cut off,
so a write that finishes late is still reported as it happened.
"""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from urlalias.api.middleware import RequestContextMiddleware
from urlalias.logger import discard_logger


@pytest.fixture
def slow_client():
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware, logger=discard_logger(), timeout=0.05)
    app.state.written = []

    @app.get("/slow")
    async def slow_read():
        await asyncio.sleep(1)
        return {"status": "OK"}

    @app.post("/slow")
    async def slow_write():
        await asyncio.sleep(0.2)
        app.state.written.append("done")
        return {"status": "OK"}

    return TestClient(app)


def test_slow_read_times_out(slow_client):
    resp = slow_client.get("/slow", headers={"X-Request-ID": "req-9"})
    assert resp.status_code == 504
    assert resp.json() == {"status": "Error", "error": "request timeout"}
    assert resp.headers["X-Request-ID"] == "req-9"


def test_slow_write_is_not_cut_off(slow_client):
    resp = slow_client.post("/slow")
    assert resp.status_code == 200
    assert resp.json() == {"status": "OK"}
    assert slow_client.app.state.written == ["done"]
