"""
Shared fixtures: an isolated store and a test client wired to it.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from date_planner_api.app.main import create_app
from date_planner_api.app.services.storage import MemStorage


@pytest.fixture()
def storage() -> MemStorage:
    return MemStorage()


@pytest.fixture()
def client(storage):
    with TestClient(create_app(storage=storage)) as test_client:
        yield test_client
