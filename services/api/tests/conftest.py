"""Shared fixtures: an app bound to a throwaway SQLite store and a client for it."""

import pytest
from fastapi.testclient import TestClient

from playbook.main import create_app
from playbook.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'plays.db'}",
        cors_origins="http://localhost:5173",
        app_name="Playbook Test",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def pick_and_roll() -> dict:
    return {
        "name": "Pick and Roll",
        "playerStates": [
            {"playerId": "p1", "position": {"x": 1.0, "y": 2.0}, "timestamp": 1000},
        ],
    }
