"""
Shared fixtures: isolated app instances and in-memory state.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from core.state_manager import AppState
from main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(min_password_length=6, debug=False)


@pytest.fixture
def state(settings) -> AppState:
    return AppState(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
