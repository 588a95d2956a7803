"""Fixtures for HTTP and WebSocket integration tests."""

import pytest
from fastapi.testclient import TestClient

from singularis.server import AIMonitor, create_app


@pytest.fixture
def monitor() -> AIMonitor:
    return AIMonitor(max_connections=5)


@pytest.fixture
def client(monitor: AIMonitor):
    """Test client sharing one event loop between HTTP calls and WebSockets."""
    with TestClient(create_app(monitor=monitor)) as test_client:
        yield test_client
