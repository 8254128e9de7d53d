"""
Shared fixtures for the probe service tests.
"""

import pytest
from fastapi.testclient import TestClient

from elbprobe.core.config import Settings
from elbprobe.core.request_log import MemoryLogSink
from elbprobe.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(port=3000, environment="test", log_dir=tmp_path / "logs")


@pytest.fixture
def memory_sink():
    return MemoryLogSink()


@pytest.fixture
def app(settings, memory_sink):
    return create_app(settings, sink=memory_sink)


@pytest.fixture
def client(app):
    return TestClient(app)
