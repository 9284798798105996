"""Pytest configuration and fixtures for the NUI logger tests."""

import os

import pytest
from fastapi.testclient import TestClient


TEST_PIN = "4242"


def pytest_configure(config):
    """Set up test environment before any project module is imported."""
    os.environ.setdefault("NUI_LOGGER_PIN", TEST_PIN)
    os.environ.setdefault("NUI_LOGGER_LOG_LEVEL", "DEBUG")


@pytest.fixture
def make_settings(monkeypatch, tmp_path):
    """Factory building a fresh Settings from the environment.

    Keyword arguments are NUI_LOGGER_* variables without the prefix,
    e.g. make_settings(FLAT_STORAGE="true").
    """
    from configs.settings import Settings

    def _make(**env):
        monkeypatch.setenv("NUI_LOGGER_PIN", TEST_PIN)
        monkeypatch.setenv("NUI_LOGGER_LOG_DIR", str(tmp_path / "logs"))
        for name, value in env.items():
            monkeypatch.setenv(f"NUI_LOGGER_{name}", str(value))
        return Settings()

    return _make


@pytest.fixture
def test_settings(make_settings):
    return make_settings()


@pytest.fixture
def client(test_settings):
    """Unauthenticated client against a server-scoped app."""
    from runtime.api.server import create_app
    return TestClient(create_app(test_settings))


@pytest.fixture
def authed_client(client, test_settings):
    """Client already carrying the PIN cookie."""
    client.cookies.set(test_settings.cookie_name, TEST_PIN)
    return client


@pytest.fixture
def log_store(tmp_path):
    from runtime.store.log_store import LogStore
    return LogStore(log_dir=str(tmp_path / "logs"))
