"""
Pytest configuration and fixtures for conlog tests
"""

import pytest

from conlog import default
from conlog.core.config.settings import Settings, reset_settings
from conlog.testing import LogSpy

# Variables read by Settings; cleared so the host environment can't leak in
SETTINGS_ENV = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_EXPANDED",
    "LOG_MODE",
    "LOG_RAW",
    "LOG_OBJECT_DEPTH",
    "DIAGNOSTIC_LOG_LEVEL",
    "DIAGNOSTIC_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate every test from environment variables, .env files and the default logger"""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    default.reset()
    yield
    default.reset()
    reset_settings()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with everything enabled: trace threshold, plain output"""
    return Settings(ENVIRONMENT="development", LOG_LEVEL="trace")


@pytest.fixture
def spy() -> LogSpy:
    """Silent recording sink"""
    return LogSpy()


@pytest.fixture
def valid_object():
    """Nested payload used by expansion tests"""
    return {"foo": "bar", "baz": [{"hello": "world"}, {"good": "night"}]}
