"""
Pytest fixtures for qa-scaffold unit tests.

This module provides a clean environment, loaded settings and fake
Playwright objects so unit tests need neither a browser nor a network.
"""

import pytest

from qa_scaffold.config import Settings, get_settings, load_settings

from .fakes import FakeBrowser, FakeBrowserContext, FakePage, FakeRequestContext

CONFIG_VARIABLES = (
    "BASE_URL",
    "API_BASE_URL",
    "MAIN_USER_LOGIN",
    "MAIN_USER_PASSWORD",
    "API_FALLBACK_TOKEN",
    "QA_ENV_FILE",
    "E2E_BROWSER",
    "E2E_HEADLESS",
    "E2E_SLOW_MO",
    "E2E_TIMEOUT",
    "E2E_EXPECT_TIMEOUT",
    "E2E_VIEWPORT_WIDTH",
    "E2E_VIEWPORT_HEIGHT",
    "E2E_TEST_ID_ATTRIBUTE",
    "E2E_SCREENSHOT_ON_FAILURE",
    "E2E_RESULTS_DIR",
    "LOG_LEVEL",
    "LOG_FORMAT",
)

VALID_ENV = {
    "BASE_URL": "https://x.test",
    "API_BASE_URL": "https://x.test/api",
    "MAIN_USER_LOGIN": "u@x.test",
    "MAIN_USER_PASSWORD": "p",
}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Remove every variable the settings read and work from an empty directory.

    Yields the monkeypatch so tests can set the variables they need.
    """
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def valid_env(clean_env):
    """Environment with every required variable set."""
    for name, value in VALID_ENV.items():
        clean_env.setenv(name, value)
    return clean_env


@pytest.fixture
def loaded_settings(valid_env) -> Settings:
    return load_settings()


@pytest.fixture
def fake_request_context() -> FakeRequestContext:
    return FakeRequestContext()


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_browser_context() -> FakeBrowserContext:
    return FakeBrowserContext()


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()
