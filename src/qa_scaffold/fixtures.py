"""
Pytest fixtures for Playwright E2E and API tests.

Register the plugin from the top-level ``conftest.py``::

    pytest_plugins = ["qa_scaffold.fixtures"]

Every fixture below the session level is built lazily for the test that
requests it and torn down after that test, whether it passed or not.
Browser fixtures share the session event loop, so async tests using them
are marked ``@pytest.mark.asyncio(loop_scope="session")``.
"""

import logging
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from playwright.async_api import (
    APIRequestContext,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
    expect,
)

from .api import ENDPOINTS, ApiSession, Endpoints, TemplateApiClient
from .config import Settings, get_settings
from .exceptions import ConfigurationError
from .logging_config import setup_logging
from .resources import (
    AuthenticatedClient,
    authenticated_api_client,
    discard_video,
    logged_in_page,
    open_api_request_context,
    open_browser_context,
    open_page,
    stop_tracing,
)
from .web import PageManager, TemplatePageManager, navigate_to

logger = logging.getLogger(__name__)


# =============================================================================
# Hooks
# =============================================================================

def pytest_addoption(parser) -> None:
    group = parser.getgroup("qa-scaffold")
    group.addoption(
        "--env-file",
        action="store",
        default=None,
        help="Path to the .env file (default: $QA_ENV_FILE or ./.env)",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run tests marked e2e against a live application",
    )


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "e2e: browser or live API test, needs --run-e2e"
    )


def pytest_sessionstart(session) -> None:
    """Validate the environment up front when live tests are requested."""
    if session.config.getoption("--run-e2e"):
        _load_settings_or_exit(session.config)


def pytest_collection_modifyitems(config, items) -> None:
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --run-e2e")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store the report of each phase on the item for failure screenshots."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _load_settings_or_exit(config) -> Settings:
    try:
        loaded = get_settings(config.getoption("--env-file"))
    except ConfigurationError as e:
        pytest.exit(f"Environment configuration error: {e}",
                    returncode=pytest.ExitCode.USAGE_ERROR)
    setup_logging(loaded.logging)
    return loaded


def _test_failed(request: pytest.FixtureRequest) -> bool:
    reports = (getattr(request.node, f"rep_{when}", None) for when in ("setup", "call"))
    return any(rep is not None and rep.failed for rep in reports)


def _artifact_name(request: pytest.FixtureRequest) -> str:
    return "".join(
        c if c.isalnum() or c in "-_" else "_" for c in request.node.name)


async def _screenshot_on_failure(
    request: pytest.FixtureRequest, page: Page, settings: Settings
) -> None:
    if not (settings.browser.screenshot_on_failure and _test_failed(request)):
        return
    screenshots_dir: Path = settings.browser.screenshots_dir
    screenshots_dir.mkdir(parents=True, exist_ok=True)
    path = screenshots_dir / f"{_artifact_name(request)}.png"
    await page.screenshot(path=str(path), full_page=True)
    logger.info("Saved failure screenshot to %s", path)


async def _finish_trace(
    request: pytest.FixtureRequest, context: BrowserContext, settings: Settings
) -> None:
    """Keep the trace of a failed test, discard it otherwise."""
    if not settings.browser.trace:
        return
    path = None
    if _test_failed(request):
        path = settings.browser.traces_dir / f"{_artifact_name(request)}.zip"
    await stop_tracing(context, path)


async def _finish_video(
    request: pytest.FixtureRequest, page: Page, settings: Settings
) -> None:
    """Delete the video of a closed page unless its test failed."""
    if settings.browser.record_video and not _test_failed(request):
        await discard_video(page)


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="session")
def settings(pytestconfig) -> Settings:
    """
    Validated settings, loaded once per session.

    A configuration error stops the whole run before any test body runs.
    """
    return _load_settings_or_exit(pytestconfig)


@pytest.fixture(scope="session")
def endpoints() -> Endpoints:
    """The endpoint registry shared by API clients."""
    return ENDPOINTS


# =============================================================================
# Playwright
# =============================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def playwright_instance() -> AsyncGenerator[Playwright, None]:
    """Create a Playwright instance for the test session."""
    async with async_playwright() as pw:
        yield pw


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_instance(
    playwright_instance: Playwright, settings: Settings
) -> AsyncGenerator[Browser, None]:
    """Launch the configured browser (``E2E_BROWSER``) once per session."""
    playwright_instance.selectors.set_test_id_attribute(
        settings.browser.test_id_attribute)
    expect.set_options(timeout=settings.browser.expect_timeout)

    browser = await getattr(playwright_instance, settings.browser.browser).launch(
        headless=settings.browser.headless,
        slow_mo=settings.browser.slow_mo,
    )
    yield browser
    await browser.close()


@pytest_asyncio.fixture(loop_scope="session")
async def browser_context(
    request: pytest.FixtureRequest,
    browser_instance: Browser,
    settings: Settings,
) -> AsyncGenerator[BrowserContext, None]:
    """A fresh browser context for each test."""
    async with open_browser_context(browser_instance, settings.browser) as context:
        yield context
        await _finish_trace(request, context, settings)


# =============================================================================
# Pages
# =============================================================================

@pytest_asyncio.fixture(loop_scope="session")
async def basic_page(
    request: pytest.FixtureRequest,
    browser_context: BrowserContext,
    settings: Settings,
) -> AsyncGenerator[Page, None]:
    """
    A page opened at ``BASE_URL``.

    Use it to build page managers rather than directly in tests.
    """
    async with open_page(browser_context) as page:
        await navigate_to(page, settings.env.base_url)
        yield page
        await _screenshot_on_failure(request, page, settings)
    await _finish_video(request, page, settings)


@pytest_asyncio.fixture(loop_scope="session")
async def logged_user_page(
    request: pytest.FixtureRequest,
    browser_instance: Browser,
    settings: Settings,
) -> AsyncGenerator[Page, None]:
    """
    A page in its own context with the main user logged in.

    Use it to build page managers rather than directly in tests.
    """
    async with open_browser_context(browser_instance, settings.browser) as context:
        async with logged_in_page(context, settings) as page:
            yield page
            await _screenshot_on_failure(request, page, settings)
        await _finish_video(request, page, settings)
        await _finish_trace(request, context, settings)


# =============================================================================
# Page Managers
# =============================================================================

@pytest.fixture
def base_page_manager(basic_page: Page) -> PageManager:
    """Page manager for shared, page-level interactions."""
    return PageManager(basic_page)


@pytest.fixture
def template_page_manager(basic_page: Page, settings: Settings) -> TemplatePageManager:
    """Template page manager over an anonymous page."""
    return TemplatePageManager(basic_page, settings.env.base_url)


@pytest.fixture
def logged_user_template_page_manager(
    logged_user_page: Page, settings: Settings
) -> TemplatePageManager:
    """Template page manager over a logged-in page."""
    return TemplatePageManager(logged_user_page, settings.env.base_url)


# =============================================================================
# API Clients
# =============================================================================

@pytest_asyncio.fixture(loop_scope="session")
async def api_request_context(
    playwright_instance: Playwright, settings: Settings
) -> AsyncGenerator[APIRequestContext, None]:
    """A Playwright request context for each test."""
    async with open_api_request_context(playwright_instance, settings) as request_context:
        yield request_context


@pytest.fixture
def api_session(
    api_request_context: APIRequestContext,
    settings: Settings,
    endpoints: Endpoints,
) -> ApiSession:
    return ApiSession.from_settings(api_request_context, settings, endpoints)


@pytest.fixture
def template_api_client(api_session: ApiSession) -> TemplateApiClient:
    """Template API client without authentication."""
    return TemplateApiClient(api_session)


@pytest_asyncio.fixture(loop_scope="session")
async def authenticated_api(
    api_session: ApiSession, settings: Settings
) -> AsyncGenerator[AuthenticatedClient, None]:
    """Client and token from one API login of the main user."""
    async with authenticated_api_client(api_session, settings) as authenticated:
        yield authenticated


@pytest.fixture
def authenticated_template_api_client(
    authenticated_api: AuthenticatedClient,
) -> TemplateApiClient:
    """Template API client whose main user has logged in."""
    return authenticated_api.client


@pytest.fixture
def auth_token(authenticated_api: AuthenticatedClient) -> str:
    """Bearer token of the main user, skipping the test if login returned none."""
    if authenticated_api.token is None:
        pytest.skip("Login response carried no token")
    return authenticated_api.token
