"""
Scoped test resources.

Each resource pairs its construction with a teardown that runs however
the consuming block exits. The pytest fixtures in ``qa_scaffold.fixtures``
are thin wrappers around these context managers.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, NamedTuple, Optional

from playwright.async_api import (
    APIRequestContext,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .api import ApiSession, TemplateApiClient, extract_token
from .config import BrowserSettings, Settings
from .web import LoginPage

logger = logging.getLogger(__name__)


class AuthenticatedClient(NamedTuple):
    """An API client together with the token its login returned."""

    client: TemplateApiClient
    token: Optional[str]


@asynccontextmanager
async def open_browser_context(
    browser: Browser, settings: BrowserSettings
) -> AsyncIterator[BrowserContext]:
    """
    Open an isolated browser context with separate cookies and storage.

    Video recording and tracing start here when enabled; the caller
    decides whether to keep them with ``stop_tracing`` and ``discard_video``.
    """
    viewport = {
        "width": settings.viewport_width,
        "height": settings.viewport_height,
    }
    context = await browser.new_context(
        viewport=viewport,
        record_video_dir=str(settings.videos_dir) if settings.record_video else None,
        record_video_size=viewport if settings.record_video else None,
    )
    context.set_default_timeout(settings.timeout)
    context.set_default_navigation_timeout(settings.timeout)
    try:
        if settings.trace:
            await context.tracing.start(screenshots=True, snapshots=True, sources=True)
        yield context
    finally:
        await context.close()


async def stop_tracing(context: BrowserContext, path: Optional[Path] = None) -> None:
    """Stop tracing, saving the trace to ``path`` or discarding it when None."""
    if path is None:
        await context.tracing.stop()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    await context.tracing.stop(path=str(path))
    logger.info("Saved trace to %s", path)


async def discard_video(page: Page) -> None:
    """Delete the video of a closed page, if one was recorded."""
    if page.video is not None:
        await page.video.delete()


@asynccontextmanager
async def open_page(context: BrowserContext) -> AsyncIterator[Page]:
    """Open a page that is closed when the block exits."""
    page = await context.new_page()
    try:
        yield page
    finally:
        await page.close()


@asynccontextmanager
async def logged_in_page(
    context: BrowserContext, settings: Settings
) -> AsyncIterator[Page]:
    """
    Open a page and log the main user in through the login form.

    Replace with cookie or API based authentication where the
    application allows it.
    """
    async with open_page(context) as page:
        login_page = LoginPage(page, settings.env.base_url)
        await login_page.goto()
        await login_page.login(
            settings.env.main_user_login, settings.env.main_user_password)
        logger.debug("Logged in as %s", settings.env.main_user_login)
        yield page


@asynccontextmanager
async def open_api_request_context(
    playwright: Playwright, settings: Settings
) -> AsyncIterator[APIRequestContext]:
    """Create a Playwright request context, disposed when the block exits."""
    request_context = await playwright.request.new_context(
        timeout=settings.browser.timeout,
    )
    try:
        yield request_context
    finally:
        await request_context.dispose()


@asynccontextmanager
async def authenticated_api_client(
    session: ApiSession, settings: Settings
) -> AsyncIterator[AuthenticatedClient]:
    """
    Log the main user in once through the API.

    The client itself keeps no token; callers pass the yielded token
    per request.
    """
    client = TemplateApiClient(session)
    payload = await client.login(
        settings.env.main_user_login, settings.env.main_user_password)
    token = extract_token(payload)
    if token is None:
        logger.warning("Login response carried no token")
    yield AuthenticatedClient(client=client, token=token)
