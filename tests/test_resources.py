"""
Tests for scoped test resources: construction plus guaranteed teardown.
"""

from pathlib import Path

import pytest

from qa_scaffold.api import ApiSession
from qa_scaffold.config import load_settings
from qa_scaffold.resources import (
    authenticated_api_client,
    discard_video,
    logged_in_page,
    open_api_request_context,
    open_browser_context,
    open_page,
    stop_tracing,
)

from .conftest import VALID_ENV
from .fakes import (
    FakeBrowserContext,
    FakePage,
    FakePlaywright,
    FakeRequestContext,
    FakeResponse,
    FakeVideo,
)


class TestOpenPage:

    @pytest.mark.asyncio
    async def test_page_is_closed_once(self, fake_browser_context):
        async with open_page(fake_browser_context) as page:
            assert page.closed == 0

        assert page.closed == 1

    @pytest.mark.asyncio
    async def test_page_is_closed_once_when_the_test_fails(self, fake_browser_context):
        with pytest.raises(AssertionError):
            async with open_page(fake_browser_context) as page:
                raise AssertionError("test failed")

        assert page.closed == 1


class TestOpenBrowserContext:

    @pytest.mark.asyncio
    async def test_context_options_and_timeouts(self, fake_browser, loaded_settings):
        async with open_browser_context(fake_browser, loaded_settings.browser) as context:
            assert context.options["viewport"] == {"width": 1280, "height": 720}
            assert context.default_timeout == 30000
            assert context.default_navigation_timeout == 30000

        assert context.closed == 1

    @pytest.mark.asyncio
    async def test_context_is_closed_once_when_the_test_fails(self, fake_browser, loaded_settings):
        with pytest.raises(RuntimeError):
            async with open_browser_context(fake_browser, loaded_settings.browser):
                raise RuntimeError("boom")

        assert [context.closed for context in fake_browser.contexts] == [1]

    @pytest.mark.asyncio
    async def test_each_use_gets_its_own_context(self, fake_browser, loaded_settings):
        async with open_browser_context(fake_browser, loaded_settings.browser) as first:
            async with open_browser_context(fake_browser, loaded_settings.browser) as second:
                assert first is not second

    @pytest.mark.asyncio
    async def test_no_video_or_trace_by_default(self, fake_browser, loaded_settings):
        async with open_browser_context(fake_browser, loaded_settings.browser) as context:
            page = await context.new_page()

        assert context.options["record_video_dir"] is None
        assert context.tracing.started == []
        assert page.video is None


class TestFailureArtifacts:

    @pytest.fixture
    def recording_settings(self, clean_env):
        environ = {**VALID_ENV, "E2E_RECORD_VIDEO": "true", "E2E_TRACE": "true"}
        return load_settings(environ=environ).browser

    @pytest.mark.asyncio
    async def test_video_and_trace_start_with_the_context(self, fake_browser, recording_settings):
        async with open_browser_context(fake_browser, recording_settings) as context:
            page = await context.new_page()

        assert context.options["record_video_dir"] == str(Path("test-results") / "videos")
        assert context.options["record_video_size"] == {"width": 1280, "height": 720}
        assert context.tracing.started == [
            {"screenshots": True, "snapshots": True, "sources": True}
        ]
        assert page.video is not None

    @pytest.mark.asyncio
    async def test_stop_tracing_without_path_discards(self, fake_browser_context):
        await stop_tracing(fake_browser_context)

        assert fake_browser_context.tracing.stopped == [None]

    @pytest.mark.asyncio
    async def test_stop_tracing_saves_to_path(self, fake_browser_context, tmp_path):
        path = tmp_path / "traces" / "test_login.zip"

        await stop_tracing(fake_browser_context, path)

        assert fake_browser_context.tracing.stopped == [str(path)]
        assert path.parent.is_dir()

    @pytest.mark.asyncio
    async def test_discard_video(self):
        page = FakePage(video=FakeVideo())

        await discard_video(page)

        assert page.video.deleted == 1

    @pytest.mark.asyncio
    async def test_discard_video_without_recording(self, fake_page):
        await discard_video(fake_page)


class TestLoggedInPage:

    @pytest.mark.asyncio
    async def test_login_runs_before_the_page_is_handed_over(
        self, fake_browser_context, loaded_settings
    ):
        async with logged_in_page(fake_browser_context, loaded_settings) as page:
            assert page.actions == [
                ("goto", "https://x.test"),
                ("fill", "qa-input-email", "u@x.test"),
                ("fill", "qa-input-password", "p"),
                ("click", "qa-btn-login"),
                ("wait_for_load_state", "networkidle"),
            ]

        assert page.closed == 1

    @pytest.mark.asyncio
    async def test_page_is_closed_once_when_the_test_fails(
        self, fake_browser_context, loaded_settings
    ):
        with pytest.raises(AssertionError):
            async with logged_in_page(fake_browser_context, loaded_settings):
                raise AssertionError("test failed")

        assert [page.closed for page in fake_browser_context.pages] == [1]

    @pytest.mark.asyncio
    async def test_page_is_closed_when_login_times_out(self, loaded_settings):
        context = FakeBrowserContext(page_fail_on="qa-btn-login")

        with pytest.raises(TimeoutError):
            async with logged_in_page(context, loaded_settings):
                pytest.fail("the body must not run")

        assert [page.closed for page in context.pages] == [1]


class TestApiResources:

    @pytest.mark.asyncio
    async def test_request_context_is_disposed_once(self, loaded_settings):
        playwright = FakePlaywright()

        with pytest.raises(RuntimeError):
            async with open_api_request_context(playwright, loaded_settings) as request_context:
                assert request_context.options == {"timeout": 30000}
                raise RuntimeError("boom")

        assert request_context.disposed == 1

    @pytest.mark.asyncio
    async def test_authenticated_client_logs_in_once(self, loaded_settings):
        request_context = FakeRequestContext(FakeResponse(200, {"token": "abc"}))
        session = ApiSession.from_settings(request_context, loaded_settings)

        async with authenticated_api_client(session, loaded_settings) as authenticated:
            assert authenticated.token == "abc"
            assert authenticated.client.session is session

        assert len(request_context.calls) == 1
        login_call = request_context.calls[0]
        assert login_call.url == "https://x.test/api/auth/login"
        assert login_call.kwargs["data"] == {"email": "u@x.test", "password": "p"}

    @pytest.mark.asyncio
    async def test_missing_token_is_none(self, loaded_settings):
        request_context = FakeRequestContext(FakeResponse(200, {"user": {}}))
        session = ApiSession.from_settings(request_context, loaded_settings)

        async with authenticated_api_client(session, loaded_settings) as authenticated:
            assert authenticated.token is None
