"""
Page managers.

A page manager groups the page objects built over one browser page so a
test receives them behind a single handle. It lives exactly as long as
that page.
"""

from playwright.async_api import Page

from .pages import DataListPage, LoginPage


class PageManager:
    """Holds the browser page only; use for shared, page-level interactions."""

    def __init__(self, page: Page):
        self._page = page

    @property
    def page(self) -> Page:
        return self._page


class TemplatePageManager:
    """
    Template page manager.

    Usage:
        await template_page_manager.login_page.goto()
        await template_page_manager.data_list_page.rows.row("42").click()

    Add the application's page objects here.
    """

    def __init__(self, page: Page, base_url: str):
        self._page = page
        self._login_page = LoginPage(page, base_url)
        self._data_list_page = DataListPage(page, base_url)

    @property
    def page(self) -> Page:
        return self._page

    @property
    def login_page(self) -> LoginPage:
        return self._login_page

    @property
    def data_list_page(self) -> DataListPage:
        return self._data_list_page
