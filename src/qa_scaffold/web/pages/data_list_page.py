"""
Data List Page Object - template example for repeated elements.

Rows and cells are located through factories keyed by the row id.
"""

from playwright.async_api import Page

from ..locators import LocatorGroup, navigate_to, test_id


class DataListPage:
    """Page Object for a paginated list of template data."""

    path = "/data"

    def __init__(self, page: Page, base_url: str):
        self.page = page
        self.base_url = base_url

        self.inputs = LocatorGroup(
            "inputs",
            search=test_id(page, "input", "search"),
        )
        self.buttons = LocatorGroup(
            "buttons",
            add=test_id(page, "btn", "add"),
            refresh=test_id(page, "btn", "refresh"),
            next_page=test_id(page, "btn", "next-page"),
        )
        self.rows = LocatorGroup(
            "rows",
            row=lambda key: test_id(page, "row", key),
            cell=lambda key, column: test_id(page, "row", key).get_by_test_id(
                f"qa-cell-{column}"),
        )
        self.messages = LocatorGroup(
            "messages",
            empty_state=test_id(page, "message", "empty"),
        )

    async def goto(self) -> None:
        await navigate_to(self.page, self.base_url, self.path)

    async def search(self, query: str) -> None:
        """Type a query, submit it and wait for the list to reload."""
        await self.inputs.search.fill(query)
        await self.inputs.search.press("Enter")
        await self.page.wait_for_load_state("networkidle")

    async def open_row(self, key: str) -> None:
        """Open the details of one row."""
        await self.rows.row(key).click()
        await self.page.wait_for_load_state("networkidle")
