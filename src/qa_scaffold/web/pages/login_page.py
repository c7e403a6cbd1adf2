"""
Login Page Object - template example for the page object pattern.

Replace the test ids and actions with the application's own.
"""

from playwright.async_api import Page

from ..locators import LocatorGroup, navigate_to, test_id


class LoginPage:
    """Page Object for the login page."""

    path = ""

    def __init__(self, page: Page, base_url: str):
        self.page = page
        self.base_url = base_url

        self.inputs = LocatorGroup(
            "inputs",
            email=test_id(page, "input", "email"),
            password=test_id(page, "input", "password"),
        )
        self.buttons = LocatorGroup(
            "buttons",
            login=test_id(page, "btn", "login"),
            forgot_password=test_id(page, "btn", "forgot-password"),
            sign_up=test_id(page, "btn", "signup"),
            show_password=test_id(page, "btn", "show-password"),
        )
        self.messages = LocatorGroup(
            "messages",
            error_message=test_id(page, "error", "message"),
            success_message=test_id(page, "success", "message"),
            validation_error=test_id(page, "validation", "error"),
        )

    async def goto(self) -> None:
        """Navigate to the login page."""
        await navigate_to(self.page, self.base_url, self.path)

    async def login(self, email: str, password: str) -> None:
        """
        Fill in the credentials, submit and wait for the network to settle.

        Args:
            email: User email or username
            password: User password
        """
        await self.inputs.email.fill(email)
        await self.inputs.password.fill(password)
        await self.buttons.login.click()
        await self.page.wait_for_load_state("networkidle")
