"""Browser layer: locator helpers, page objects and page managers."""

from .locators import LocatorGroup, navigate_to, test_id
from .managers import PageManager, TemplatePageManager
from .pages import DataListPage, LoginPage

__all__ = [
    "DataListPage",
    "LocatorGroup",
    "LoginPage",
    "PageManager",
    "TemplatePageManager",
    "navigate_to",
    "test_id",
]
