"""
Page Object Model classes.

These classes provide reusable locators and multi-step actions for
the pages of the application under test.
"""

from .data_list_page import DataListPage
from .login_page import LoginPage

__all__ = [
    "DataListPage",
    "LoginPage",
]
