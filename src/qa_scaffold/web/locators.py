"""
Locator helpers shared by page objects.

Interactive elements are located by test id only, never by text or CSS
structure. Test ids follow the ``qa-<role>-<purpose>`` pattern, for
example ``qa-btn-login`` or ``qa-input-email``.
"""

from typing import Any, Callable, Iterator, Optional, Union

from playwright.async_api import Locator, Page, Response

from ..exceptions import LocatorGroupError

LocatorFactory = Callable[..., Locator]


def test_id_value(role: str, purpose: str) -> str:
    """Build a test id following the ``qa-<role>-<purpose>`` pattern."""
    return f"qa-{role}-{purpose}"


def test_id(page: Page, role: str, purpose: str) -> Locator:
    """Locate an element by its conventional test id."""
    return page.get_by_test_id(test_id_value(role, purpose))


# Keep pytest from collecting these when imported into test modules.
test_id.__test__ = False
test_id_value.__test__ = False


async def navigate_to(page: Page, base_url: str, path: str = "") -> Optional[Response]:
    """Navigate to ``path`` relative to ``base_url``."""
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}" if path else base_url
    return await page.goto(url)


class LocatorGroup:
    """
    Read-only named group of locators.

    Values are either locators resolved once at construction or factories
    taking one or more keys and returning a locator, for repeated
    elements such as list rows::

        buttons = LocatorGroup("buttons", login=test_id(page, "btn", "login"))
        rows = LocatorGroup("rows", row=lambda key: test_id(page, "row", key))

        await buttons.login.click()
        await rows.row("42").click()
    """

    __slots__ = ("_name", "_entries")

    def __init__(self, name: str, **entries: Union[Locator, LocatorFactory]):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_entries", dict(entries))

    def __getattr__(self, item: str) -> Any:
        if item.startswith("_"):
            raise AttributeError(item)
        entries = object.__getattribute__(self, "_entries")
        try:
            return entries[item]
        except KeyError:
            raise LocatorGroupError(
                f"No locator '{item}' in group '{self._name}'",
                {"available": sorted(entries)},
            ) from None

    def __getitem__(self, item: str) -> Any:
        return self.__getattr__(item)

    def __setattr__(self, key: str, value: Any) -> None:
        raise LocatorGroupError(f"Locator group '{self._name}' is read-only")

    def __delattr__(self, item: str) -> None:
        raise LocatorGroupError(f"Locator group '{self._name}' is read-only")

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LocatorGroup({self._name!r}, {list(self._entries)})"

    @property
    def name(self) -> str:
        return self._name
