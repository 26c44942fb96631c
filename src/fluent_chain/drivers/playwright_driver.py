"""
Backend adapter over a synchronous Playwright ``Page``.
"""

from contextlib import contextmanager

from playwright.sync_api import ElementHandle, Page
from playwright.sync_api import Error as PlaywrightError
import structlog

from ..exceptions import (
    InvalidLocatorError,
    NoSuchElementError,
    StaleElementReferenceError,
)
from ..locators import By
from ..models import Dimension, Point
from .base import Driver, Element

logger = structlog.get_logger(__name__)

# Fragments of Playwright error messages that mean the handle is detached.
_STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "jshandle is disposed",
    "element handle is disposed",
)


def escape_css_selector_value(value: str) -> str:
    """Escapes backslashes and quotes for use inside a quoted selector value."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def to_selector(by: By) -> str:
    """Translates a resolved ``By`` into a Playwright selector string."""
    value = by.value
    escaped = escape_css_selector_value(value)
    selectors = {
        "id": f'css=[id="{escaped}"]',
        "name": f'css=[name="{escaped}"]',
        "className": f'css=[class~="{escaped}"]',
        "tagName": f"css={value}",
        "selector": f"css={value}",
        "xpath": f"xpath={value}",
        "linkText": f'css=a:text-is("{escaped}")',
        "partialLinkText": f'css=a:has-text("{escaped}")',
    }
    try:
        return selectors[by.strategy]
    except KeyError:
        raise InvalidLocatorError(f"Unsupported locator strategy: '{by.strategy}'")


@contextmanager
def _translate_errors():
    try:
        yield
    except PlaywrightError as e:
        message = str(e).lower()
        if any(marker in message for marker in _STALE_MARKERS):
            raise StaleElementReferenceError(str(e)) from e
        raise


class _PlaywrightSearchContext:
    """Shared find logic for pages and element handles."""

    def __init__(self, handle: Page | ElementHandle):
        self._handle = handle

    def find_element(self, by: By) -> "PlaywrightElement":
        selector = to_selector(by)
        with _translate_errors():
            found = self._handle.query_selector(selector)
        if found is None:
            raise NoSuchElementError(f"Unable to locate element: {by}")
        return PlaywrightElement(found)

    def find_elements(self, by: By) -> list["PlaywrightElement"]:
        selector = to_selector(by)
        with _translate_errors():
            found = self._handle.query_selector_all(selector)
        logger.debug("Elements found.", selector=selector, count=len(found))
        return [PlaywrightElement(handle) for handle in found]


class PlaywrightElement(_PlaywrightSearchContext, Element):
    """Element backed by a Playwright ``ElementHandle``."""

    def click(self) -> None:
        with _translate_errors():
            self._handle.click()

    def clear(self) -> None:
        with _translate_errors():
            self._handle.fill("")

    def submit(self) -> None:
        with _translate_errors():
            self._handle.evaluate(
                "e => { const f = e.tagName === 'FORM' ? e : e.form; if (f) f.submit(); }"
            )

    def send_keys(self, *keys: str) -> None:
        with _translate_errors():
            self._handle.type("".join(keys))

    def get_tag_name(self) -> str:
        with _translate_errors():
            return self._handle.evaluate("e => e.tagName.toLowerCase()")

    def get_attribute(self, name: str) -> str | None:
        with _translate_errors():
            return self._handle.get_attribute(name)

    def get_text(self) -> str:
        with _translate_errors():
            return self._handle.inner_text()

    def get_css_value(self, name: str) -> str:
        with _translate_errors():
            return self._handle.evaluate(
                "(e, name) => getComputedStyle(e).getPropertyValue(name)", name
            )

    def get_location(self) -> Point:
        with _translate_errors():
            box = self._handle.bounding_box()
        if box is None:
            return Point(x=0, y=0)
        return Point(x=int(box["x"]), y=int(box["y"]))

    def get_size(self) -> Dimension:
        with _translate_errors():
            box = self._handle.bounding_box()
        if box is None:
            return Dimension(width=0, height=0)
        return Dimension(width=int(box["width"]), height=int(box["height"]))

    def is_selected(self) -> bool:
        with _translate_errors():
            return bool(self._handle.evaluate("e => !!(e.checked || e.selected)"))

    def is_enabled(self) -> bool:
        with _translate_errors():
            return self._handle.is_enabled()

    def is_displayed(self) -> bool:
        with _translate_errors():
            return self._handle.is_visible()


class PlaywrightDriver(_PlaywrightSearchContext, Driver):
    """
    Document backend over a Playwright page.

    Example::

        with sync_playwright() as p:
            page = p.chromium.launch().new_page()
            page.goto("https://example.com")
            fwd = FluentDriver(PlaywrightDriver(page))
            fwd.h1().get_text()
    """

    def __init__(self, page: Page):
        if not page:
            raise ValueError("Page object is required for PlaywrightDriver.")
        super().__init__(page)
        logger.info("PlaywrightDriver initialized.")
