"""
A deterministic, in-memory document backend that writes one journal line per
backend call. Used to verify that immediate and recorded chains talk to a
backend in exactly the same way.

Journal lines look like::

    wd0.findElement(By.tagName: span) -> we1
    we1.getTagName() -> 'span'
    we3.findElements(By.tagName: span) -> [we4, we5]
"""

import re
from typing import Any

import structlog

from ..locators import By
from ..models import Dimension, Point
from .base import Driver, Element, SearchContext

logger = structlog.get_logger(__name__)

_XPATH_TAG = re.compile(r"^\.//([A-Za-z][\w-]*)\[")


class _JournalContext(SearchContext):
    def __init__(self, driver: "JournalDriver", context_id: str, tag: str):
        self._driver = driver
        self.context_id = context_id
        self.tag = tag

    def find_element(self, by: By) -> "JournalElement":
        self._driver._check_failure()
        element = self._driver._new_element(self._tag_for(by))
        self._driver._write(f"{self.context_id}.findElement({by}) -> {element.context_id}")
        return element

    def find_elements(self, by: By) -> list["JournalElement"]:
        self._driver._check_failure()
        tag = self._tag_for(by)
        elements = [
            self._driver._new_element(tag) for _ in range(self._driver.multiplicity)
        ]
        ids = ", ".join(e.context_id for e in elements)
        self._driver._write(f"{self.context_id}.findElements({by}) -> [{ids}]")
        return elements

    def _tag_for(self, by: By) -> str:
        if by.strategy == "tagName":
            return by.value
        if by.strategy in ("linkText", "partialLinkText"):
            return "a"
        if by.strategy == "xpath":
            match = _XPATH_TAG.match(by.value)
            if match:
                return match.group(1)
        return self.tag


class JournalElement(_JournalContext, Element):
    def _call(self, operation: str, *args: Any, returns: bool = True, value: Any = None):
        self._driver._check_failure()
        rendered = ", ".join(str(a) for a in args)
        line = f"{self.context_id}.{operation}({rendered})"
        if returns:
            line += f" -> {value!r}"
        self._driver._write(line)
        return value

    def _state(self, name: str) -> bool:
        return name not in self._driver.false_states.get(self.context_id, set())

    def click(self) -> None:
        self._call("click", returns=False)

    def clear(self) -> None:
        self._call("clear", returns=False)

    def submit(self) -> None:
        self._call("submit", returns=False)

    def send_keys(self, *keys: str) -> None:
        self._call("sendKeys", *keys, returns=False)

    def get_tag_name(self) -> str:
        return self._call("getTagName", value=self.tag)

    def get_attribute(self, name: str) -> str | None:
        return self._call("getAttribute", name, value=f"{name}-value")

    def get_text(self) -> str:
        return self._call("getText", value=f"{self.context_id} text")

    def get_css_value(self, name: str) -> str:
        return self._call("getCssValue", name, value=f"{name}-css")

    def get_location(self) -> Point:
        return self._call("getLocation", value=Point(x=1, y=1))

    def get_size(self) -> Dimension:
        return self._call("getSize", value=Dimension(width=10, height=10))

    def is_selected(self) -> bool:
        return self._call("isSelected", value=self._state("selected"))

    def is_enabled(self) -> bool:
        return self._call("isEnabled", value=self._state("enabled"))

    def is_displayed(self) -> bool:
        return self._call("isDisplayed", value=self._state("displayed"))


class JournalDriver(_JournalContext, Driver):
    """
    Simulated document.

    Args:
        journal: A list or any object with ``append``/``write`` that receives lines.
        default_tag: Tag of elements found from the document by a strategy
            that does not imply one (id, name, css, ...).
        multiplicity: How many elements every ``find_elements`` returns.
        false_states: Element id to the boolean states reported as False,
            e.g. ``{"we5": {"selected"}}``.
    """

    def __init__(
        self,
        journal,
        default_tag: str = "div",
        multiplicity: int = 2,
        false_states: dict[str, set[str]] | None = None,
    ):
        super().__init__(self, "wd0", default_tag)
        self.journal = journal
        self.multiplicity = multiplicity
        self.false_states = false_states or {}
        self._next_id = 1
        self._pending_failures: list[Exception] = []

    def fail_next(self, error: Exception, times: int = 1) -> None:
        """The next ``times`` backend calls raise ``error`` without journaling."""
        self._pending_failures.extend([error] * times)

    def _check_failure(self) -> None:
        if self._pending_failures:
            error = self._pending_failures.pop(0)
            logger.debug("Scripted backend failure.", error=type(error).__name__)
            raise error

    def _new_element(self, tag: str) -> JournalElement:
        element = JournalElement(self, f"we{self._next_id}", tag)
        self._next_id += 1
        return element

    def _write(self, line: str) -> None:
        if hasattr(self.journal, "append"):
            self.journal.append(line)
        else:
            self.journal.write(line + "\n")
