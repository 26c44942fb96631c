"""
Fluent chains over a document backend.

``FluentChain`` is the method surface shared by both execution modes. The
immediate variant, ``OngoingChain``, runs each step through the execution
envelope as soon as it is called; the recording variant lives in
``fluent_chain.recording`` and only captures the call.
"""

import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Any, Literal

import structlog

from . import config
from .envelope import ExecutionEnvelope
from .exceptions import BecauseNothingMatchesInFilter, NoSuchElementError
from .locators import refine_for_tag
from .models import Dimension, Point, RetryPolicy
from .tags import install_tag_methods

logger = structlog.get_logger(__name__)

Multiplicity = Literal["single", "many"]


@install_tag_methods
class FluentChain(ABC):
    """
    Capability interface of a fluent chain. Public methods are defined once
    here; each variant decides what "calling" a step means through the
    underscore hooks.
    """

    # --- Hooks implemented by each variant ---

    @abstractmethod
    def _locate(self, method: str, tag: str | None, locator, multiplicity: Multiplicity):
        raise NotImplementedError

    @abstractmethod
    def _act(self, method: str, *args: Any) -> "FluentChain":
        raise NotImplementedError

    @abstractmethod
    def _read(self, method: str, *args: Any) -> Any:
        raise NotImplementedError

    @abstractmethod
    def _collect(self, method: str, predicate: Callable[["FluentChain"], bool]):
        raise NotImplementedError

    @abstractmethod
    def within(self, secs: float) -> "FluentChain":
        """Subsequent steps retry stale elements for up to ``secs`` seconds."""
        raise NotImplementedError

    # --- Locate ---

    def element(self, locator) -> "FluentChain":
        """Finds one element of any tag."""
        return self._locate("element", None, locator, "single")

    def elements(self, locator) -> "FluentChain":
        """Finds every matching element, of any tag."""
        return self._locate("elements", None, locator, "many")

    # --- Act ---
    # These don't return None as they do on an Element.

    def click(self) -> "FluentChain":
        return self._act("click")

    def clear_field(self) -> "FluentChain":
        """Clears every element in focus. Maps to ``Element.clear()``."""
        return self._act("clear_field")

    def submit(self) -> "FluentChain":
        return self._act("submit")

    def send_keys(self, *keys: str) -> "FluentChain":
        return self._act("send_keys", *keys)

    # --- Read ---

    def get_tag_name(self) -> str:
        return self._read("get_tag_name")

    def get_attribute(self, name: str) -> str | None:
        return self._read("get_attribute", name)

    def get_text(self) -> str:
        return self._read("get_text")

    def get_css_value(self, name: str) -> str:
        return self._read("get_css_value", name)

    def get_location(self) -> Point:
        return self._read("get_location")

    def get_size(self) -> Dimension:
        return self._read("get_size")

    def is_selected(self) -> bool:
        """True only when every element in focus is selected."""
        return self._read("is_selected")

    def is_enabled(self) -> bool:
        """True only when every element in focus is enabled."""
        return self._read("is_enabled")

    def is_displayed(self) -> bool:
        """True only when every element in focus is displayed."""
        return self._read("is_displayed")

    # --- Collections ---

    def filter(self, predicate: Callable[["FluentChain"], bool]) -> "FluentChain":
        """Narrows the focus to the elements for which ``predicate`` holds."""
        return self._collect("filter", predicate)

    def first(self, predicate: Callable[["FluentChain"], bool]) -> "FluentChain":
        """Narrows the focus to the first element for which ``predicate`` holds."""
        return self._collect("first", predicate)


class Lineage:
    """Hands out sequential context labels for one root chain."""

    def __init__(self, prefix: str = config.ELEMENT_CONTEXT_PREFIX):
        self._prefix = prefix
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


def render_arg(arg: Any) -> str:
    if isinstance(arg, str):
        return repr(arg)
    if callable(arg):
        return getattr(arg, "__name__", repr(arg))
    return str(arg)


def describe(context: str, method: str, args: tuple) -> str:
    return f"{context}.{method}({', '.join(render_arg(a) for a in args)})"


class OngoingChain(FluentChain):
    """
    Immediate-mode chain positioned on one set of elements.

    Every step runs at once through the execution envelope. Locate steps
    return a new chain on the new element set; act steps return this chain;
    read steps return a value.
    """

    def __init__(
        self,
        driver,
        elements: tuple | None,
        context: str,
        lineage: Lineage,
        envelope: ExecutionEnvelope,
        policy: RetryPolicy | None = None,
    ):
        self._driver = driver
        # None means "positioned on the document itself".
        self._elements = elements
        self.context = context
        self._lineage = lineage
        self._envelope = envelope
        self._policy = policy

    def __repr__(self) -> str:
        count = "root" if self._elements is None else len(self._elements)
        return f"<{type(self).__name__} {self.context} elements={count}>"

    def __len__(self) -> int:
        return len(self._elements or ())

    def __iter__(self) -> Iterator["OngoingChain"]:
        for element in self._elements or ():
            yield self._advance((element,))

    # --- Hooks ---

    def _locate(self, method, tag, locator, multiplicity):
        args = () if locator is None else (locator,)
        description = describe(self.context, method, args)
        by = refine_for_tag(locator, tag) if tag else locator.resolve()
        logger.debug("Locating.", invocation=description, by=str(by))

        def find() -> tuple:
            search_context = self._search_context()
            if multiplicity == "single":
                return (search_context.find_element(by),)
            return tuple(search_context.find_elements(by))

        assertions = [_tag_assertion(tag)] if tag else []
        found = self._envelope.run(description, find, assertions, self._policy)
        return self._advance(found)

    def _act(self, method, *args):
        operation = self._get_operation(method)
        description = describe(self.context, method, args)
        self._envelope.run(
            description, lambda: operation(self._focus(), *args), policy=self._policy
        )
        return self

    def _read(self, method, *args):
        operation = self._get_operation(method)
        description = describe(self.context, method, args)
        return self._envelope.run(
            description, lambda: operation(self._focus(), *args), policy=self._policy
        )

    def _collect(self, method, predicate):
        description = describe(self.context, method, (predicate,))

        def matching() -> tuple:
            matches = []
            for element in self._focus():
                if predicate(self._advance((element,))):
                    matches.append(element)
                    if method == "first":
                        break
            if method == "first" and not matches:
                raise BecauseNothingMatchesInFilter(
                    f"Nothing matched filter during invocation of: {description}"
                )
            return tuple(matches)

        matched = self._envelope.run(description, matching, policy=self._policy)
        return self._advance(matched)

    def within(self, secs: float) -> "OngoingChain":
        return OngoingChain(
            self._driver,
            self._elements,
            self.context,
            self._lineage,
            self._envelope,
            RetryPolicy.within(secs),
        )

    # --- Internals ---

    def _advance(self, elements: tuple) -> "OngoingChain":
        return OngoingChain(
            self._driver,
            elements,
            self._lineage.next_id(),
            self._lineage,
            self._envelope,
            self._policy,
        )

    def _search_context(self):
        if self._elements is None:
            return self._driver
        return self._focus()[0]

    def _focus(self) -> tuple:
        if not self._elements:
            raise NoSuchElementError(f"No elements in focus at {self.context}")
        return self._elements

    def _get_operation(self, method: str) -> Callable[..., Any]:
        """Maps a chain method name to the backend operation it runs."""
        method_map = {
            "click": _click_all,
            "clear_field": _clear_all,
            "submit": lambda elements: elements[0].submit(),
            "send_keys": lambda elements, *keys: elements[0].send_keys(*keys),
            "get_tag_name": lambda elements: elements[0].get_tag_name(),
            "get_attribute": lambda elements, name: elements[0].get_attribute(name),
            "get_text": lambda elements: elements[0].get_text(),
            "get_css_value": lambda elements, name: elements[0].get_css_value(name),
            "get_location": lambda elements: elements[0].get_location(),
            "get_size": lambda elements: elements[0].get_size(),
            "is_selected": lambda elements: all([e.is_selected() for e in elements]),
            "is_enabled": lambda elements: all([e.is_enabled() for e in elements]),
            "is_displayed": lambda elements: all([e.is_displayed() for e in elements]),
        }
        return method_map[method]


class FluentDriver(OngoingChain):
    """
    Root of an immediate-mode chain, positioned on the document.

    Example::

        fwd = FluentDriver(driver)
        fwd.div(By.id("login")).input(By.name("user")).send_keys("bob")
    """

    def __init__(
        self,
        driver,
        policy: RetryPolicy | None = None,
        envelope: ExecutionEnvelope | None = None,
    ):
        super().__init__(
            driver,
            None,
            config.ROOT_CONTEXT,
            Lineage(),
            envelope if envelope is not None else ExecutionEnvelope(policy),
            policy,
        )


def _click_all(elements) -> None:
    for element in elements:
        element.click()


def _clear_all(elements) -> None:
    for element in elements:
        element.clear()


def _tag_assertion(tag: str) -> Callable[[tuple], None]:
    def assert_tag(elements: tuple) -> None:
        for element in elements:
            actual = element.get_tag_name()
            if actual is None or actual.lower() != tag:
                raise AssertionError(f"tag was incorrect, expected {tag} but was {actual}")

    return assert_tag
