from abc import ABC, abstractmethod

from ..locators import By
from ..models import Dimension, Point


class SearchContext(ABC):
    """Anything elements can be searched from: a document or an element."""

    @abstractmethod
    def find_element(self, by: By) -> "Element":
        """
        Returns the first element matching ``by``.

        Raises NoSuchElementError when nothing matches.
        """
        raise NotImplementedError

    @abstractmethod
    def find_elements(self, by: By) -> list["Element"]:
        """Returns every element matching ``by``, possibly none."""
        raise NotImplementedError


class Driver(SearchContext):
    """Abstract Base Class for document backends."""


class Element(SearchContext):
    """
    Abstract Base Class for element handles returned by a backend.

    Any method may raise StaleElementReferenceError once the handle is
    detached from its document.
    """

    @abstractmethod
    def click(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def submit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_keys(self, *keys: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_tag_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_attribute(self, name: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_text(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_css_value(self, name: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def get_location(self) -> Point:
        raise NotImplementedError

    @abstractmethod
    def get_size(self) -> Dimension:
        raise NotImplementedError

    @abstractmethod
    def is_selected(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_enabled(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_displayed(self) -> bool:
        raise NotImplementedError
