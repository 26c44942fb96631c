"""
Locator algebra.

``By`` is the plain search predicate handed to a backend. ``FluentBy`` builds
richer locators (strict class names, attributes, tag + class/attribute
composites, last-match) that all resolve to a single relative XPath ``By``.
"""

import re
from dataclasses import dataclass

from .exceptions import InvalidLocatorError, UnsupportedOperationError


def xpath_literal(value: str) -> str:
    """Quotes ``value`` as an XPath string literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    # Both quote kinds present: stitch the pieces together with concat().
    parts = value.split("'")
    pieces = ", \"'\", ".join(f"'{part}'" for part in parts)
    return f"concat({pieces})"


@dataclass(frozen=True)
class By:
    """A single locator strategy and its raw argument."""

    strategy: str
    value: str

    @classmethod
    def id(cls, value: str) -> "By":
        return cls("id", value)

    @classmethod
    def name(cls, value: str) -> "By":
        return cls("name", value)

    @classmethod
    def class_name(cls, value: str) -> "By":
        return cls("className", value)

    @classmethod
    def tag_name(cls, value: str) -> "By":
        return cls("tagName", value)

    @classmethod
    def link_text(cls, value: str) -> "By":
        return cls("linkText", value)

    @classmethod
    def partial_link_text(cls, value: str) -> "By":
        return cls("partialLinkText", value)

    @classmethod
    def xpath(cls, value: str) -> "By":
        return cls("xpath", value)

    @classmethod
    def css_selector(cls, value: str) -> "By":
        return cls("selector", value)

    def resolve(self) -> "By":
        """The expression a backend should actually run."""
        return self

    def __str__(self) -> str:
        return f"By.{self.strategy}: {self.value}"


@dataclass(frozen=True)
class ByAttribute:
    """Elements carrying an attribute, optionally with an exact value."""

    name: str
    value: str | None = None

    def name_and_value(self) -> str:
        if self.value is None:
            return f"@{self.name}"
        return f"@{self.name} = {xpath_literal(self.value)}"

    def make_xpath(self) -> str:
        return f".//*[{self.name_and_value()}]"

    def resolve(self) -> By:
        return By.xpath(self.make_xpath())

    def __str__(self) -> str:
        suffix = "" if self.value is None else f" = {xpath_literal(self.value)}"
        return f"FluentBy.attribute: {self.name}{suffix}"


@dataclass(frozen=True)
class ByStrictClassName:
    """Elements whose whole class attribute equals one class name."""

    class_name: str

    def make_xpath(self) -> str:
        return f".//*[@class = {xpath_literal(self.class_name)}]"

    def resolve(self) -> By:
        return By.xpath(self.make_xpath())

    def __str__(self) -> str:
        return f"FluentBy.strictClassName: {self.class_name}"


@dataclass(frozen=True)
class ByComposite:
    """A tag name refined by a class token or an attribute."""

    tag: By
    refinement: "By | ByAttribute"

    def make_xpath(self) -> str:
        expression = f".//{self.tag.value}"
        if isinstance(self.refinement, ByAttribute):
            return f"{expression}[{self.refinement.name_and_value()}]"
        return f"{expression}[{_containing_word('class', self.refinement.value)}]"

    def resolve(self) -> By:
        return By.xpath(self.make_xpath())

    def __str__(self) -> str:
        return str(self.resolve())


@dataclass(frozen=True)
class ByLast:
    """The last match of an attribute locator, or of any element."""

    by: ByAttribute | None = None

    def make_xpath(self) -> str:
        if self.by is None:
            return ".//*[position() = last()]"
        return f".//*[{self.by.name_and_value()} and position() = last()]"

    def resolve(self) -> By:
        return By.xpath(self.make_xpath())

    def __str__(self) -> str:
        return str(self.resolve())


def _containing_word(attribute: str, word: str) -> str:
    return (
        f"contains(concat(' ',normalize-space(@{attribute}),' '),"
        f"{xpath_literal(' ' + word + ' ')})"
    )


class FluentBy:
    """Factory for locators beyond the plain ``By`` strategies."""

    @staticmethod
    def strict_class_name(class_name: str | None) -> ByStrictClassName:
        if class_name is None:
            raise InvalidLocatorError(
                "Cannot find elements when the class name expression is null."
            )
        if re.search(r"\s", class_name):
            raise InvalidLocatorError(
                "Compound class names are not supported. Consider searching for "
                "one class name and filtering the results."
            )
        return ByStrictClassName(class_name)

    @staticmethod
    def attribute(name: str | None, value: str | None = None) -> ByAttribute:
        if name is None:
            raise InvalidLocatorError(
                "Cannot find elements when the attribute name is null"
            )
        return ByAttribute(name, value)

    @staticmethod
    def composite(*bys) -> ByComposite:
        legal = (
            len(bys) == 2
            and isinstance(bys[0], By)
            and bys[0].strategy == "tagName"
            and (
                isinstance(bys[1], ByAttribute)
                or (isinstance(bys[1], By) and bys[1].strategy == "className")
            )
        )
        if not legal:
            raise InvalidLocatorError(
                "can only do this with By.tag_name followed by one of "
                "By.class_name or FluentBy.attribute"
            )
        return ByComposite(bys[0], bys[1])

    @staticmethod
    def last(by=None) -> ByLast:
        if by is None or isinstance(by, ByAttribute):
            return ByLast(by)
        raise UnsupportedOperationError(
            f"last() not allowed for {type(by).__name__} type"
        )


def refine_for_tag(locator, tag: str) -> By:
    """
    Resolves the locator for a tag-specific step. A bare xpath predicate is
    scoped to the tag, e.g. ``@foo = 'bar'`` under ``span`` becomes
    ``.//span[@foo = 'bar']``.
    """
    if locator is None:
        return By.tag_name(tag)
    if isinstance(locator, By) and locator.strategy == "xpath":
        return By.xpath(f".//{tag}[{locator.value}]")
    return locator.resolve()
