import pytest

from fluent_chain.exceptions import InvalidLocatorError, UnsupportedOperationError
from fluent_chain.locators import By, FluentBy, refine_for_tag, xpath_literal


def test_plain_locators_render_strategy_and_raw_argument():
    """Unit Test: Verifies the textual form of every plain locator strategy."""
    assert str(By.tag_name("span")) == "By.tagName: span"
    assert str(By.id("main")) == "By.id: main"
    assert str(By.name("qux")) == "By.name: qux"
    assert str(By.class_name("item")) == "By.className: item"
    assert str(By.link_text("Home")) == "By.linkText: Home"
    assert str(By.partial_link_text("Ho")) == "By.partialLinkText: Ho"
    assert str(By.xpath("@foo = 'bar'")) == "By.xpath: @foo = 'bar'"
    assert str(By.css_selector("baz")) == "By.selector: baz"


def test_plain_locator_resolves_to_itself():
    by = By.id("main")
    assert by.resolve() is by


def test_attribute_presence_and_equality():
    """Unit Test: Verifies attribute locators match presence, or exact equality with a value."""
    assert FluentBy.attribute("foo").resolve() == By.xpath(".//*[@foo]")
    assert FluentBy.attribute("foo", "bar").resolve() == By.xpath(".//*[@foo = 'bar']")
    assert str(FluentBy.attribute("foo")) == "FluentBy.attribute: foo"
    assert str(FluentBy.attribute("foo", "bar")) == "FluentBy.attribute: foo = 'bar'"


def test_attribute_without_name_is_rejected():
    with pytest.raises(InvalidLocatorError, match="attribute name is null"):
        FluentBy.attribute(None)


def test_composite_tag_and_class_matches_whole_class_token():
    """
    Unit Test: Verifies a tag + class composite pads the normalized class list
    with spaces, so 'item' matches "a item b" but not "items".
    """
    composite = FluentBy.composite(By.tag_name("div"), By.class_name("item"))

    expected = (
        ".//div[contains(concat(' ',normalize-space(@class),' '),' item ')]"
    )
    assert composite.resolve() == By.xpath(expected)
    assert str(composite) == f"By.xpath: {expected}"


def test_composite_tag_and_attribute():
    composite = FluentBy.composite(
        By.tag_name("input"), FluentBy.attribute("type", "text")
    )
    assert composite.resolve() == By.xpath(".//input[@type = 'text']")


@pytest.mark.parametrize(
    "bys",
    [
        (By.id("a"), By.class_name("b")),
        (By.tag_name("div"), By.xpath("@a")),
        (By.tag_name("div"),),
        (By.tag_name("div"), By.class_name("a"), By.class_name("b")),
        (FluentBy.attribute("a"), By.tag_name("div")),
    ],
)
def test_composite_rejects_illegal_pairings_at_construction(bys):
    """Unit Test: Verifies only tag+class and tag+attribute composites can be built."""
    with pytest.raises(InvalidLocatorError):
        FluentBy.composite(*bys)


def test_last_appends_final_position_predicate_to_attribute_locator():
    assert FluentBy.last(FluentBy.attribute("foo", "bar")).resolve() == By.xpath(
        ".//*[@foo = 'bar' and position() = last()]"
    )
    assert FluentBy.last(FluentBy.attribute("foo")).resolve() == By.xpath(
        ".//*[@foo and position() = last()]"
    )


def test_last_keeps_attribute_value_verbatim():
    locator = FluentBy.last(FluentBy.attribute("title", "x[ and y"))

    assert locator.make_xpath() == ".//*[@title = 'x[ and y' and position() = last()]"


def test_last_without_argument_matches_last_element():
    assert FluentBy.last().resolve() == By.xpath(".//*[position() = last()]")
    assert str(FluentBy.last()) == "By.xpath: .//*[position() = last()]"


@pytest.mark.parametrize(
    "by",
    [
        By.id("x"),
        By.xpath(".//div"),
        FluentBy.composite(By.tag_name("div"), By.class_name("item")),
    ],
)
def test_last_rejects_non_attribute_locators(by):
    with pytest.raises(UnsupportedOperationError, match="last\\(\\) not allowed"):
        FluentBy.last(by)


def test_strict_class_name():
    strict = FluentBy.strict_class_name("item")
    assert strict.resolve() == By.xpath(".//*[@class = 'item']")
    assert str(strict) == "FluentBy.strictClassName: item"


@pytest.mark.parametrize("class_name", ["one two", "one\ttwo", " one"])
def test_strict_class_name_rejects_compound_names(class_name):
    with pytest.raises(InvalidLocatorError, match="Compound class names"):
        FluentBy.strict_class_name(class_name)


def test_strict_class_name_rejects_none():
    with pytest.raises(ValueError):
        FluentBy.strict_class_name(None)


def test_xpath_literal_quoting():
    """Unit Test: Verifies literals are quoted with whichever quote they don't contain."""
    assert xpath_literal("bar") == "'bar'"
    assert xpath_literal("it's") == '"it\'s"'
    assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"


def test_attribute_value_with_single_quote_is_quoted_safely():
    assert FluentBy.attribute("title", "it's").resolve() == By.xpath(
        ".//*[@title = \"it's\"]"
    )


def test_refine_for_tag():
    """Unit Test: Verifies how locate steps turn a caller's locator into a backend query."""
    assert refine_for_tag(None, "span") == By.tag_name("span")
    assert refine_for_tag(By.xpath("@foo = 'bar'"), "span") == By.xpath(
        ".//span[@foo = 'bar']"
    )
    assert refine_for_tag(By.css_selector("baz"), "span") == By.css_selector("baz")
    assert refine_for_tag(FluentBy.attribute("foo"), "span") == By.xpath(".//*[@foo]")
