import pytest
from playwright.sync_api import Error as PlaywrightError
from pytest_mock import MockerFixture

from fluent_chain import By, FluentDriver, FluentExecutionStopped, Point, RetryPolicy
from fluent_chain.drivers.playwright_driver import (
    PlaywrightDriver,
    PlaywrightElement,
    to_selector,
)
from fluent_chain.exceptions import (
    InvalidLocatorError,
    NoSuchElementError,
    StaleElementReferenceError,
)


@pytest.fixture
def page(mocker: MockerFixture):
    return mocker.MagicMock(name="page")


@pytest.fixture
def handle(mocker: MockerFixture):
    handle = mocker.MagicMock(name="element_handle")
    handle.evaluate.return_value = "span"
    return handle


@pytest.mark.parametrize(
    "by, selector",
    [
        (By.id("main"), 'css=[id="main"]'),
        (By.name("q"), 'css=[name="q"]'),
        (By.class_name("item"), 'css=[class~="item"]'),
        (By.tag_name("span"), "css=span"),
        (By.css_selector("div > p"), "css=div > p"),
        (By.xpath(".//span[@foo = 'bar']"), "xpath=.//span[@foo = 'bar']"),
        (By.link_text('Say "hi"'), 'css=a:text-is("Say \\"hi\\"")'),
        (By.partial_link_text("Home"), 'css=a:has-text("Home")'),
    ],
)
def test_to_selector(by, selector):
    assert to_selector(by) == selector


def test_to_selector_rejects_unknown_strategy():
    with pytest.raises(InvalidLocatorError):
        to_selector(By("shadow", "x"))


def test_find_element_queries_page(page, handle):
    """Unit Test: Verifies locators are translated and run against the page."""
    page.query_selector.return_value = handle

    element = PlaywrightDriver(page).find_element(By.id("main"))

    page.query_selector.assert_called_once_with('css=[id="main"]')
    assert isinstance(element, PlaywrightElement)


def test_find_element_without_match_raises(page):
    page.query_selector.return_value = None

    with pytest.raises(NoSuchElementError, match="By.id: missing"):
        PlaywrightDriver(page).find_element(By.id("missing"))


def test_find_elements_from_element_is_scoped_to_handle(page, handle, mocker):
    child = mocker.MagicMock(name="child")
    handle.query_selector_all.return_value = [child, child]

    found = PlaywrightElement(handle).find_elements(By.tag_name("li"))

    handle.query_selector_all.assert_called_once_with("css=li")
    assert len(found) == 2


def test_detached_handle_is_reported_as_stale(handle):
    handle.click.side_effect = PlaywrightError("Element is not attached to the DOM")

    with pytest.raises(StaleElementReferenceError):
        PlaywrightElement(handle).click()


def test_other_playwright_errors_propagate(handle):
    handle.click.side_effect = PlaywrightError("Timeout 30000ms exceeded")

    with pytest.raises(PlaywrightError):
        PlaywrightElement(handle).click()


def test_element_operations_map_to_handle(handle):
    element = PlaywrightElement(handle)
    handle.inner_text.return_value = "hello"
    handle.bounding_box.return_value = {"x": 3.7, "y": 4.2, "width": 10, "height": 20}

    element.clear()
    element.send_keys("bo", "b")

    handle.fill.assert_called_once_with("")
    handle.type.assert_called_once_with("bob")
    assert element.get_text() == "hello"
    assert element.get_tag_name() == "span"
    assert element.get_location() == Point(x=3, y=4)
    assert element.get_size().height == 20


def test_chain_over_playwright_backend(page, handle):
    """Integration Test: Verifies a fluent chain drives a Playwright page end to end."""
    page.query_selector.return_value = handle
    handle.inner_text.return_value = "Welcome"

    fwd = FluentDriver(PlaywrightDriver(page), policy=RetryPolicy.none())

    assert fwd.span(By.id("greeting")).get_text() == "Welcome"


def test_chain_over_playwright_backend_reports_tag_mismatch(page, handle):
    page.query_selector.return_value = handle
    handle.evaluate.return_value = "div"

    fwd = FluentDriver(PlaywrightDriver(page), policy=RetryPolicy.none())

    with pytest.raises(FluentExecutionStopped, match=r"AssertionError during invocation of: \?\.span\(By\.id: x\)"):
        fwd.span(By.id("x"))
