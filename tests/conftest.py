import pytest

from fluent_chain import (
    ExecutionEnvelope,
    FluentDriver,
    FluentRecorder,
    RecordingFactory,
    RetryPolicy,
)
from fluent_chain.drivers import JournalDriver


class FakeClock:
    """A monotonic clock that only moves when something sleeps on it."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, secs: float) -> None:
        self.sleeps.append(secs)
        self.now += secs


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def retry_policy() -> RetryPolicy:
    return RetryPolicy(
        max_attempts=3, budget_secs=5.0, backoff_secs=0.1, backoff_multiplier=2.0
    )


@pytest.fixture
def envelope(retry_policy: RetryPolicy, clock: FakeClock) -> ExecutionEnvelope:
    """An envelope whose back-off sleeps advance the fake clock instead of blocking."""
    return ExecutionEnvelope(retry_policy, clock=clock, sleep=clock.sleep)


@pytest.fixture
def journal() -> list[str]:
    return []


@pytest.fixture
def driver(journal: list[str]) -> JournalDriver:
    return JournalDriver(journal)


@pytest.fixture
def fwd(driver: JournalDriver, envelope: ExecutionEnvelope) -> FluentDriver:
    return FluentDriver(driver, envelope=envelope)


@pytest.fixture
def recorder() -> FluentRecorder:
    return FluentRecorder()


@pytest.fixture
def recording_root(recorder: FluentRecorder):
    return RecordingFactory().record_to(recorder)


@pytest.fixture
def span_chain_journal() -> list[str]:
    """Backend calls made by span().span(xpath).span(css).spans()."""
    return [
        "wd0.findElement(By.tagName: span) -> we1",
        "we1.getTagName() -> 'span'",
        "we1.findElement(By.xpath: .//span[@foo = 'bar']) -> we2",
        "we2.getTagName() -> 'span'",
        "we2.findElement(By.selector: baz) -> we3",
        "we3.getTagName() -> 'span'",
        "we3.findElements(By.tagName: span) -> [we4, we5]",
        "we4.getTagName() -> 'span'",
        "we5.getTagName() -> 'span'",
    ]
