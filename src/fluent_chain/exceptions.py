"""
Exceptions raised by fluent chains, locators and backends.
"""


class FluentChainError(Exception):
    """Base exception for all fluent-chain errors."""

    pass


class InvalidLocatorError(FluentChainError, ValueError):
    """A locator was built from an illegal argument or combination."""

    pass


class UnsupportedOperationError(FluentChainError):
    """The operation is not available for this locator or chain mode."""

    pass


class InvalidRecordingError(FluentChainError, ValueError):
    """A recorded invocation does not describe the method it names."""

    pass


class BackendError(FluentChainError):
    """Base for errors reported by a document backend."""

    pass


class NoSuchElementError(BackendError):
    """Nothing in the document matched the locator."""

    pass


class StaleElementReferenceError(BackendError):
    """An element handle is no longer attached to the document."""

    pass


class FluentExecutionStopped(FluentChainError):
    """
    Terminal failure of one chain step.

    Carries the number of retries attempted and the elapsed time. The
    original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, retries: int = 0, duration_ms: int = 0):
        super().__init__(message)
        self.base_message = message
        self.retries = retries
        self.duration_ms = duration_ms

    @property
    def message(self) -> str:
        prefix = ""
        if self.retries > 0:
            prefix = f"{self.retries} retries over {self.duration_ms} millis; "
        return prefix + self.base_message

    def __str__(self) -> str:
        return self.message


class BecauseOfStaleElement(FluentExecutionStopped):
    """The retry budget ran out while the element kept going stale."""

    pass


class BecauseNothingMatchesInFilter(FluentExecutionStopped):
    """A ``first(predicate)`` step found no matching element."""

    pass
