"""
Execution envelope around every live chain step.

One step is an action against the backend followed by assertions on its
result. Stale-element failures raised by either part are retried under a
RetryPolicy; anything else stops the chain.
"""

import enum
import time
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

import structlog

from .exceptions import (
    BecauseOfStaleElement,
    FluentExecutionStopped,
    StaleElementReferenceError,
)
from .models import RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")
Assertion = Callable[[Any], None]


class AttemptState(str, enum.Enum):
    PENDING = "pending"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED_FATAL = "failed_fatal"


class ExecutionEnvelope:
    """
    Runs one chain step against the backend.

    Stale-element failures are retried while the policy allows it, whether
    the action or an assertion raised them. Every other failure, and every
    failed assertion, stops the chain with a FluentExecutionStopped that
    names the step being executed.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.policy = policy if policy is not None else RetryPolicy.from_env()
        self._clock = clock
        self._sleep = sleep

    def run(
        self,
        description: str,
        action: Callable[[], T],
        assertions: Iterable[Assertion] = (),
        policy: RetryPolicy | None = None,
    ) -> T:
        policy = policy if policy is not None else self.policy
        assertions = tuple(assertions)
        log = logger.bind(invocation=description)
        started = self._clock()
        retries = 0
        state = AttemptState.PENDING

        while state is not AttemptState.SUCCEEDED:
            state = AttemptState.ATTEMPTING
            log.debug("Attempting chain step.", attempt=retries + 1)
            try:
                result = action()
                for assertion in assertions:
                    assertion(result)
                state = AttemptState.SUCCEEDED
            except FluentExecutionStopped:
                # Already describes an inner step (e.g. a predicate's own chain).
                raise
            except StaleElementReferenceError as e:
                delay = policy.delay_for(retries)
                elapsed = self._clock() - started
                can_retry = (
                    retries + 1 < policy.max_attempts
                    and elapsed + delay <= policy.budget_secs
                )
                if not can_retry:
                    state = AttemptState.FAILED_FATAL
                    raise self._stopped(
                        BecauseOfStaleElement, e, description, retries, started, state
                    ) from e
                state = AttemptState.RETRYING
                log.warning(
                    "Stale element, retrying chain step.",
                    state=state.value,
                    retry=retries + 1,
                    delay_secs=round(delay, 3),
                )
                self._sleep(delay)
                retries += 1
            except Exception as e:
                state = AttemptState.FAILED_FATAL
                raise self._stopped(
                    FluentExecutionStopped, e, description, retries, started, state
                ) from e

        log.debug("Chain step succeeded.", state=state.value, retries=retries)
        return result

    def _stopped(
        self,
        error_cls: type[FluentExecutionStopped],
        cause: BaseException,
        description: str,
        retries: int,
        started: float,
        state: AttemptState,
    ) -> FluentExecutionStopped:
        duration_ms = int((self._clock() - started) * 1000)
        error = error_cls(
            f"{type(cause).__name__} during invocation of: {description}",
            retries=retries,
            duration_ms=duration_ms,
        )
        logger.info(
            "Chain step stopped.",
            invocation=description,
            state=state.value,
            error=type(cause).__name__,
            retries=retries,
            duration_ms=duration_ms,
        )
        return error
