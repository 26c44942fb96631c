"""
Record-then-playback mode.

A ``RecordingChain`` has the same method surface as an ``OngoingChain`` but
never touches a backend: every step is appended to a ``FluentRecorder`` as
an ``Invocation`` and a fresh placeholder chain is returned so that chaining
can continue. ``Recording.playback`` later replays the invocations, in
order, against a live chain.
"""

import itertools
from collections.abc import Iterator

import structlog

from . import config
from .chain import FluentChain, OngoingChain
from .exceptions import InvalidRecordingError, UnsupportedOperationError
from .models import Invocation
from .tags import LOCATE_METHODS

logger = structlog.get_logger(__name__)

ROOT_PLACEHOLDER = f"{config.PLACEHOLDER_PREFIX}0"


class FluentRecorder:
    """Append-only log of recorded invocations."""

    def __init__(self):
        self._invocations: list[Invocation] = []
        self._placeholders = itertools.count(1)
        self._sealed = False

    def __len__(self) -> int:
        return len(self._invocations)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def next_placeholder(self) -> str:
        return f"{config.PLACEHOLDER_PREFIX}{next(self._placeholders)}"

    def append(self, invocation: Invocation) -> None:
        if self._sealed:
            raise UnsupportedOperationError(
                "Recorder is sealed; its recording has already been taken."
            )
        self._invocations.append(invocation)
        logger.debug(
            "Recorded invocation.",
            method=invocation.method,
            target=invocation.target,
            produces=invocation.produces,
        )

    def recording(self) -> "Recording":
        """Seals the recorder and returns its invocations as a Recording."""
        self._sealed = True
        return Recording(tuple(self._invocations))


class Recording:
    """An immutable, ordered sequence of invocations ready for playback."""

    def __init__(self, invocations: tuple[Invocation, ...]):
        self._invocations = invocations

    def __len__(self) -> int:
        return len(self._invocations)

    @property
    def invocations(self) -> tuple[Invocation, ...]:
        return self._invocations

    def playback(self, fluent_driver: OngoingChain) -> OngoingChain:
        """
        Replays every invocation against ``fluent_driver``.

        Each invocation runs on the live chain that stands in for its target
        placeholder, so errors are raised with exactly the description an
        immediate chain would have produced. The first error aborts playback.
        Locate invocations are checked against the tag and multiplicity their
        method asserts before anything is replayed.

        Returns:
            The live chain produced by the last invocation, or
            ``fluent_driver`` when the recording is empty.
        """
        for invocation in self._invocations:
            _check_locate(invocation)
        log = logger.bind(invocations=len(self._invocations))
        log.info("Playing back recording.")
        live: dict[str, OngoingChain] = {ROOT_PLACEHOLDER: fluent_driver}
        result = fluent_driver
        for index, invocation in enumerate(self._invocations):
            target = live[invocation.target]
            log.debug("Replaying invocation.", step=index, method=invocation.method)
            result = getattr(target, invocation.method)(*invocation.args)
            live[invocation.produces] = result
        log.info("Playback finished.")
        return result


def _check_locate(invocation: Invocation) -> None:
    if invocation.multiplicity is None:
        return
    asserted = LOCATE_METHODS.get(invocation.method)
    recorded = (invocation.expected_tag, invocation.multiplicity)
    if asserted != recorded:
        raise InvalidRecordingError(
            f"Invocation {invocation.method}() was recorded as {recorded}, "
            f"but the method asserts {asserted}"
        )


class RecordingChain(FluentChain):
    """Placeholder chain that records each step instead of running it."""

    def __init__(self, recorder: FluentRecorder, placeholder_id: str):
        self._recorder = recorder
        self.placeholder_id = placeholder_id

    def __repr__(self) -> str:
        return f"<RecordingChain {self.placeholder_id}>"

    def __bool__(self) -> bool:
        return True

    def __len__(self) -> int:
        raise UnsupportedOperationError(
            "len() needs a live backend and is not available while recording"
        )

    def __iter__(self) -> Iterator["RecordingChain"]:
        raise UnsupportedOperationError(
            "iteration needs a live backend and is not available while recording"
        )

    def _record(self, method, args, expected_tag=None, multiplicity=None):
        produces = self._recorder.next_placeholder()
        self._recorder.append(
            Invocation(
                target=self.placeholder_id,
                produces=produces,
                method=method,
                args=args,
                expected_tag=expected_tag,
                multiplicity=multiplicity,
            )
        )
        return RecordingChain(self._recorder, produces)

    def _locate(self, method, tag, locator, multiplicity):
        args = () if locator is None else (locator,)
        return self._record(method, args, tag, multiplicity)

    def _act(self, method, *args):
        return self._record(method, args)

    def _read(self, method, *args):
        raise UnsupportedOperationError(
            f"{method}() needs a live backend and is not available while recording"
        )

    def _collect(self, method, predicate):
        return self._record(method, (predicate,))

    def within(self, secs: float) -> "RecordingChain":
        return self._record("within", (secs,))


class RecordingFactory:
    """Entry point for recording mode."""

    def record_to(self, recorder: FluentRecorder) -> RecordingChain:
        return RecordingChain(recorder, ROOT_PLACEHOLDER)
