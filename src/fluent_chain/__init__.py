"""
fluent-chain: locate-then-act chains over a document backend, with
tag-name assertions, stale-element retry and record/playback.
"""

from .chain import FluentChain, FluentDriver, OngoingChain
from .envelope import ExecutionEnvelope
from .exceptions import (
    BecauseNothingMatchesInFilter,
    BecauseOfStaleElement,
    FluentChainError,
    FluentExecutionStopped,
    InvalidLocatorError,
    InvalidRecordingError,
    NoSuchElementError,
    StaleElementReferenceError,
    UnsupportedOperationError,
)
from .locators import By, FluentBy
from .models import Dimension, Invocation, Point, RetryPolicy
from .recording import FluentRecorder, Recording, RecordingChain, RecordingFactory

__all__ = [
    "By",
    "FluentBy",
    "FluentChain",
    "FluentDriver",
    "OngoingChain",
    "ExecutionEnvelope",
    "FluentRecorder",
    "Recording",
    "RecordingChain",
    "RecordingFactory",
    "RetryPolicy",
    "Invocation",
    "Point",
    "Dimension",
    "FluentChainError",
    "FluentExecutionStopped",
    "BecauseOfStaleElement",
    "BecauseNothingMatchesInFilter",
    "InvalidLocatorError",
    "InvalidRecordingError",
    "NoSuchElementError",
    "StaleElementReferenceError",
    "UnsupportedOperationError",
]
