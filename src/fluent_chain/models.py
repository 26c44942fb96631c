# fluent_chain/models.py

"""
Pydantic models for the values that travel through a fluent chain: retry
policies, recorded invocations and element geometry.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from . import config


class RetryPolicy(BaseModel):
    """How often, and for how long, a transient failure may be retried."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(
        config.RETRY_MAX_ATTEMPTS,
        ge=1,
        description="Total attempts, including the first one.",
    )
    budget_secs: float = Field(
        config.RETRY_BUDGET_SECS,
        ge=0,
        description="Upper bound on time spent across all attempts.",
    )
    backoff_secs: float = Field(
        config.RETRY_BACKOFF_SECS, ge=0, description="Sleep before the first retry."
    )
    backoff_multiplier: float = Field(
        config.RETRY_BACKOFF_MULTIPLIER,
        ge=1,
        description="Growth factor applied to the sleep after each retry.",
    )

    @classmethod
    def from_env(cls) -> "RetryPolicy":
        return cls(
            max_attempts=config.RETRY_MAX_ATTEMPTS,
            budget_secs=config.RETRY_BUDGET_SECS,
            backoff_secs=config.RETRY_BACKOFF_SECS,
            backoff_multiplier=config.RETRY_BACKOFF_MULTIPLIER,
        )

    @classmethod
    def none(cls) -> "RetryPolicy":
        """A policy that never retries."""
        return cls(max_attempts=1, budget_secs=0, backoff_secs=0)

    @classmethod
    def within(cls, secs: float) -> "RetryPolicy":
        """Retry for as long as ``secs`` allows, however many attempts that takes."""
        return cls(max_attempts=10_000, budget_secs=secs)

    def delay_for(self, retry_index: int) -> float:
        """Back-off before retry number ``retry_index`` (zero based)."""
        return self.backoff_secs * (self.backoff_multiplier**retry_index)


class Invocation(BaseModel):
    """
    One chain step captured while recording.

    ``target`` is the placeholder the method was called on and ``produces``
    the placeholder it handed back, so playback can rebuild the same lineage.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target: str = Field(..., description="Placeholder id the call was made on.")
    produces: str = Field(..., description="Placeholder id returned by the call.")
    method: str = Field(..., description="Chain method name to invoke on playback.")
    args: tuple[Any, ...] = Field(default_factory=tuple)
    expected_tag: str | None = Field(
        None, description="Tag name asserted by a tag-specific locate step."
    )
    multiplicity: Literal["single", "many"] | None = Field(
        None, description="Set for locate steps only."
    )


class Point(BaseModel):
    """Top-left position of an element."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class Dimension(BaseModel):
    """Rendered size of an element."""

    model_config = ConfigDict(frozen=True)

    width: int
    height: int
