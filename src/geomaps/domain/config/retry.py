"""Retry configuration model."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RetryConfig(BaseModel):
    """Configuration for the retrying transport.

    Attributes:
        max_tries: Maximum number of attempts per request
            (also read from ``max_attempts`` or ``max_retries``)
        initial_delay: First wait between attempts, in seconds
            (also read from ``retry_delay``)
        jitter: Random term added after each doubling, as a fraction of
            initial_delay (0.5 = +/- half the initial delay)
    """

    max_tries: int = Field(
        5,
        gt=0,
        le=20,
        validation_alias=AliasChoices("max_tries", "max_attempts", "max_retries"),
    )
    initial_delay: float = Field(
        1.0,
        ge=0.0,  # Allow 0 for tests
        validation_alias=AliasChoices("initial_delay", "retry_delay"),
    )
    jitter: float = Field(0.5, ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid")
