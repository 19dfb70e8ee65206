"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from geomaps.domain.config.maps import MapsConfig
from geomaps.domain.config.retry import RetryConfig


class AppConfig(BaseModel):
    """Main application configuration.

    Root model aggregating all configuration sections. Validation happens at
    load time to fail fast on configuration errors.

    Attributes:
        maps: Maps web service configuration
        retry: Retry logic configuration
    """

    maps: MapsConfig = Field(default_factory=MapsConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "maps": {
                    "api_key": None,
                    "base_url": "https://maps.googleapis.com/maps/api/",
                    "timeout": 10.0,
                    "language": "en",
                },
                "retry": {
                    "max_tries": 5,
                    "initial_delay": 1.0,
                    "jitter": 0.5,
                },
            }
        },
    )
