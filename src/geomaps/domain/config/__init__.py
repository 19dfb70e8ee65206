"""Configuration models with Pydantic validation."""

from geomaps.domain.config.app import AppConfig
from geomaps.domain.config.maps import MapsConfig
from geomaps.domain.config.retry import RetryConfig

__all__ = [
    "AppConfig",
    "MapsConfig",
    "RetryConfig",
]
