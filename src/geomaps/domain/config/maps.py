"""Maps web service configuration model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MapsConfig(BaseModel):
    """Configuration for the Maps web services.

    Attributes:
        api_key: API key (None = from GOOGLE_MAPS_API_KEY env)
        client_id: Enterprise client ID (None = from GOOGLE_MAPS_CLIENT_ID env)
        signing_key: Enterprise URL signing key (None = from GOOGLE_MAPS_SIGNING_KEY env)
        base_url: Base URL of the maps web services
        roads_base_url: Base URL of the Roads API
        timeout: Per-attempt HTTP timeout in seconds
        language: Default result language for CLI requests
        region: Default region bias for CLI requests
    """

    api_key: Optional[str] = None
    client_id: Optional[str] = None
    signing_key: Optional[str] = None
    base_url: str = "https://maps.googleapis.com/maps/api/"
    roads_base_url: str = "https://roads.googleapis.com/v1/"
    timeout: float = Field(10.0, gt=0.0)
    language: Optional[str] = None
    region: Optional[str] = None

    model_config = ConfigDict(extra="forbid")
