"""Base class for decoded API responses"""

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Response model: unknown fields are ignored, aliases and names both accepted"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
