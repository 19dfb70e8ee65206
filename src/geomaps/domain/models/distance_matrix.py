"""Distance Matrix API response models"""

from typing import List, Optional

from pydantic import Field

from geomaps.domain.models.base import ApiModel
from geomaps.domain.models.directions import Distance, Duration


class DistanceMatrixElement(ApiModel):
    """One origin/destination pair.

    ``status`` is OK, NOT_FOUND or ZERO_RESULTS; duration and distance are
    missing unless it is OK.
    """

    status: str = ""
    duration: Optional[Duration] = None
    distance: Optional[Distance] = None


class DistanceMatrixRow(ApiModel):
    elements: List[DistanceMatrixElement] = Field(default_factory=list)


class DistanceMatrixResult(ApiModel):
    """Rows follow the order of origins, elements the order of destinations"""

    origin_addresses: List[str] = Field(default_factory=list)
    destination_addresses: List[str] = Field(default_factory=list)
    rows: List[DistanceMatrixRow] = Field(default_factory=list)
