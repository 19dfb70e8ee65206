"""Time Zone API response model"""

from datetime import timedelta

from pydantic import Field

from geomaps.domain.models.base import ApiModel


class TimeZoneResult(ApiModel):
    """Time zone at a location.

    Attributes:
        dst_offset: Daylight-saving offset in seconds (0 outside DST)
        raw_offset: Offset from UTC in seconds, without DST
        time_zone_id: tz database ID, e.g. "America/Los_Angeles"
        time_zone_name: Long name, localized when a language was requested
    """

    dst_offset: int = Field(0, alias="dstOffset")
    raw_offset: int = Field(0, alias="rawOffset")
    time_zone_id: str = Field("", alias="timeZoneId")
    time_zone_name: str = Field("", alias="timeZoneName")

    @property
    def dst_offset_timedelta(self) -> timedelta:
        return timedelta(seconds=self.dst_offset)

    @property
    def raw_offset_timedelta(self) -> timedelta:
        return timedelta(seconds=self.raw_offset)

    @property
    def utc_offset(self) -> timedelta:
        return timedelta(seconds=self.raw_offset + self.dst_offset)
