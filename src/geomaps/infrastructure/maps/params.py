"""Helpers for turning option values into query parameter strings"""

from datetime import datetime
from typing import Union

# datetime, unix seconds, or the literal "now"
Timestamp = Union[datetime, int, str]


def unix_time(value: Timestamp) -> str:
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    return str(value)


def join(values) -> str:
    return "|".join(str(v) for v in values)
