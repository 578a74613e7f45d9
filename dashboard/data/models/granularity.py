from __future__ import annotations

from enum import Enum
from typing import Union

from dashboard.errors import InvalidGranularity


class Granularity(str, Enum):
    """Time resolution used to bucket orders and size comparison windows."""
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Union["Granularity", str]) -> "Granularity":
        """Return the matching member, raising InvalidGranularity for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidGranularity(value)

    @property
    def label(self) -> str:
        return self.value.capitalize()


class WeekScheme(str, Enum):
    """How weekly bucket keys are numbered."""
    ISO = "iso"
    SUNDAY = "sunday"  # Sunday-anchored approximation, may repeat or skip numbers
