from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

from ..common.datetime_utils import parse_time_of_day

TimeOfDay = Union[time, str, None]


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named work-time window.

    ``start_time``/``end_time`` keep whatever the shift store handed back
    (``time`` or "HH:MM[:SS]" text); the calculation engine parses them and
    treats malformed values as "no shift".
    """

    shift_id: int
    shift_name: str
    start_time: TimeOfDay
    end_time: TimeOfDay
    grace_period_minutes: int = 0
    full_day_hours: Optional[float] = None
    half_day_hours: Optional[float] = None
    is_default: bool = False

    @property
    def grace_minutes(self) -> int:
        return max(int(self.grace_period_minutes or 0), 0)

    @property
    def is_overnight(self) -> bool:
        start = parse_time_of_day(self.start_time)
        end = parse_time_of_day(self.end_time)
        if start is None or end is None:
            return False
        return end <= start
