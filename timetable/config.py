"""
Scheduling configuration
Working hours and fixed slot rules passed into the booking services
"""
from dataclasses import dataclass, fields
from typing import Optional

from django.conf import settings

from .utils import parse_time, time_to_minutes


@dataclass(frozen=True)
class SchedulingConfiguration:
    """
    Immutable scheduling settings

    Built once from ``settings.TIMETABLE`` and handed to ``BookingService``
    and ``SlotGenerator`` so neither reads process-wide state directly.
    """
    day_start_time: str = '09:00'
    day_end_time: str = '18:00'
    slot_duration: int = 60  # minutes
    part_time_slot_start: str = '09:00'
    part_time_slot_end: str = '10:00'

    def __post_init__(self):
        for name in ('day_start_time', 'day_end_time', 'part_time_slot_start', 'part_time_slot_end'):
            object.__setattr__(self, name, parse_time(getattr(self, name)))

        if self.day_start_time >= self.day_end_time:
            raise ValueError("day_end_time must be after day_start_time")
        if self.part_time_slot_start >= self.part_time_slot_end:
            raise ValueError("part_time_slot_end must be after part_time_slot_start")
        if self.slot_duration <= 0:
            raise ValueError("slot_duration must be a positive number of minutes")

    @property
    def working_minutes(self) -> int:
        return time_to_minutes(self.day_end_time) - time_to_minutes(self.day_start_time)

    @classmethod
    def from_settings(cls, overrides: Optional[dict] = None) -> 'SchedulingConfiguration':
        """Build configuration from the TIMETABLE setting, ignoring unknown keys"""
        values = dict(getattr(settings, 'TIMETABLE', {}))
        values.update(overrides or {})
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})
