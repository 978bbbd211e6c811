"""
Candidate slot generation for the booking UI
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from core.exceptions import NotFoundError
from profile_management.models import Teacher
from .config import SchedulingConfiguration
from .utils import minutes_to_time, parse_date, parse_object_id, time_to_minutes
from .validators import TimeSlotConflictValidator


@dataclass(frozen=True)
class CandidateSlot:
    start: str
    end: str
    available: bool


class SlotGenerator:
    """
    Lists fixed-length slots within the configured working hours for a teacher

    The report uses the global working hours, not the teacher's availability
    windows, and marks a slot unavailable only when a scheduled booking has
    exactly the same start and end. It is informational; ``BookingService``
    remains the authority on whether a booking is accepted.
    """

    def __init__(self, config: Optional[SchedulingConfiguration] = None):
        self.config = config or SchedulingConfiguration.from_settings()

    def candidate_windows(self):
        """Yield (start, end) pairs stepping through the working day"""
        day_start = time_to_minutes(self.config.day_start_time)
        day_end = time_to_minutes(self.config.day_end_time)
        duration = self.config.slot_duration

        current = day_start
        while current < day_end:
            slot_end = current + duration
            if slot_end <= day_end:
                yield minutes_to_time(current), minutes_to_time(slot_end)
            current = slot_end

    def generate_slots(self, teacher_id, slot_date) -> List[CandidateSlot]:
        """
        Build the slot report for one teacher and date

        Args:
            teacher_id: Teacher ID
            slot_date: Calendar date (date or ISO string)

        Returns:
            List of CandidateSlot in chronological order

        Raises:
            NotFoundError: If the teacher does not exist
            FormatError: If the ID or date is malformed
        """
        teacher_pk = parse_object_id(teacher_id, 'teacher ID')
        slot_date: date = parse_date(slot_date)

        if not Teacher.objects.filter(pk=teacher_pk).exists():
            raise NotFoundError("Teacher not found", details={'teacher_id': teacher_pk})

        booked = set(TimeSlotConflictValidator.booked_intervals(
            TimeSlotConflictValidator.TEACHER, teacher_pk, slot_date
        ))

        return [
            CandidateSlot(start=start, end=end, available=(start, end) not in booked)
            for start, end in self.candidate_windows()
        ]
