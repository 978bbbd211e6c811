"""
Validators for teacher and student profiles
"""
from datetime import date
from typing import Dict, List, Tuple

from timetable.utils import is_valid_time


class TeacherProfileValidator:
    """
    Validates teacher data before it is saved
    """

    @staticmethod
    def validate_availability_window(window: Dict) -> Tuple[bool, str]:
        """
        Validate a single availability window payload

        Args:
            window: Dictionary containing:
                - is_recurring: bool (defaults to True)
                - day_of_week: 0-6 for recurring windows (0=Sunday)
                - specific_date: date for one-off windows
                - start_time / end_time: "HH:MM"

        Returns:
            Tuple of (is_valid: bool, error_message: str)
        """
        is_recurring = window.get('is_recurring', True)

        if is_recurring:
            day = window.get('day_of_week')
            if not isinstance(day, int) or isinstance(day, bool) or not 0 <= day <= 6:
                return (False, "Invalid day of week in time slot")
        else:
            if not isinstance(window.get('specific_date'), date):
                return (False, "One-off time slots need a specific date")

        start_time = window.get('start_time')
        end_time = window.get('end_time')

        if not is_valid_time(start_time):
            return (False, "Invalid start time format. Use HH:MM (24-hour format)")

        if not is_valid_time(end_time):
            return (False, "Invalid end time format. Use HH:MM (24-hour format)")

        if start_time.zfill(5) >= end_time.zfill(5):
            return (False, "End time must be after start time")

        return (True, "")

    @classmethod
    def validate_availability(cls, teacher_type: str, windows: List[Dict]) -> Tuple[bool, str]:
        """
        Validate the availability windows submitted for a teacher

        Part-time teachers must declare at least one window.
        """
        from .models import Teacher

        if teacher_type == Teacher.PART_TIME and not windows:
            return (False, "At least one available time slot is required for part-time teachers")

        for window in windows:
            is_valid, error_message = cls.validate_availability_window(window)
            if not is_valid:
                return (False, error_message)

        return (True, "")
