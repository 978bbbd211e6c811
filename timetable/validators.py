"""
Validators for time slot bookings
Checks teacher availability and scheduling conflicts before saving
"""
from datetime import date
from typing import List, Optional, Tuple


class AvailabilityValidator:
    """
    Decides whether a teacher may be booked for a given window
    Full-time teachers are unconstrained; part-time and visiting teachers must
    have an availability window that fully contains the requested interval.
    """

    @staticmethod
    def is_permitted(teacher, slot_date: date, start_time: str, end_time: str) -> bool:
        """
        Check a proposed booking window against the teacher's availability

        Args:
            teacher: Teacher instance
            slot_date: Calendar date of the booking
            start_time: Normalised "HH:MM" start
            end_time: Normalised "HH:MM" end

        Returns:
            True if the window is permitted, False otherwise
        """
        if not teacher.requires_availability_check:
            return True

        return any(
            window.matches_date(slot_date) and window.contains(start_time, end_time)
            for window in teacher.availability_windows.all()
        )


class TimeSlotConflictValidator:
    """
    Detects double-booking of teachers and students
    Only bookings with status 'scheduled' take part in conflict checks
    """
    TEACHER = 'teacher'
    STUDENT = 'student'

    RESOURCE_KINDS = (TEACHER, STUDENT)

    @classmethod
    def scheduled_bookings(cls, resource_kind: str, resource_id: int, slot_date: date,
                           exclude_booking_id: Optional[int] = None):
        """
        Scheduled bookings of one teacher or student on a date

        Args:
            resource_kind: 'teacher' or 'student'
            resource_id: Teacher or Student ID
            slot_date: Calendar date
            exclude_booking_id: Optional booking ID to exclude (for updates)

        Returns:
            QuerySet of TimeSlot
        """
        from .models import TimeSlot

        if resource_kind not in cls.RESOURCE_KINDS:
            raise ValueError(f"Unknown resource kind '{resource_kind}'")

        query = TimeSlot.objects.filter(
            **{f'{resource_kind}_id': resource_id},
            date=slot_date,
            status=TimeSlot.SCHEDULED
        )

        if exclude_booking_id:
            query = query.exclude(id=exclude_booking_id)

        return query

    @classmethod
    def has_conflict(cls, resource_kind: str, resource_id: int, slot_date: date,
                     start_time: str, end_time: str,
                     exclude_booking_id: Optional[int] = None) -> bool:
        """
        Check if [start_time, end_time) overlaps an existing scheduled booking

        The ORM filter is the same half-open predicate as ``utils.overlaps``:
        existing.start < end and start < existing.end

        Returns:
            True if the resource is already booked, False if free
        """
        return cls.scheduled_bookings(
            resource_kind, resource_id, slot_date, exclude_booking_id
        ).filter(
            start_time__lt=end_time,
            end_time__gt=start_time
        ).exists()

    @classmethod
    def find_conflict(cls, teacher_id: Optional[int], student_id: Optional[int], slot_date: date,
                      start_time: str, end_time: str,
                      exclude_booking_id: Optional[int] = None) -> Tuple[bool, str]:
        """
        Check both sides of a booking

        Returns:
            Tuple of (is_valid: bool, error_message: str)
        """
        if teacher_id and cls.has_conflict(
            cls.TEACHER, teacher_id, slot_date, start_time, end_time, exclude_booking_id
        ):
            return (False, "Teacher already has a booking that overlaps with this time slot")

        if student_id and cls.has_conflict(
            cls.STUDENT, student_id, slot_date, start_time, end_time, exclude_booking_id
        ):
            return (False, "Student already has a booking that overlaps with this time slot")

        return (True, "No conflicts found")

    @classmethod
    def booked_intervals(cls, resource_kind: str, resource_id: int,
                         slot_date: date) -> List[Tuple[str, str]]:
        """Sorted (start, end) pairs of the resource's scheduled bookings on a date"""
        return list(
            cls.scheduled_bookings(resource_kind, resource_id, slot_date)
            .order_by('start_time')
            .values_list('start_time', 'end_time')
        )

    @classmethod
    def has_booking_on_date(cls, teacher_id: int, slot_date: date,
                            exclude_booking_id: Optional[int] = None) -> bool:
        """Whether the teacher already has any scheduled booking that day"""
        return cls.scheduled_bookings(
            cls.TEACHER, teacher_id, slot_date, exclude_booking_id
        ).exists()

