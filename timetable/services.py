"""
Booking workflows for time slots
Create, update, delete and list bookings with availability and conflict checks
"""
import logging
from typing import List, Optional

from django.db import IntegrityError, transaction

from core.exceptions import (
    AvailabilityError,
    BookingStateError,
    ConflictError,
    DailyLimitError,
    FormatError,
    NotFoundError,
)
from profile_management.models import Student, Teacher
from .config import SchedulingConfiguration
from .models import TimeSlot
from .utils import overlaps, parse_date, parse_object_id, parse_time
from .validators import AvailabilityValidator, TimeSlotConflictValidator

logger = logging.getLogger(__name__)


class BookingService:
    """
    Orchestrates the booking lifecycle

    scheduled -> completed | cancelled are the only status transitions;
    completed and cancelled bookings can no longer be moved or re-opened.
    Every check runs before anything is written, and the database unique
    constraints catch requests that race past the checks.
    """

    def __init__(self, config: Optional[SchedulingConfiguration] = None):
        self.config = config or SchedulingConfiguration.from_settings()

    # ==================================================
    # LOOKUPS
    # ==================================================

    @staticmethod
    def get_teacher(teacher_id) -> Teacher:
        teacher_pk = parse_object_id(teacher_id, 'teacher ID')
        try:
            return Teacher.objects.prefetch_related('availability_windows').get(pk=teacher_pk)
        except Teacher.DoesNotExist:
            raise NotFoundError("Teacher not found", details={'teacher_id': teacher_pk})

    @staticmethod
    def get_student(student_id) -> Student:
        student_pk = parse_object_id(student_id, 'student ID')
        try:
            return Student.objects.get(pk=student_pk)
        except Student.DoesNotExist:
            raise NotFoundError("Student not found", details={'student_id': student_pk})

    @staticmethod
    def get_booking(booking_id) -> TimeSlot:
        booking_pk = parse_object_id(booking_id, 'time slot ID')
        try:
            return TimeSlot.objects.select_related('teacher', 'student').get(pk=booking_pk)
        except TimeSlot.DoesNotExist:
            raise NotFoundError("Time slot not found", details={'booking_id': booking_pk})

    # ==================================================
    # CREATE
    # ==================================================

    def create_booking(self, teacher_id, student_id, date, start_time, end_time,
                       subject, notes: Optional[str] = '') -> TimeSlot:
        """
        Book a lesson for a teacher and student

        Raises:
            NotFoundError: Teacher or student does not exist
            FormatError: Malformed date, time or ID, or end not after start
            AvailabilityError: Outside a part-time/visiting teacher's availability
            ConflictError: Teacher or student already booked at that time
        """
        teacher = self.get_teacher(teacher_id)
        student = self.get_student(student_id)

        slot_date = parse_date(date)
        start = parse_time(start_time)
        end = parse_time(end_time)
        self._check_interval(start, end)

        if not subject or not subject.strip():
            raise FormatError("Subject is required")

        if not AvailabilityValidator.is_permitted(teacher, slot_date, start, end):
            logger.warning(
                "Rejected booking for teacher %s on %s %s-%s: outside availability",
                teacher.pk, slot_date, start, end
            )
            raise AvailabilityError(
                "This time slot is not available for the selected teacher",
                details={'teacher_id': teacher.pk, 'date': slot_date.isoformat()}
            )

        if teacher.is_part_time and TimeSlotConflictValidator.has_booking_on_date(teacher.pk, slot_date):
            raise DailyLimitError(
                "Part-time teachers can only have one booking per day",
                details={'teacher_id': teacher.pk, 'date': slot_date.isoformat()}
            )

        self._check_conflicts(teacher.pk, student.pk, slot_date, start, end)

        booking = TimeSlot(
            teacher=teacher,
            student=student,
            date=slot_date,
            start_time=start,
            end_time=end,
            subject=subject.strip(),
            notes=notes or '',
            status=TimeSlot.SCHEDULED
        )
        self._copy_snapshot(booking, teacher, student)
        self._save(booking)

        logger.info(
            "Created time slot %s: teacher %s, student %s on %s %s-%s",
            booking.pk, teacher.pk, student.pk, slot_date, start, end
        )
        return booking

    # ==================================================
    # UPDATE
    # ==================================================

    def update_booking(self, booking_id, date=None, start_time=None, end_time=None,
                       status: Optional[str] = None, notes: Optional[str] = None) -> TimeSlot:
        """
        Reschedule a booking or change its status/notes

        Conflict checks only run when the date or times change, and they
        exclude the booking itself.

        Raises:
            NotFoundError: Booking does not exist
            FormatError: Malformed value or unknown status
            BookingStateError: Booking is completed or cancelled
            AvailabilityError: Part-time teacher outside the fixed slot
            ConflictError: Overlap with another scheduled booking
        """
        booking = self.get_booking(booking_id)

        new_date = parse_date(date) if date is not None else None
        new_start = parse_time(start_time) if start_time is not None else None
        new_end = parse_time(end_time) if end_time is not None else None

        if status is not None and status not in dict(TimeSlot.STATUS_CHOICES):
            raise FormatError(f"Invalid status '{status}'", details={'status': status})

        time_changing = any(value is not None for value in (new_date, new_start, new_end))

        if booking.is_terminal:
            if time_changing or (status is not None and status != booking.status):
                raise BookingStateError(
                    f"Time slot is {booking.status} and can no longer be changed",
                    details={'booking_id': booking.pk, 'status': booking.status}
                )

        check_date = new_date or booking.date
        check_start = new_start or booking.start_time
        check_end = new_end or booking.end_time
        self._check_interval(check_start, check_end)

        # Terminal bookings only take notes, so their times are not re-checked
        teacher = booking.teacher
        if teacher is not None and teacher.is_part_time and not booking.is_terminal:
            fixed_slot = (self.config.part_time_slot_start, self.config.part_time_slot_end)
            if (check_start, check_end) != fixed_slot:
                raise AvailabilityError(
                    f"Part-time teachers can only have time slots from "
                    f"{fixed_slot[0]} to {fixed_slot[1]}",
                    details={'booking_id': booking.pk}
                )

            if new_date is not None and TimeSlotConflictValidator.has_booking_on_date(
                teacher.pk, check_date, exclude_booking_id=booking.pk
            ):
                raise DailyLimitError(
                    "Part-time teachers can only have one booking per day",
                    details={'teacher_id': teacher.pk, 'date': check_date.isoformat()}
                )

        if time_changing:
            self._check_conflicts(
                booking.teacher_id,
                booking.student_id,
                check_date,
                check_start,
                check_end,
                exclude_booking_id=booking.pk,
                message="Updated time slot conflicts with an existing booking"
            )

        booking.date = check_date
        booking.start_time = check_start
        booking.end_time = check_end
        if status is not None:
            booking.status = status
        if notes is not None:
            booking.notes = notes
        self._copy_snapshot(booking, booking.teacher, booking.student)
        self._save(booking)

        logger.info("Updated time slot %s (status=%s)", booking.pk, booking.status)
        return booking

    # ==================================================
    # DELETE / LIST
    # ==================================================

    def delete_booking(self, booking_id) -> None:
        booking = self.get_booking(booking_id)
        booking_pk = booking.pk
        booking.delete()
        logger.info("Deleted time slot %s", booking_pk)

    @staticmethod
    def list_bookings(teacher_id=None, student_id=None, start_date=None, end_date=None,
                      status: Optional[str] = None):
        """
        Bookings matching all given filters, ordered by date and start time

        Args:
            teacher_id: Optional teacher filter
            student_id: Optional student filter
            start_date: Inclusive start of the date range
            end_date: Inclusive end of the date range, used only together with start_date
            status: Optional status filter

        Returns:
            QuerySet of TimeSlot
        """
        query = TimeSlot.objects.select_related('teacher', 'student')

        if teacher_id is not None:
            query = query.filter(teacher_id=parse_object_id(teacher_id, 'teacher ID'))
        if student_id is not None:
            query = query.filter(student_id=parse_object_id(student_id, 'student ID'))
        # A lone start or end date does not filter
        if start_date is not None and end_date is not None:
            query = query.filter(date__range=(parse_date(start_date), parse_date(end_date)))
        if status is not None:
            if status not in dict(TimeSlot.STATUS_CHOICES):
                raise FormatError(f"Invalid status '{status}'", details={'status': status})
            query = query.filter(status=status)

        return query.order_by('date', 'start_time')

    def available_students(self, teacher_id, date, start_time, end_time,
                           exclude_booked: bool = True) -> List[Student]:
        """
        Students who could be booked with the teacher in the given window

        Args:
            exclude_booked: Drop students with an overlapping scheduled booking

        Returns:
            List of Student ordered by name
        """
        self.get_teacher(teacher_id)
        slot_date = parse_date(date)
        start = parse_time(start_time)
        end = parse_time(end_time)
        self._check_interval(start, end)

        students = Student.objects.filter(is_active=True).order_by('name')
        if not exclude_booked:
            return list(students)

        booked_student_ids = {
            booking.student_id
            for booking in TimeSlot.objects.filter(
                date=slot_date,
                status=TimeSlot.SCHEDULED,
                student__isnull=False
            ).only('student_id', 'start_time', 'end_time')
            if overlaps(booking.start_time, booking.end_time, start, end)
        }
        return [student for student in students if student.pk not in booked_student_ids]

    # ==================================================
    # HELPERS
    # ==================================================

    @staticmethod
    def _check_interval(start: str, end: str) -> None:
        if start >= end:
            raise FormatError(
                "End time must be after start time",
                details={'start_time': start, 'end_time': end}
            )

    @staticmethod
    def _check_conflicts(teacher_id, student_id, slot_date, start, end,
                         exclude_booking_id=None,
                         message="Time slot conflicts with an existing booking") -> None:
        is_valid, reason = TimeSlotConflictValidator.find_conflict(
            teacher_id, student_id, slot_date, start, end, exclude_booking_id
        )
        if not is_valid:
            logger.warning(
                "Rejected time slot on %s %s-%s (teacher %s, student %s): %s",
                slot_date, start, end, teacher_id, student_id, reason
            )
            raise ConflictError(message, details={'reason': reason})

    @staticmethod
    def _copy_snapshot(booking: TimeSlot, teacher: Optional[Teacher], student: Optional[Student]) -> None:
        """Refresh the cached display fields from the current profiles"""
        if teacher is not None:
            booking.teacher_name = teacher.name
            booking.teacher_type = teacher.teacher_type
        if student is not None:
            booking.student_name = student.name

    @staticmethod
    def _save(booking: TimeSlot) -> None:
        try:
            with transaction.atomic():
                booking.save()
        except IntegrityError as exc:
            logger.warning("Unique constraint rejected time slot %s: %s", booking.pk, exc)
            raise ConflictError("This time slot is already booked") from exc
