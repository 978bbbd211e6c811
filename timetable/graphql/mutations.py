"""
GraphQL mutations for timetable management
"""
import datetime

import strawberry
from typing import Optional
from strawberry.types import Info

from core.graphql.auth import require_staff
from timetable.services import BookingService
from .types import TimeSlotType


@strawberry.type
class TimetableMutation:
    """
    GraphQL mutations for booking time slots
    Errors carry a code in extensions: NOT_FOUND, BAD_FORMAT, UNAVAILABLE,
    CONFLICT or INVALID_STATE
    """

    @strawberry.mutation
    @require_staff
    def create_booking(
        self,
        info: Info,
        teacher_id: strawberry.ID,
        student_id: strawberry.ID,
        date: datetime.date,
        start_time: str,
        end_time: str,
        subject: str,
        notes: Optional[str] = ""
    ) -> TimeSlotType:
        """
        Book a lesson

        Args:
            teacher_id: ID of the teacher
            student_id: ID of the student
            date: Lesson date (YYYY-MM-DD)
            start_time: Start in HH:MM
            end_time: End in HH:MM
            subject: Subject taught
            notes: Optional notes

        Returns:
            Created time slot with status 'scheduled'
        """
        return BookingService().create_booking(
            teacher_id=teacher_id,
            student_id=student_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            subject=subject,
            notes=notes
        )

    @strawberry.mutation
    @require_staff
    def update_booking(
        self,
        info: Info,
        booking_id: strawberry.ID,
        date: Optional[datetime.date] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        status: Optional[str] = None,
        notes: Optional[str] = None
    ) -> TimeSlotType:
        """
        Reschedule a booking or change its status/notes
        Only the provided fields are changed
        """
        return BookingService().update_booking(
            booking_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            status=status,
            notes=notes
        )

    @strawberry.mutation
    @require_staff
    def delete_booking(self, info: Info, booking_id: strawberry.ID) -> bool:
        """
        Permanently remove a booking

        Returns:
            True if successful
        """
        BookingService().delete_booking(booking_id)
        return True
