"""
GraphQL queries for timetable management
"""
import datetime

import strawberry
from typing import List, Optional
from strawberry.types import Info

from core.graphql.auth import require_auth
from profile_management.graphql.types import StudentType
from timetable.services import BookingService
from timetable.slots import SlotGenerator
from .types import AvailableSlotType, TimeSlotType


@strawberry.type
class TimetableQuery:
    """
    GraphQL queries for booked time slots
    """

    @strawberry.field
    @require_auth
    def bookings(
        self,
        info: Info,
        teacher_id: Optional[strawberry.ID] = None,
        student_id: Optional[strawberry.ID] = None,
        start_date: Optional[datetime.date] = None,
        end_date: Optional[datetime.date] = None,
        status: Optional[str] = None
    ) -> List[TimeSlotType]:
        """
        Get time slots with optional filters

        Args:
            teacher_id: Optional teacher filter
            student_id: Optional student filter
            start_date: Inclusive start of date range
            end_date: Inclusive end of date range (both are needed to filter by date)
            status: Optional status filter (scheduled, completed, cancelled)

        Returns:
            List of time slots ordered by date and start time
        """
        return list(BookingService.list_bookings(
            teacher_id=teacher_id,
            student_id=student_id,
            start_date=start_date,
            end_date=end_date,
            status=status
        ))

    @strawberry.field
    @require_auth
    def booking(self, info: Info, booking_id: strawberry.ID) -> TimeSlotType:
        return BookingService.get_booking(booking_id)

    @strawberry.field
    @require_auth
    def available_slots(
        self,
        info: Info,
        teacher_id: strawberry.ID,
        date: datetime.date
    ) -> List[AvailableSlotType]:
        """
        Get the working-hour slots of a teacher on a date
        Slots exactly matching a scheduled booking are marked unavailable
        """
        slots = SlotGenerator().generate_slots(teacher_id, date)
        return [
            AvailableSlotType(start=slot.start, end=slot.end, available=slot.available)
            for slot in slots
        ]

    @strawberry.field
    @require_auth
    def available_students(
        self,
        info: Info,
        teacher_id: strawberry.ID,
        date: datetime.date,
        start_time: str,
        end_time: str,
        exclude_booked: bool = True
    ) -> List[StudentType]:
        """
        Get students who are free for a lesson in the given window
        """
        return BookingService().available_students(
            teacher_id, date, start_time, end_time, exclude_booked=exclude_booked
        )
