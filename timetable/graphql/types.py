"""
GraphQL types for timetable management
"""
import datetime

import strawberry
import strawberry_django
from typing import Optional

from profile_management.graphql.types import StudentType, TeacherType
from timetable.models import TimeSlot


# ==================================================
# TIME SLOT TYPE
# ==================================================

@strawberry_django.type(TimeSlot)
class TimeSlotType:
    id: int
    teacher: Optional[TeacherType]
    teacher_name: str
    teacher_type: str
    student: Optional[StudentType]
    student_name: str
    date: datetime.date
    start_time: str
    end_time: str
    status: str
    subject: str
    notes: str
    created_at: datetime.datetime
    updated_at: datetime.datetime


# ==================================================
# AVAILABLE SLOT TYPE
# ==================================================

@strawberry.type
class AvailableSlotType:
    start: str
    end: str
    available: bool
