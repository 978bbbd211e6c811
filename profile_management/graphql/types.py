"""GraphQL types for profile management"""
import strawberry
import strawberry_django
from typing import List, Optional
from datetime import date, datetime

from profile_management.models import AvailabilityWindow, Student, Teacher


@strawberry_django.type(AvailabilityWindow)
class AvailabilityWindowType:
    id: int
    is_recurring: bool
    day_of_week: Optional[int]
    specific_date: Optional[date]
    start_time: str
    end_time: str

    @strawberry_django.field
    def day_name(self) -> Optional[str]:
        if self.day_of_week is None:
            return None
        return self.get_day_of_week_display()


@strawberry_django.type(Teacher)
class TeacherType:
    id: int
    name: str
    email: str
    contact_no: str
    address: str
    teacher_type: str
    subjects: strawberry.scalars.JSON
    joining_date: Optional[date]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    availability_windows: List[AvailabilityWindowType]


@strawberry_django.type(Student)
class StudentType:
    id: int
    name: str
    email: str
    contact_no: str
    address: str
    class_name: str
    courses: strawberry.scalars.JSON
    course_mode: str
    start_date: Optional[date]
    end_date: Optional[date]
    total_amount: int
    is_active: bool
    created_at: datetime


# ==================================================
# INPUT TYPES
# ==================================================

@strawberry.input
class AvailabilityWindowInput:
    start_time: str
    end_time: str
    is_recurring: bool = True
    day_of_week: Optional[int] = None
    specific_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            'is_recurring': self.is_recurring,
            'day_of_week': self.day_of_week,
            'specific_date': self.specific_date,
            'start_time': self.start_time,
            'end_time': self.end_time,
        }


@strawberry.input
class CreateTeacherInput:
    name: str
    email: str
    contact_no: str
    address: str
    teacher_type: str = Teacher.FULL_TIME
    subjects: Optional[strawberry.scalars.JSON] = None
    joining_date: Optional[date] = None
    available_time_slots: Optional[List[AvailabilityWindowInput]] = None


@strawberry.input
class UpdateTeacherInput:
    name: Optional[str] = None
    email: Optional[str] = None
    contact_no: Optional[str] = None
    address: Optional[str] = None
    teacher_type: Optional[str] = None
    subjects: Optional[strawberry.scalars.JSON] = None
    joining_date: Optional[date] = None
    is_active: Optional[bool] = None
    available_time_slots: Optional[List[AvailabilityWindowInput]] = None


@strawberry.input
class CreateStudentInput:
    name: str
    email: str
    contact_no: str
    address: str = ""
    class_name: str = ""
    courses: Optional[strawberry.scalars.JSON] = None
    course_mode: str = "OFFLINE"
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@strawberry.input
class UpdateStudentInput:
    name: Optional[str] = None
    email: Optional[str] = None
    contact_no: Optional[str] = None
    address: Optional[str] = None
    class_name: Optional[str] = None
    courses: Optional[strawberry.scalars.JSON] = None
    course_mode: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
