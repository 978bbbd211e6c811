import strawberry
from typing import Optional
from strawberry.types import Info
from django.utils import timezone

from profile_management.models import Student, Teacher
from timetable.models import TimeSlot

from .types import DashboardStatsType, UserType
from .auth import require_auth, require_staff


@strawberry.type
class Query:

    # ==================================================
    # USER
    # ==================================================
    @strawberry.field
    @require_auth
    def me(self, info: Info) -> Optional[UserType]:
        """
        Get current authenticated user info
        Used for page refresh to restore auth state
        Requires valid JWT token in Authorization header
        """
        return info.context.request.user

    # ==================================================
    # DASHBOARD
    # ==================================================
    @strawberry.field
    @require_staff
    def dashboard_stats(self, info: Info) -> DashboardStatsType:
        """Headline counts for the admin dashboard"""
        return DashboardStatsType(
            student_count=Student.objects.count(),
            teacher_count=Teacher.objects.count(),
            scheduled_today=TimeSlot.objects.filter(
                date=timezone.localdate(),
                status=TimeSlot.SCHEDULED
            ).count()
        )
