import strawberry
from typing import Optional


# ==================================================
# TYPE DEFINITIONS
# ==================================================

@strawberry.type
class UserType:
    id: int
    username: str
    email: Optional[str]
    is_active: bool
    is_staff: bool


@strawberry.type
class DashboardStatsType:
    student_count: int
    teacher_count: int
    scheduled_today: int
