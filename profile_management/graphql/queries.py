"""GraphQL queries for profile management"""
import strawberry
from typing import List, Optional
from strawberry.types import Info

from core.exceptions import NotFoundError
from core.graphql.auth import require_auth
from profile_management.models import Student, Teacher
from timetable.utils import parse_object_id
from .types import StudentType, TeacherType


@strawberry.type
class ProfileQuery:

    # ==================================================
    # TEACHERS
    # ==================================================
    @strawberry.field
    @require_auth
    def teachers(
        self,
        info: Info,
        teacher_type: Optional[str] = None,
        is_active: Optional[bool] = None
    ) -> List[TeacherType]:
        """All teachers, newest first"""
        query = Teacher.objects.prefetch_related('availability_windows')

        if teacher_type is not None:
            query = query.filter(teacher_type=teacher_type)

        if is_active is not None:
            query = query.filter(is_active=is_active)

        return list(query.order_by('-created_at'))

    @strawberry.field
    @require_auth
    def teacher(self, info: Info, teacher_id: strawberry.ID) -> TeacherType:
        teacher_pk = parse_object_id(teacher_id, 'teacher ID')
        teacher = Teacher.objects.prefetch_related('availability_windows').filter(pk=teacher_pk).first()
        if not teacher:
            raise NotFoundError("Teacher not found", details={'teacher_id': teacher_pk})
        return teacher

    @strawberry.field
    @require_auth
    def teachers_count(self, info: Info) -> int:
        return Teacher.objects.count()

    # ==================================================
    # STUDENTS
    # ==================================================
    @strawberry.field
    @require_auth
    def students(self, info: Info, is_active: Optional[bool] = None) -> List[StudentType]:
        """All students, newest first"""
        query = Student.objects.all()

        if is_active is not None:
            query = query.filter(is_active=is_active)

        return list(query.order_by('-created_at'))

    @strawberry.field
    @require_auth
    def student(self, info: Info, student_id: strawberry.ID) -> StudentType:
        student_pk = parse_object_id(student_id, 'student ID')
        student = Student.objects.filter(pk=student_pk).first()
        if not student:
            raise NotFoundError("Student not found", details={'student_id': student_pk})
        return student

    @strawberry.field
    @require_auth
    def students_count(self, info: Info) -> int:
        return Student.objects.count()
