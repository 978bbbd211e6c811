"""GraphQL mutations for profile management"""
import logging

import strawberry
from strawberry.types import Info
from django.core.exceptions import ValidationError
from django.db import transaction

from core.exceptions import ConflictError, FormatError, NotFoundError
from core.graphql.auth import require_staff
from profile_management.models import Student, Teacher
from profile_management.utils import calculate_course_totals, replace_availability_windows
from profile_management.validators import TeacherProfileValidator
from timetable.utils import parse_object_id
from .types import (
    CreateStudentInput,
    CreateTeacherInput,
    StudentType,
    TeacherType,
    UpdateStudentInput,
    UpdateTeacherInput,
)

logger = logging.getLogger(__name__)


def _validation_message(error: ValidationError) -> str:
    error_messages = []
    if hasattr(error, 'message_dict'):
        for field, messages in error.message_dict.items():
            error_messages.extend(messages)
    else:
        error_messages = list(error.messages)
    return "; ".join(error_messages)


def _full_clean(instance) -> None:
    try:
        instance.full_clean()
    except ValidationError as e:
        raise FormatError(_validation_message(e))


def _email_taken(model, email: str, exclude_id=None) -> bool:
    query = model.objects.filter(email__iexact=email)
    if exclude_id:
        query = query.exclude(id=exclude_id)
    return query.exists()


def _get_teacher(teacher_id) -> Teacher:
    teacher_pk = parse_object_id(teacher_id, 'teacher ID')
    try:
        return Teacher.objects.get(pk=teacher_pk)
    except Teacher.DoesNotExist:
        raise NotFoundError("Teacher not found", details={'teacher_id': teacher_pk})


def _get_student(student_id) -> Student:
    student_pk = parse_object_id(student_id, 'student ID')
    try:
        return Student.objects.get(pk=student_pk)
    except Student.DoesNotExist:
        raise NotFoundError("Student not found", details={'student_id': student_pk})


# ==================================================
# MUTATIONS
# ==================================================

@strawberry.type
class ProfileMutation:

    # ==================================================
    # TEACHERS
    # ==================================================
    @strawberry.mutation
    @require_staff
    def create_teacher(self, info: Info, data: CreateTeacherInput) -> TeacherType:
        """
        Create a teacher
        Part-time teachers need at least one available time slot
        """
        windows = [slot.to_dict() for slot in (data.available_time_slots or [])]

        is_valid, error_message = TeacherProfileValidator.validate_availability(data.teacher_type, windows)
        if not is_valid:
            raise FormatError(error_message)

        if _email_taken(Teacher, data.email):
            raise ConflictError("Teacher already exists", details={'email': data.email})

        teacher = Teacher(
            name=data.name,
            email=data.email,
            contact_no=data.contact_no,
            address=data.address,
            teacher_type=data.teacher_type,
            subjects=data.subjects or {},
            joining_date=data.joining_date
        )
        _full_clean(teacher)

        with transaction.atomic():
            teacher.save()
            if teacher.requires_availability_check:
                replace_availability_windows(teacher, windows)

        logger.info("Created teacher %s (%s)", teacher.pk, teacher.teacher_type)
        return teacher

    @strawberry.mutation
    @require_staff
    def update_teacher(self, info: Info, teacher_id: strawberry.ID, data: UpdateTeacherInput) -> TeacherType:
        """
        Update a teacher
        Switching to full-time clears the availability windows
        """
        teacher = _get_teacher(teacher_id)
        new_type = data.teacher_type or teacher.teacher_type

        windows = None
        if data.available_time_slots is not None:
            windows = [slot.to_dict() for slot in data.available_time_slots]

        becoming_part_time = new_type == Teacher.PART_TIME and teacher.teacher_type != Teacher.PART_TIME
        if windows is not None or becoming_part_time:
            is_valid, error_message = TeacherProfileValidator.validate_availability(new_type, windows or [])
            if not is_valid:
                raise FormatError(error_message)

        if data.email is not None and _email_taken(Teacher, data.email, exclude_id=teacher.pk):
            raise ConflictError("Teacher already exists", details={'email': data.email})

        if data.name is not None:
            teacher.name = data.name
        if data.email is not None:
            teacher.email = data.email
        if data.contact_no is not None:
            teacher.contact_no = data.contact_no
        if data.address is not None:
            teacher.address = data.address
        if data.subjects is not None:
            teacher.subjects = data.subjects
        if data.joining_date is not None:
            teacher.joining_date = data.joining_date
        if data.is_active is not None:
            teacher.is_active = data.is_active
        teacher.teacher_type = new_type
        _full_clean(teacher)

        with transaction.atomic():
            teacher.save()
            if not teacher.requires_availability_check:
                teacher.availability_windows.all().delete()
            elif windows is not None:
                replace_availability_windows(teacher, windows)

        logger.info("Updated teacher %s", teacher.pk)
        return teacher

    @strawberry.mutation
    @require_staff
    def delete_teacher(self, info: Info, teacher_id: strawberry.ID) -> bool:
        """Delete a teacher; their bookings are kept with the cached name"""
        teacher = _get_teacher(teacher_id)
        teacher_pk = teacher.pk
        teacher.delete()
        logger.info("Deleted teacher %s", teacher_pk)
        return True

    # ==================================================
    # STUDENTS
    # ==================================================
    @strawberry.mutation
    @require_staff
    def create_student(self, info: Info, data: CreateStudentInput) -> StudentType:
        """Register a student and compute course fees"""
        if _email_taken(Student, data.email):
            raise ConflictError("Student already exists", details={'email': data.email})

        courses, total_amount = calculate_course_totals(data.courses or {})

        student = Student(
            name=data.name,
            email=data.email,
            contact_no=data.contact_no,
            address=data.address,
            class_name=data.class_name,
            courses=courses,
            course_mode=data.course_mode,
            start_date=data.start_date,
            end_date=data.end_date,
            total_amount=total_amount
        )
        _full_clean(student)
        student.save()

        logger.info("Created student %s", student.pk)
        return student

    @strawberry.mutation
    @require_staff
    def update_student(self, info: Info, student_id: strawberry.ID, data: UpdateStudentInput) -> StudentType:
        """Update a student, recalculating fees when courses change"""
        student = _get_student(student_id)

        if data.email is not None and _email_taken(Student, data.email, exclude_id=student.pk):
            raise ConflictError("Student already exists", details={'email': data.email})

        if data.courses is not None:
            student.courses, student.total_amount = calculate_course_totals(data.courses)

        for field in ('name', 'email', 'contact_no', 'address', 'class_name',
                      'course_mode', 'start_date', 'end_date', 'is_active'):
            value = getattr(data, field)
            if value is not None:
                setattr(student, field, value)

        _full_clean(student)
        student.save()

        logger.info("Updated student %s", student.pk)
        return student

    @strawberry.mutation
    @require_staff
    def delete_student(self, info: Info, student_id: strawberry.ID) -> bool:
        """Delete a student; their bookings are kept with the cached name"""
        student = _get_student(student_id)
        student_pk = student.pk
        student.delete()
        logger.info("Deleted student %s", student_pk)
        return True
