"""
Utility functions for teacher and student profiles
"""
from typing import Dict, List, Tuple

from timetable.utils import parse_time
from .models import AvailabilityWindow, Teacher


def _to_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def calculate_course_totals(courses: Dict) -> Tuple[Dict, int]:
    """
    Compute per-course totals and the overall fee for a student

    Each selected course with a fee is charged ``fee * classes`` (classes
    defaults to 1). Unselected courses are zeroed out.

    Args:
        courses: Mapping of course key to {"selected", "fee", "classes"}

    Returns:
        Tuple of (updated courses dict, total amount)
    """
    updated_courses = {}
    total_amount = 0

    for course_key, course in (courses or {}).items():
        course = course or {}
        fee = _to_int(course.get('fee'), 0)

        if course.get('selected') and fee:
            classes = _to_int(course.get('classes'), 1) or 1
            course_total = fee * classes
            updated_courses[course_key] = {
                **course,
                'fee': fee,
                'classes': classes,
                'total': course_total,
            }
            total_amount += course_total
        else:
            updated_courses[course_key] = {
                'selected': False,
                'fee': 0,
                'classes': 0,
                'total': 0,
            }

    return updated_courses, total_amount


def replace_availability_windows(teacher: Teacher, windows: List[Dict]) -> List[AvailabilityWindow]:
    """
    Replace all availability windows of a teacher

    Args:
        teacher: Teacher instance (already saved)
        windows: Validated window dictionaries

    Returns:
        List of created AvailabilityWindow objects
    """
    teacher.availability_windows.all().delete()

    created_windows = []
    for window in windows:
        is_recurring = window.get('is_recurring', True)
        created_windows.append(
            AvailabilityWindow(
                teacher=teacher,
                is_recurring=is_recurring,
                day_of_week=window.get('day_of_week') if is_recurring else None,
                specific_date=None if is_recurring else window.get('specific_date'),
                start_time=parse_time(window['start_time']),
                end_time=parse_time(window['end_time'])
            )
        )

    return AvailabilityWindow.objects.bulk_create(created_windows)
