"""Timetable GraphQL package"""
from .types import TimeSlotType, AvailableSlotType
from .schema import TimetableQuery, TimetableMutation

__all__ = [
    'TimeSlotType',
    'AvailableSlotType',
    'TimetableQuery',
    'TimetableMutation',
]
