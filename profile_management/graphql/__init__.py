"""Profile management GraphQL package"""
from .types import TeacherType, StudentType, AvailabilityWindowType
from .schema import ProfileQuery, ProfileMutation

__all__ = [
    'TeacherType',
    'StudentType',
    'AvailabilityWindowType',
    'ProfileQuery',
    'ProfileMutation',
]
