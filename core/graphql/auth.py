"""
Utility functions for GraphQL authentication and authorization
"""
from functools import wraps
from typing import Callable

from strawberry.types import Info

from core.exceptions import AuthenticationError, PermissionDeniedError


def is_authenticated(info: Info) -> bool:
    """
    Check if the user is authenticated

    Args:
        info: Strawberry Info object containing request context

    Returns:
        bool: True if user is authenticated, False otherwise
    """
    request = info.context.request
    return hasattr(request, 'user') and request.user.is_authenticated


def _find_info(args, kwargs):
    for arg in args:
        if isinstance(arg, Info):
            return arg
    return kwargs.get('info')


def _authentication_error(info: Info) -> AuthenticationError:
    error_message = "Authentication required. Please login to access this resource."

    # Include JWT error if available
    request = info.context.request
    if getattr(request, 'jwt_error', None):
        error_message = f"Authentication failed: {request.jwt_error}"

    return AuthenticationError(error_message)


def require_auth(func: Callable) -> Callable:
    """
    Decorator to require authentication for GraphQL resolvers
    Raises AuthenticationError if user is not authenticated

    Usage:
        @strawberry.field
        @require_auth
        def my_query(self, info: Info) -> str:
            return "Authenticated"
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        info = _find_info(args, kwargs)
        if not info:
            raise Exception("Authentication check requires Info parameter")

        if not is_authenticated(info):
            raise _authentication_error(info)

        return func(*args, **kwargs)

    return wrapper


def require_staff(func: Callable) -> Callable:
    """
    Decorator for resolvers that change teachers, students or bookings
    Only staff (administrators) may call them
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        info = _find_info(args, kwargs)
        if not info:
            raise Exception("Staff check requires Info parameter")

        if not is_authenticated(info):
            raise _authentication_error(info)

        if not info.context.request.user.is_staff:
            raise PermissionDeniedError("Access denied. Staff access required.")

        return func(*args, **kwargs)

    return wrapper

