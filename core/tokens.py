"""
JWT issuing and decoding for API users
"""
from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings


ACCESS = 'access'
REFRESH = 'refresh'


def _now():
    return datetime.now(timezone.utc)


def issue_access_token(user) -> str:
    payload = {
        'user_id': user.id,
        'username': user.get_username(),
        'is_staff': user.is_staff,
        'exp': _now() + timedelta(minutes=settings.JWT_ACCESS_TOKEN_LIFETIME_MINUTES),
        'iat': _now(),
        'type': ACCESS
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def issue_refresh_token(user) -> str:
    payload = {
        'user_id': user.id,
        'exp': _now() + timedelta(days=settings.JWT_REFRESH_TOKEN_LIFETIME_DAYS),
        'iat': _now(),
        'type': REFRESH
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decode and verify a token signature and expiry

    Raises:
        jwt.ExpiredSignatureError: Token has expired
        jwt.InvalidTokenError: Token is malformed or the signature is wrong
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def token_expiry(payload: dict) -> datetime:
    exp_timestamp = payload.get('exp')
    if exp_timestamp:
        return datetime.fromtimestamp(exp_timestamp, tz=timezone.utc)
    return _now() + timedelta(minutes=settings.JWT_ACCESS_TOKEN_LIFETIME_MINUTES)


def bearer_token(request):
    """Extract the token from an 'Authorization: Bearer <token>' header"""
    auth_header = request.META.get('HTTP_AUTHORIZATION', '')
    if auth_header.startswith('Bearer '):
        return auth_header.split('Bearer ')[1].strip()
    return None
