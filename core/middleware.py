"""
JWT Authentication Middleware for Bearer Token Authentication
"""
import logging

import jwt
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.utils.deprecation import MiddlewareMixin

from core.models import TokenBlacklist
from core.tokens import ACCESS, bearer_token, decode_token

User = get_user_model()

logger = logging.getLogger(__name__)


class JWTAuthenticationMiddleware(MiddlewareMixin):
    """
    Authenticates "Authorization: Bearer <token>" requests

    Requests without a bearer token keep whatever user Django's session
    middleware attached. A rejected token leaves an anonymous user and the
    reason in ``request.jwt_error``, which the GraphQL auth decorators report.
    """

    def process_request(self, request):
        token = bearer_token(request)
        if not token:
            return

        if TokenBlacklist.is_blacklisted(token):
            return self._reject(request, 'Token has been logged out')

        try:
            payload = decode_token(token)
        except jwt.ExpiredSignatureError:
            return self._reject(request, 'Token has expired')
        except jwt.InvalidTokenError as e:
            logger.info("Rejected bearer token: %s", e)
            return self._reject(request, f'Invalid token: {e}')

        if payload.get('type') != ACCESS:
            return self._reject(request, 'Invalid token type. Expected access token.')

        user = User.objects.filter(id=payload.get('user_id'), is_active=True).first()
        if user is None:
            return self._reject(request, 'User not found or inactive')

        request.user = user
        request.jwt_payload = payload

    @staticmethod
    def _reject(request, reason):
        request.user = AnonymousUser()
        request.jwt_error = reason
