import logging

import strawberry
from typing import Optional
from strawberry.types import Info
import jwt
from django.contrib.auth import get_user_model
from django.db.models import Q

from .types import UserType
from core.exceptions import AuthenticationError
from core.models import TokenBlacklist
from core.tokens import (
    ACCESS,
    REFRESH,
    bearer_token,
    decode_token,
    issue_access_token,
    issue_refresh_token,
    token_expiry,
)

User = get_user_model()

logger = logging.getLogger(__name__)


# ==================================================
# INPUT TYPES
# ==================================================

@strawberry.input
class LoginInput:
    username: str  # username OR email
    password: str


# ==================================================
# RESPONSE TYPES
# ==================================================

@strawberry.type
class LoginResponse:
    user: UserType
    access_token: str
    refresh_token: str
    message: str


@strawberry.type
class LogoutResponse:
    success: bool
    message: str


# ==================================================
# MUTATIONS
# ==================================================

@strawberry.type
class Mutation:

    @strawberry.mutation
    def login(self, data: LoginInput) -> LoginResponse:
        """
        Login using username OR email
        Returns user data with JWT tokens
        """
        user = User.objects.filter(
            Q(username__iexact=data.username) |
            Q(email__iexact=data.username)
        ).first()

        if not user or not user.check_password(data.password):
            logger.info("Failed login attempt for %s", data.username)
            raise AuthenticationError("Invalid credentials")

        if not user.is_active:
            raise AuthenticationError("User account is inactive")

        return LoginResponse(
            user=user,
            access_token=issue_access_token(user),
            refresh_token=issue_refresh_token(user),
            message=f"Login successful. Welcome {user.get_username()}!"
        )

    @strawberry.mutation
    def refresh_token(self, refresh_token: str) -> LoginResponse:
        """
        Refresh access token using refresh token
        """
        try:
            payload = decode_token(refresh_token)
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Refresh token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid refresh token")

        if payload.get('type') != REFRESH:
            raise AuthenticationError("Invalid token type")

        try:
            user = User.objects.get(id=payload.get('user_id'))
        except User.DoesNotExist:
            raise AuthenticationError("User not found")

        if not user.is_active:
            raise AuthenticationError("User account is inactive")

        return LoginResponse(
            user=user,
            access_token=issue_access_token(user),
            refresh_token=refresh_token,  # Keep same refresh token
            message="Token refreshed successfully"
        )

    @strawberry.mutation
    def logout(self, info: Info, access_token: Optional[str] = None) -> LogoutResponse:
        """
        Logout user by blacklisting their access token
        Token can be provided as argument or extracted from Authorization header
        """
        token = access_token or bearer_token(info.context.request)
        if not token:
            raise AuthenticationError("No token provided for logout")

        try:
            payload = decode_token(token)
        except jwt.ExpiredSignatureError:
            # Token already expired, no need to blacklist
            return LogoutResponse(
                success=True,
                message="Token already expired. Logout successful."
            )
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token provided")

        if payload.get('type') != ACCESS:
            raise AuthenticationError("Can only logout access tokens")

        TokenBlacklist.revoke(
            token,
            expires_at=token_expiry(payload),
            user=User.objects.filter(id=payload.get('user_id')).first()
        )
        logger.info("Revoked access token of user %s", payload.get('user_id'))

        return LogoutResponse(
            success=True,
            message="Logged out successfully. Token has been invalidated."
        )
