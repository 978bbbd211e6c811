from datetime import datetime
from typing import Optional

from django.db import models
from django.conf import settings
from django.utils import timezone


# ==================================================
# REVOKED ACCESS TOKENS
# ==================================================

class TokenBlacklist(models.Model):
    """
    Access tokens revoked before their expiry

    The middleware rejects any bearer token found here. Rows are only needed
    until the token would have expired anyway; ``purge`` removes them.
    """
    LOGOUT = 'logout'
    FORCED = 'forced'
    SECURITY = 'security'

    REASON_CHOICES = [
        (LOGOUT, 'User Logout'),
        (FORCED, 'Forced Logout'),
        (SECURITY, 'Security Reason'),
    ]

    token = models.CharField(max_length=500, unique=True, db_index=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blacklisted_tokens",
        null=True,
        blank=True
    )
    blacklisted_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()
    reason = models.CharField(max_length=50, default=LOGOUT, choices=REASON_CHOICES)

    class Meta:
        ordering = ['-blacklisted_at']
        indexes = [
            models.Index(fields=['expires_at'], name='token_blacklist_expiry_idx'),
        ]

    def __str__(self):
        return f"{self.get_reason_display()} for {self.user or 'unknown user'} at {self.blacklisted_at}"

    @classmethod
    def is_blacklisted(cls, token: str) -> bool:
        return cls.objects.filter(token=token).exists()

    @classmethod
    def revoke(cls, token: str, expires_at: datetime, user=None, reason: str = LOGOUT) -> 'TokenBlacklist':
        """Blacklist a token; revoking it twice keeps the first entry"""
        entry, _ = cls.objects.get_or_create(
            token=token,
            defaults={'user': user, 'expires_at': expires_at, 'reason': reason}
        )
        return entry

    @classmethod
    def purge(cls, expired_before: Optional[datetime] = None) -> int:
        """
        Delete entries for tokens that expired before the cutoff

        Args:
            expired_before: Cutoff, defaults to now

        Returns:
            Number of deleted rows
        """
        cutoff = expired_before or timezone.now()
        deleted_count, _ = cls.objects.filter(expires_at__lt=cutoff).delete()
        return deleted_count
