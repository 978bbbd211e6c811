"""
Management command to clean up expired tokens from blacklist
Run periodically via cron job or task scheduler
"""
import logging
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone
from core.models import TokenBlacklist

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Remove blacklist entries for tokens that have already expired'

    def add_arguments(self, parser):
        parser.add_argument(
            '--keep-days',
            type=int,
            default=0,
            help='Keep entries for tokens that expired within the last N days',
        )

    def handle(self, *args, **options):
        cutoff = timezone.now() - timedelta(days=max(options['keep_days'], 0))
        deleted_count = TokenBlacklist.purge(expired_before=cutoff)

        logger.info("Purged %s blacklisted token(s) expired before %s", deleted_count, cutoff)
        self.stdout.write(
            self.style.SUCCESS(f'Successfully removed {deleted_count} expired token(s) from blacklist')
        )
        self.stdout.write(f'Remaining blacklisted tokens: {TokenBlacklist.objects.count()}')
