from django.contrib import admin

from .models import TokenBlacklist


# ==================================================
# TOKEN BLACKLIST
# ==================================================

@admin.register(TokenBlacklist)
class TokenBlacklistAdmin(admin.ModelAdmin):
	list_display = ("user", "reason", "blacklisted_at", "expires_at")
	search_fields = ("user__username", "user__email")
	list_filter = ("reason",)
	readonly_fields = ("token", "blacklisted_at")
	ordering = ("-blacklisted_at",)
