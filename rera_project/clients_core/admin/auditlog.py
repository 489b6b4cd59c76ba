from django.contrib import admin

from clients_core.models import AuditLog

from .mixins import OwnerAdminMixin
from .ReadOnly import ReadOnlyAdmin


# Register `AuditLog` model
@admin.register(AuditLog)
class AuditLogAdmin(OwnerAdminMixin, ReadOnlyAdmin):
    list_display = (
        "id",
        "owner",
        "action",
        "object_type",
        "object_id",
        "created_at",
    )
    search_fields = ("object_type", "object_id", "owner__username")
    list_filter = ("action", "object_type", "created_at")

    # Fetch everything in one SQL join
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("owner")
