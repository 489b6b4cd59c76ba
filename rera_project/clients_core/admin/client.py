from django.contrib import admin
from django.db import transaction

from clients_core.models import Checklist, Client, Task
from clients_core.services import ChecklistManager, ClientRegistry

from .actions import mark_all_received
from .forms import ClientAdminForm
from .inlines import PaymentInline, TaskInline
from .mixins import OwnerAdminMixin

checklists = ChecklistManager()
registry = ClientRegistry(checklists=checklists)


# Register `Client` model
@admin.register(Client)
class ClientAdmin(OwnerAdminMixin, admin.ModelAdmin):
    form = ClientAdminForm
    list_display = (
        "id",
        "owner",
        "client_type",
        "name",
        "location",
        "work_status",
        "rera_number",
        "mobile",
    )
    list_filter = ("client_type", "work_status")
    search_fields = ("name", "promoter_name", "location", "rera_number")
    inlines = [PaymentInline, TaskInline]

    def save_model(self, request, obj, form, change):
        # a new client gets its checklist in the same transaction
        with transaction.atomic():
            super().save_model(request, obj, form, change)
            # owner is final only after the mixin ran; a clash rolls the save back
            registry.ensure_unique(
                obj.owner_id, obj.name, obj.location, exclude_pk=obj.pk)
            if not change:
                checklists.seed(obj.pk, obj.owner_id)

    # deletes go through the registry so the cascade stays all-or-nothing
    def delete_model(self, request, obj):
        registry.delete(obj.pk, obj.owner_id)

    def delete_queryset(self, request, queryset):
        for client in queryset:
            registry.delete(client.pk, client.owner_id)


# Register `Checklist` model
@admin.register(Checklist)
class ChecklistAdmin(OwnerAdminMixin, admin.ModelAdmin):
    list_display = ("id", "client", "owner", "pending_count", "last_updated")
    search_fields = ("client__name",)
    # labels change through the checklist service only
    readonly_fields = ("client", "owner", "documents", "last_updated")
    actions = [mark_all_received]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("client", "owner")

    @admin.display(description="Pending")
    def pending_count(self, obj):
        return len(obj.pending_labels())

    # checklists are created with their client, never by hand
    def has_add_permission(self, request):
        return False


# Register `Task` model
@admin.register(Task)
class TaskAdmin(OwnerAdminMixin, admin.ModelAdmin):
    list_display = ("id", "client", "title", "priority", "due_date", "status")
    list_filter = ("priority", "status")
    search_fields = ("title", "client__name", "assigned_members")
