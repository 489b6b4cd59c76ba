from django.contrib import admin

from clients_core.models import Payment

from .actions import delete_settled_payments, ledger
from .mixins import OwnerAdminMixin


# Register `Payment` model
@admin.register(Payment)
class PaymentAdmin(OwnerAdminMixin, admin.ModelAdmin):
    list_display = (
        "id",
        "client",
        "description",
        "amount",
        "paid_amount",
        "remaining",
        "due_date",
    )
    list_filter = ("due_date",)
    search_fields = ("description", "client__name")
    actions = [delete_settled_payments]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("client")

    # Instalments are recorded through the ledger only
    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ("paid_amount", "transactions")
        return ("client", "amount", "paid_amount", "transactions")

    @admin.display(description="Remaining")
    def remaining(self, obj):
        return obj.remaining_amount

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop("delete_selected", None)  # bypasses the settlement guard
        return actions

    def has_delete_permission(self, request, obj=None):
        if obj is None:
            return super().has_delete_permission(request)
        return obj.is_settled and super().has_delete_permission(request, obj)

    def delete_model(self, request, obj):
        ledger.delete(obj.pk, obj.owner_id)
