from django.contrib import admin, messages
from django.db import transaction
from django.utils.translation import gettext_lazy as _

from clients_core.exceptions import TrackerError
from clients_core.models import RECEIVED
from clients_core.services import ChecklistManager, PaymentLedger

ledger = PaymentLedger()
checklists = ChecklistManager()

# ---------- Admin actions ----------

@admin.action(description="Delete selected payments (settled only)")
# Bulk-delete payments from the admin list view through the ledger,
# so the settlement guard still applies
def delete_settled_payments(
    modeladmin,  # `ModelAdmin` class for Payment
    request,  # HTTP request object
    queryset,  # record what admin selected from list view
):
    total = queryset.count()
    success = 0

    for payment in queryset:
        try:
            ledger.delete(payment.pk, payment.owner_id)
            success += 1
        except TrackerError as exc:
            modeladmin.message_user(
                request,
                _("Could not delete payment %(pk)s: %(err)s") % {"pk": payment.pk, "err": exc},
                level=messages.ERROR,
            )

    # Final summary message
    modeladmin.message_user(
        request,
        _("Deleted %(success)d of %(total)d payments.") % {"success": success, "total": total},
        level=messages.SUCCESS if success else messages.WARNING,
    )


@admin.action(description="Mark every document as received")
def mark_all_received(modeladmin, request, queryset):
    updated = 0
    for checklist in queryset:
        # one checklist is either fully marked or left as it was
        with transaction.atomic():
            pending = [
                label for label, status in checklist.documents.items()
                if status != RECEIVED
            ]
            for label in pending:
                checklists.set_status(
                    checklist.client_id, checklist.owner_id, label, RECEIVED)
        updated += len(pending)
    modeladmin.message_user(
        request,
        _("%(count)d document(s) marked as received.") % {"count": updated},
        level=messages.SUCCESS,
    )
