from django.contrib import admin

from clients_core.models import Payment, Task

# ---------- Helpful inline admin classes ----------


class PaymentInline(admin.TabularInline):
    """Show a client's payments on the Client page (read-only ledger)"""

    model = Payment
    extra = 0  # don’t show “empty” rows by default (prevents clutter)
    fields = ("amount", "description", "due_date", "paid_amount")
    # ledger totals only move through the payment ledger service
    readonly_fields = fields
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


class TaskInline(admin.TabularInline):
    """Show a client's tasks on the Client page"""

    model = Task
    extra = 0
    fields = ("title", "service", "priority", "due_date", "status")
    readonly_fields = fields
    show_change_link = True

    # tasks are added from their own page, where the owner is set
    def has_add_permission(self, request, obj=None):
        return False
