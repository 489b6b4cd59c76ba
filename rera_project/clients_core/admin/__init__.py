from .actions import delete_settled_payments, mark_all_received
from .auditlog import AuditLogAdmin
from .client import ChecklistAdmin, ClientAdmin, TaskAdmin
from .forms import ClientAdminForm
from .inlines import PaymentInline, TaskInline
from .mixins import OwnerAdminMixin
from .payment import PaymentAdmin
from .ReadOnly import ReadOnlyAdmin
