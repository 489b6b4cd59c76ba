from .audit_helper import log_action
from .checklist import DEFAULT_DOCUMENTS, ChecklistManager, default_document_map
from .payment import PaymentLedger, to_money
from .registry import ClientRegistry
from .tasks import TaskBoard
