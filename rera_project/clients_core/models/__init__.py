from .auditlog import AuditLog
from .checklist import NOT_RECEIVED, RECEIVED, Checklist
from .client import Client
from .payment import Payment
from .task import Task
