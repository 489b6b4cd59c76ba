from django.conf import settings  # To access global project settings
from django.db import models

from ..managers import OwnerManager


# ---------- Audit / Event log ----------
class AuditLog(
    models.Model
):  # Gives traceability over every checklist and ledger mutation
    # Which owner performed the action
    # (Nullable in case the action was automated
    # (e.g., management command, import script))
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL
    )
    # Type of event being logged
    action = models.CharField(
        max_length=50
    )  # Common choices: create, update, delete, record_payment, set_status
    # What kind of object was affected
    object_type = models.CharField(
        max_length=100
    )  # (e.g., "Client", "Checklist", "Payment")
    # The primary key of the object
    object_id = models.CharField(max_length=100)
    # Store the details of what changed, in JSON format
    changes = models.JSONField(null=True, blank=True)
    # Timestamp when the event was logged
    created_at = models.DateTimeField(auto_now_add=True)

    # Enforce owner scoping
    objects = OwnerManager()

    class Meta:
        # Filter logs quickly
        indexes = [
            models.Index(fields=["owner", "created_at"]),
            models.Index(fields=["object_type", "object_id"]),
        ]
        ordering = ("-created_at",)

    # Show created_at, owner, action, object_type and
    # object_id in admin dropdowns and debug logs
    def __str__(self):
        time = self.created_at
        usr = self.owner
        action = self.action
        objType = self.object_type
        objId = self.object_id
        return f"[{time:%Y-%m-%d %H:%M}] {usr} {action} {objType}({objId})"
