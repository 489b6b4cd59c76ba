from django.conf import settings
from django.db import models
from django.utils import timezone

from ..managers import OwnerManager
from .client import Client

RECEIVED = "received"
NOT_RECEIVED = "not-received"

DOCUMENT_STATUS_CHOICES = [
    (RECEIVED, "Received"),
    (NOT_RECEIVED, "Not received"),
]


# ---------- Checklist ----------
# Required-document checklist, exactly one per client
class Checklist(models.Model):

    # One-to-one: a client never has two checklists
    client = models.OneToOneField(
        Client,
        on_delete=models.CASCADE,
        related_name="checklist",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="checklists",
    )

    # document label -> "received" | "not-received"
    documents = models.JSONField(default=dict, blank=True)
    """ Example:
        {"Sale Deed": "received", "Title Report": "not-received"}
    """

    last_updated = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Enforce owner scoping
    objects = OwnerManager()

    class Meta:
        db_table = "documents"
        indexes = [models.Index(fields=["owner", "client"])]

    def __str__(self):
        return f"Checklist for {self.client}"

    def pending_labels(self):
        return [
            label for label, status in self.documents.items()
            if status == NOT_RECEIVED
        ]

    def to_dict(self):
        return {
            "id": self.pk,
            "clientId": self.client_id,
            "userId": self.owner_id,
            "documents": dict(self.documents),
            "lastUpdated": self.last_updated,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
