from django.conf import settings
from django.db import models

from ..managers import OwnerManager
from .client import Client
from .wire import WireFieldsMixin


# ---------- Task ----------
# Internal work item against a client (scheduling / billing notes)
class Task(WireFieldsMixin, models.Model):

    client = models.ForeignKey(
        Client,
        on_delete=models.CASCADE,
        related_name="tasks",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tasks",
    )

    title = models.CharField(max_length=255, null=True, blank=True)
    service = models.CharField(max_length=255, null=True, blank=True)
    allocated_members = models.CharField(max_length=255, null=True, blank=True)
    assigned_members = models.CharField(max_length=255, null=True, blank=True)
    priority = models.CharField(max_length=50, null=True, blank=True)
    # Kept as free text, callers send dates in several formats
    due_date = models.CharField(max_length=50, null=True, blank=True)
    team = models.CharField(max_length=255, null=True, blank=True)
    client_source = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=50, null=True, blank=True)

    # Fees are free text as well (e.g. "12,500 + GST")
    government_fees = models.CharField(max_length=255, null=True, blank=True)
    sro_fees = models.CharField(max_length=255, null=True, blank=True)
    bill_amount = models.CharField(max_length=255, null=True, blank=True)
    gst = models.CharField(max_length=255, null=True, blank=True)
    branch = models.CharField(max_length=255, null=True, blank=True)

    remark = models.TextField(null=True, blank=True)
    note = models.TextField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Enforce owner scoping
    objects = OwnerManager()

    WIRE_FIELDS = {
        "title": "title",
        "service": "service",
        "allocatedMembers": "allocated_members",
        "assignedMembers": "assigned_members",
        "priority": "priority",
        "dueDate": "due_date",
        "team": "team",
        "clientSource": "client_source",
        "status": "status",
        "governmentFees": "government_fees",
        "sroFees": "sro_fees",
        "billAmount": "bill_amount",
        "gst": "gst",
        "branch": "branch",
        "remark": "remark",
        "note": "note",
        "description": "description",
    }

    class Meta:
        db_table = "tasks"
        indexes = [models.Index(fields=["owner", "client"])]
        ordering = ("id",)

    def __str__(self):
        return self.title or f"Task {self.pk}"

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)

    def to_dict(self):
        data = super().to_dict()
        data["clientId"] = self.client_id
        return data
