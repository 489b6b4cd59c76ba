from django.conf import settings
from django.db import models

from ..managers import OwnerManager
from .wire import WireFieldsMixin

CLIENT_TYPE_CHOICES = [
    ("Developer", "Developer"),
    ("Agent", "Agent"),
    ("Litigation", "Litigation"),
]

WORK_STATUS_CHOICES = [
    ("Not Started", "Not Started"),
    ("In Progress", "In Progress"),
    ("Completed", "Completed"),
]


# ---------- Client ----------
# A regulated project / entity tracked for one owner
class Client(WireFieldsMixin, models.Model):

    # Every client belongs to exactly one owner (multi-tenant)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="clients",
    )

    client_type = models.CharField(max_length=20, choices=CLIENT_TYPE_CHOICES)
    name = models.CharField(max_length=255)
    promoter_name = models.CharField(max_length=255, null=True, blank=True)
    location = models.CharField(max_length=255, null=True, blank=True)

    # Project metadata
    plot_no = models.CharField(max_length=255, null=True, blank=True)
    plot_area = models.CharField(max_length=255, null=True, blank=True)
    total_units = models.IntegerField(null=True, blank=True)
    booked_units = models.IntegerField(null=True, blank=True)
    work_status = models.CharField(
        max_length=20, choices=WORK_STATUS_CHOICES, null=True, blank=True
    )
    rera_number = models.CharField(max_length=255, null=True, blank=True)
    certificate_date = models.DateField(null=True, blank=True)
    completion_date = models.DateField(null=True, blank=True)

    # Contacts
    mobile = models.CharField(max_length=32)
    office_number = models.CharField(max_length=32, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    ca_name = models.CharField(max_length=255, null=True, blank=True)
    engineer_name = models.CharField(max_length=255, null=True, blank=True)
    architect_name = models.CharField(max_length=255, null=True, blank=True)
    reference = models.CharField(max_length=255, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Enforce owner scoping
    objects = OwnerManager()

    WIRE_FIELDS = {
        "type": "client_type",
        "name": "name",
        "promoterName": "promoter_name",
        "location": "location",
        "plotNo": "plot_no",
        "plotArea": "plot_area",
        "totalUnits": "total_units",
        "bookedUnits": "booked_units",
        "workStatus": "work_status",
        "reraNumber": "rera_number",
        "certificateDate": "certificate_date",
        "mobile": "mobile",
        "officeNumber": "office_number",
        "email": "email",
        "caName": "ca_name",
        "engineerName": "engineer_name",
        "architectName": "architect_name",
        "reference": "reference",
        "completionDate": "completion_date",
    }

    class Meta:
        db_table = "clients"
        # almost every query filters by owner
        indexes = [
            models.Index(fields=["owner", "name"]),
            models.Index(fields=["owner", "location"]),
        ]
        ordering = ("id",)

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)
