from decimal import Decimal

from django.conf import settings
from django.db import models

from ..managers import OwnerManager
from .client import Client

ZERO = Decimal("0.00")


# ---------- Payment ----------
# A billable obligation against a client, settled in instalments
class Payment(models.Model):

    client = models.ForeignKey(
        Client,
        on_delete=models.CASCADE,
        related_name="payments",
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payments",
    )

    # Total amount due
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.TextField(blank=True, default="")
    due_date = models.DateField(null=True, blank=True)

    # Running total advanced by every accepted instalment
    paid_amount = models.DecimalField(
        max_digits=10, decimal_places=2, default=ZERO
    )
    # Append-only log of instalments (the audit trail behind paid_amount)
    transactions = models.JSONField(default=list, blank=True)
    """ Each entry:
        {"amount": "60.00", "date": "2025-01-10",
         "notes": "...", "timestamp": "2025-01-10T09:30:00+00:00"}
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Enforce owner scoping
    objects = OwnerManager()

    class Meta:
        db_table = "payments"
        indexes = [
            models.Index(fields=["owner", "client"]),
        ]
        # Last line of defence if a write ever bypasses the ledger service
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=0),
                name="ck_payment_amount_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(paid_amount__gte=0)
                & models.Q(paid_amount__lte=models.F("amount")),
                name="ck_payment_paid_within_amount",
            ),
        ]
        ordering = ("id",)

    def __str__(self):
        return f"{self.description or 'Payment'} ({self.paid_amount}/{self.amount})"

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)

    @property
    def remaining_amount(self):
        return self.amount - self.paid_amount

    @property
    def is_settled(self):
        # Decimal equality, never float approximation
        return self.paid_amount == self.amount

    def transaction_total(self):
        """Sum of the instalment log, recomputed from the stored entries."""
        return sum(
            (Decimal(str(tx["amount"])) for tx in self.transactions), ZERO
        )

    def to_dict(self):
        return {
            "id": self.pk,
            "clientId": self.client_id,
            "userId": self.owner_id,
            "amount": self.amount,
            "description": self.description,
            "dueDate": self.due_date,
            "paidAmount": self.paid_amount,
            "transactions": list(self.transactions),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
