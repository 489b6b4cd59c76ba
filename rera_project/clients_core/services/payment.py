import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from ..exceptions import Conflict, InvalidAmount, InvalidInput
from ..models import Client, Payment
from ..store import RecordStore
from .audit_helper import log_action

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value, field="amount") -> Decimal:
    """
    Parse a caller-supplied amount into a 2-place Decimal.
    Strings are parsed as written; floats go through str() so that
    60.1 stays 60.10 instead of its binary expansion.
    """
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidInput(f"{field} is required")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"{field} must be a number")
    if not amount.is_finite():
        raise InvalidInput(f"{field} must be a number")
    if amount < 0:
        raise InvalidInput(f"{field} cannot be negative")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:  # too many digits for the context
        raise InvalidInput(f"{field} is out of range")


def _as_text(value):
    # JSON log entries hold plain strings
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


# ----------------------------
# Payment-related workflows
# ----------------------------
class PaymentLedger:
    """
    Incremental settlement of client payments.
    paid_amount is the authoritative running total; the transactions
    log is the audit trail and always sums to it.
    """

    def __init__(self, payments=None, clients=None):
        self.payments = payments or RecordStore(Payment)
        self.clients = clients or RecordStore(Client)

    def create(self, client_id, owner_id, amount, description="", due_date=None) -> Payment:
        if client_id in (None, ""):
            raise InvalidInput("clientId is required")
        amount = to_money(amount)
        # the client must belong to the caller
        client = self.clients.get(client_id, owner_id=owner_id)

        with transaction.atomic():
            payment = self.payments.create(
                client_id=client.pk,
                owner_id=owner_id,
                amount=amount,
                description=description or "",
                due_date=due_date or None,
                paid_amount=ZERO,
                transactions=[],
            )
            log_action(
                action="create",
                instance=payment,
                changes={"amount": str(payment.amount)},
            )
        logger.info(
            "Created payment %s for client %s: %s", payment.pk, client.pk, amount)
        return payment

    def get(self, payment_id, owner_id) -> Payment:
        return self.payments.get(payment_id, owner_id=owner_id)

    def record_payment(self, payment_id, owner_id, amount, date=None, notes="") -> Payment:
        """
        Record one instalment against a payment.
        Locks the row and writes paid_amount + transactions in a single
        conditional UPDATE keyed on the paid_amount that was read.
        """
        amount = to_money(amount)
        if amount <= ZERO:
            raise InvalidInput("Payment amount must be positive")

        # Everything inside either succeeds
        # as one unit or rolls back if something fails
        with transaction.atomic():
            payment = self.payments.get_for_update(payment_id, owner_id=owner_id)

            # Validate against the stored running total
            remaining = payment.amount - payment.paid_amount
            if amount > remaining:
                logger.warning(
                    "Payment %s: refused %s, only %s remaining",
                    payment.pk, amount, remaining)
                raise InvalidAmount("Amount exceeds remaining balance")

            entry = {
                "amount": str(amount),
                "date": _as_text(date),
                "notes": "" if notes is None else str(notes),
                "timestamp": timezone.now().isoformat(),
            }
            observed = payment.paid_amount
            written = self.payments.update_where(
                {"pk": payment.pk, "paid_amount": observed},
                paid_amount=observed + amount,
                transactions=[*payment.transactions, entry],
                updated_at=timezone.now(),
            )
            if written != 1:
                # another instalment landed between read and write
                raise Conflict("Payment was modified concurrently, retry")

            log_action(
                action="record_payment",
                instance=payment,
                changes={
                    "amount": str(amount),
                    "paid_amount": str(observed + amount),
                },
            )
            payment = self.payments.get(payment.pk)

        logger.info(
            "Payment %s: recorded %s, paid %s of %s",
            payment.pk, amount, payment.paid_amount, payment.amount)
        return payment

    def delete(self, payment_id, owner_id):
        """Delete a payment, allowed only once it is fully settled."""
        with transaction.atomic():
            payment = self.payments.get_for_update(payment_id, owner_id=owner_id)
            if not payment.is_settled:
                logger.warning(
                    "Payment %s: refused delete, %s of %s paid",
                    payment.pk, payment.paid_amount, payment.amount)
                raise Conflict("Cannot delete payment unless it is fully received.")
            log_action(
                action="delete",
                instance=payment,
                changes={"amount": str(payment.amount)},
            )
            self.payments.delete(payment)
        logger.info("Deleted settled payment %s", payment_id)

    def list_for_client(self, client_id, owner_id):
        return self.payments.find(client_id=client_id, owner_id=owner_id)

    def list_for_owner(self, owner_id):
        return self.payments.find(owner_id=owner_id)

    def delete_for_client(self, client_id):
        # cascade path: settled or not, the client is going away
        return self.payments.delete_where(client_id=client_id)
