import logging

from django.db import transaction
from django.utils import timezone

from ..exceptions import Conflict, InvalidInput, NotFound
from ..models import NOT_RECEIVED, Checklist, Client
from ..store import RecordStore
from .audit_helper import log_action

logger = logging.getLogger(__name__)

# Canonical seed list. Labels are stored verbatim as checklist keys,
# existing rows depend on the exact spelling.
DEFAULT_DOCUMENTS = (
    "PAN Card of the Firm/Company",
    "Udyam Aadhar / Gumasta",
    "KYC of Partners",
    "KYC of Authorized Signatory",
    "Board Resolution",
    "Commencement Certificate",
    "Approved Plan Layout",
    "RERA Carpet Area Statement",
    "Sale Deed",
    "Power of Attorney",
    "Mortgage Deed",
    "Tally Data",
    "Form 3 – CA Certificate",
    "Bifurcation of Units",
    "Bank Account Details",
    "Title Report",
    "Form 1 – Architect Certificate",
    "Letterhead",
    "Partnership Deed",
    "GST Certificate",
    "Land Ownership Documents",
    "Agreement for Sale and Deviation Reports",
    "Allotment Letter and Deviation Reports",
    "Project Name",
    "Completion Date",
    "Architect Details",
    "RCC Consultant Details",
    "CA Details",
    "Contact Person Details for MahaRERA Profile",
    "Loan and Litigation Information",
    "Phase-wise Project Details",
    "Google Map Location of the Project",
    "Address Proof of the Organization",
    "NOC if Address Proof is not in the firm's name",
    "CC Verification Email Screenshot",
    "Amenities Details",
    "SRO Membership Certificate",
)


def default_document_map():
    return {label: NOT_RECEIVED for label in DEFAULT_DOCUMENTS}


def _clean_label(label):
    if not isinstance(label, str) or not label.strip():
        raise InvalidInput("documentName is required")
    return label


# ----------------------------
# Checklist workflows
# ----------------------------
class ChecklistManager:
    """Owns the document-status map of every client."""

    def __init__(self, checklists=None, clients=None):
        self.checklists = checklists or RecordStore(Checklist)
        self.clients = clients or RecordStore(Client)

    def seed(self, client_id, owner_id) -> Checklist:
        """
        Create the checklist for a freshly created client.
        Runs inside the caller's transaction so a failure here
        also undoes the client insert.
        """
        with transaction.atomic():
            if self.checklists.exists(client_id=client_id):
                raise Conflict("Checklist already exists for this client")
            checklist = self.checklists.create(
                client_id=client_id,
                owner_id=owner_id,
                documents=default_document_map(),
                last_updated=timezone.now(),
            )
            log_action(
                action="seed",
                instance=checklist,
                changes={"labels": len(checklist.documents)},
            )
        logger.info("Seeded checklist %s for client %s", checklist.pk, client_id)
        return checklist

    def get(self, client_id, owner_id) -> Checklist:
        return self._get(client_id, owner_id)

    def _get(self, client_id, owner_id, for_update=False):
        # one checklist per client, looked up through the owner scope
        checklist = self.checklists.find_one(
            client_id=client_id, owner_id=owner_id)
        if checklist is None:
            raise NotFound("Documents not found")
        if for_update:
            checklist = self.checklists.get_for_update(checklist.pk)
        return checklist

    def set_status(self, client_id, owner_id, label, status) -> Checklist:
        """
        Replace (or insert) one label -> status entry.
        Idempotent: repeating the call leaves the same map.
        """
        label = _clean_label(label)
        # Any string is stored; the canonical values are
        # "received" / "not-received"
        if not isinstance(status, str):
            raise InvalidInput("status must be a string")

        with transaction.atomic():
            # Lock the checklist row until the transaction finishes
            checklist = self._get(client_id, owner_id, for_update=True)
            previous = checklist.documents.get(label)
            documents = {**checklist.documents, label: status}
            self.checklists.update_fields(
                checklist,
                documents=documents,
                last_updated=timezone.now(),
            )
            log_action(
                action="set_status",
                instance=checklist,
                changes={"label": label, "from": previous, "to": status},
            )
        logger.info(
            "Checklist %s: %r set to %r", checklist.pk, label, status)
        return checklist

    def add_label(self, client_id, owner_id, label) -> Checklist:
        """Add a new label as not-received; an existing key is a Conflict."""
        label = _clean_label(label)

        with transaction.atomic():
            checklist = self._get(client_id, owner_id, for_update=True)
            # presence is decided by the key, whatever value it holds
            if label in checklist.documents:
                logger.warning(
                    "Checklist %s: refused duplicate label %r",
                    checklist.pk, label)
                raise Conflict("Document already exists")
            documents = {**checklist.documents, label: NOT_RECEIVED}
            self.checklists.update_fields(
                checklist,
                documents=documents,
                last_updated=timezone.now(),
            )
            log_action(
                action="add_label",
                instance=checklist,
                changes={"label": label},
            )
        logger.info("Checklist %s: added %r", checklist.pk, label)
        return checklist

    def delete_for_client(self, client_id):
        return self.checklists.delete_where(client_id=client_id)

    def pending_report(self, owner_id, client_id=None):
        """
        Per client, the labels still marked not-received.
        Clients with nothing pending are left out of the owner-wide report.
        """
        if client_id is not None:
            client = self.clients.get(client_id, owner_id=owner_id)
            checklist = self._get(client.pk, owner_id)
            return [self._pending_entry(client, checklist)]

        checklists = {
            checklist.client_id: checklist
            for checklist in self.checklists.find(owner_id=owner_id)
        }
        report = []
        for client in self.clients.find(owner_id=owner_id):
            checklist = checklists.get(client.pk)
            if checklist is not None and checklist.pending_labels():
                report.append(self._pending_entry(client, checklist))
        return report

    @staticmethod
    def _pending_entry(client, checklist):
        return {
            "clientId": client.pk,
            "clientName": client.name,
            "pending": checklist.pending_labels(),
        }
