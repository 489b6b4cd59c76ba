import logging

from django.db import transaction
from django.db.models import Q

from ..exceptions import Conflict, InvalidInput
from ..models import Client
from ..models.client import CLIENT_TYPE_CHOICES, WORK_STATUS_CHOICES
from ..store import RecordStore
from .audit_helper import log_action
from .checklist import ChecklistManager
from .payment import PaymentLedger
from .tasks import TaskBoard

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("type", "name", "mobile")
CLIENT_TYPES = {value for value, _ in CLIENT_TYPE_CHOICES}
WORK_STATUSES = {value for value, _ in WORK_STATUS_CHOICES}


def _check_enums(data):
    if "client_type" in data and data["client_type"] not in CLIENT_TYPES:
        raise InvalidInput(
            f"type must be one of: {', '.join(sorted(CLIENT_TYPES))}")
    status = data.get("work_status")
    if status is not None and status not in WORK_STATUSES:
        raise InvalidInput(
            f"workStatus must be one of: {', '.join(sorted(WORK_STATUSES))}")


# ----------------------------
# Client lifecycle workflows
# ----------------------------
class ClientRegistry:
    """
    Client records plus the dependents that live and die with them:
    the checklist is seeded on create, and checklist, payments and
    tasks are removed on delete, each as a single transaction.
    """

    def __init__(self, clients=None, checklists=None, ledger=None, tasks=None):
        self.clients = clients or RecordStore(Client)
        self.checklists = checklists or ChecklistManager(clients=self.clients)
        self.ledger = ledger or PaymentLedger(clients=self.clients)
        self.tasks = tasks or TaskBoard(clients=self.clients)

    def ensure_unique(self, owner_id, name, location, exclude_pk=None):
        exclude = {"pk": exclude_pk} if exclude_pk is not None else None
        if self.clients.exists(
            owner_id=owner_id, name=name, location=location, exclude=exclude
        ):
            logger.warning(
                "Owner %s: duplicate client %r at %r refused",
                owner_id, name, location)
            raise Conflict("A client with this name and location already exists")

    def create(self, owner_id, fields) -> Client:
        data = Client.from_wire(fields)
        missing = [key for key in REQUIRED_FIELDS if fields.get(key) in (None, "")]
        if missing:
            raise InvalidInput(f"Missing required field(s): {', '.join(missing)}")
        _check_enums(data)

        # Client and checklist either both exist or neither does
        with transaction.atomic():
            self.ensure_unique(owner_id, data["name"], data.get("location"))
            client = self.clients.create(owner_id=owner_id, **data)
            self.checklists.seed(client.pk, owner_id)
            log_action(
                action="create",
                instance=client,
                changes={"name": client.name, "location": client.location},
            )
        logger.info("Owner %s created client %s", owner_id, client.pk)
        return client

    def get(self, client_id, owner_id) -> Client:
        return self.clients.get(client_id, owner_id=owner_id)

    def list(self, owner_id):
        return self.clients.find(owner_id=owner_id)

    def search(self, owner_id, query):
        """Case-insensitive substring match on name, promoter and location."""
        query = (query or "").strip()
        if not query:
            return self.list(owner_id)
        return self.clients.find(
            Q(name__icontains=query)
            | Q(promoter_name__icontains=query)
            | Q(location__icontains=query),
            owner_id=owner_id,
        )

    def update(self, client_id, owner_id, fields) -> Client:
        """Partial update: only the supplied fields are written."""
        data = Client.from_wire(fields)
        _check_enums(data)

        with transaction.atomic():
            client = self.clients.get_for_update(client_id, owner_id=owner_id)
            if "name" in data or "location" in data:
                self.ensure_unique(
                    owner_id,
                    data.get("name", client.name),
                    data.get("location", client.location),
                    exclude_pk=client.pk,
                )
            if data:
                self.clients.update_fields(client, **data)
                log_action(
                    action="update",
                    instance=client,
                    changes={key: str(value) for key, value in data.items()},
                )
        logger.info("Owner %s updated client %s", owner_id, client.pk)
        return client

    def delete(self, client_id, owner_id):
        """Delete a client with its checklist, payments and tasks."""
        # One transaction: a failure anywhere restores every row
        with transaction.atomic():
            client = self.clients.get_for_update(client_id, owner_id=owner_id)
            removed = {
                "checklists": self.checklists.delete_for_client(client.pk),
                "payments": self.ledger.delete_for_client(client.pk),
                "tasks": self.tasks.delete_for_client(client.pk),
            }
            log_action(action="delete", instance=client, changes=removed)
            self.clients.delete(client)
        logger.info(
            "Owner %s deleted client %s (%s)", owner_id, client_id, removed)
