import logging

from django.db import transaction

from ..exceptions import InvalidInput
from ..models import Client, Task
from ..store import RecordStore

logger = logging.getLogger(__name__)


# ----------------------------
# Task workflows (plain owned CRUD)
# ----------------------------
class TaskBoard:

    def __init__(self, tasks=None, clients=None):
        self.tasks = tasks or RecordStore(Task)
        self.clients = clients or RecordStore(Client)

    def create(self, client_id, owner_id, fields) -> Task:
        if client_id in (None, ""):
            raise InvalidInput("clientId is required")
        data = Task.from_wire(fields)
        client = self.clients.get(client_id, owner_id=owner_id)
        task = self.tasks.create(client_id=client.pk, owner_id=owner_id, **data)
        logger.info("Created task %s for client %s", task.pk, client.pk)
        return task

    def list_for_client(self, client_id, owner_id):
        return self.tasks.find(client_id=client_id, owner_id=owner_id)

    def update(self, task_id, owner_id, fields) -> Task:
        data = Task.from_wire(fields)
        with transaction.atomic():
            task = self.tasks.get_for_update(task_id, owner_id=owner_id)
            if data:
                self.tasks.update_fields(task, **data)
        return task

    def delete(self, task_id, owner_id):
        task = self.tasks.get(task_id, owner_id=owner_id)
        self.tasks.delete(task)
        logger.info("Deleted task %s", task_id)

    def delete_for_client(self, client_id):
        return self.tasks.delete_where(client_id=client_id)
