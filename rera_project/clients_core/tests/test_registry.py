from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.test import TestCase

from ..exceptions import Conflict, InvalidInput, NotFound, StorageError
from ..models import Checklist, Client, Payment, Task
from ..services import ClientRegistry

User = get_user_model()


def client_fields(**overrides):
    fields = {
        "type": "Developer",
        "name": "Sunrise Towers",
        "promoterName": "Sunrise Group",
        "location": "Pune",
        "mobile": "9000000001",
    }
    fields.update(overrides)
    return fields


class ClientRegistryTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="pw-owner")
        self.other = User.objects.create_user(username="other", password="pw-other")
        self.registry = ClientRegistry()

    def test_create_stores_client_and_checklist(self):
        client = self.registry.create(self.owner.pk, client_fields(
            totalUnits=48, certificateDate="2025-02-01"))

        self.assertEqual(client.owner, self.owner)
        self.assertEqual(client.client_type, "Developer")
        self.assertEqual(client.total_units, 48)
        self.assertTrue(Checklist.objects.filter(client=client, owner=self.owner).exists())

        data = client.to_dict()
        self.assertEqual(data["promoterName"], "Sunrise Group")
        self.assertEqual(data["userId"], self.owner.pk)

    def test_create_requires_type_name_and_mobile(self):
        with self.assertRaises(InvalidInput):
            self.registry.create(self.owner.pk, {"name": "No Mobile", "type": "Agent"})
        with self.assertRaises(InvalidInput):
            self.registry.create(self.owner.pk, client_fields(type="Builder"))
        with self.assertRaises(InvalidInput):
            self.registry.create(self.owner.pk, client_fields(workStatus="Paused"))
        self.assertFalse(Client.objects.exists())

    def test_create_rejects_unknown_fields(self):
        with self.assertRaises(InvalidInput):
            self.registry.create(self.owner.pk, client_fields(userId=self.other.pk))

    def test_create_rolls_back_when_checklist_seed_fails(self):
        with mock.patch.object(
            self.registry.checklists, "seed", side_effect=StorageError("db down")
        ):
            with self.assertRaises(StorageError):
                self.registry.create(self.owner.pk, client_fields())

        # neither the client nor a checklist survived
        self.assertFalse(Client.objects.exists())
        self.assertFalse(Checklist.objects.exists())

    def test_duplicate_name_and_location_is_a_conflict(self):
        self.registry.create(self.owner.pk, client_fields())

        with self.assertRaises(Conflict):
            self.registry.create(self.owner.pk, client_fields(mobile="9111111111"))

        # same name elsewhere is fine, as is the same pair for another owner
        self.registry.create(self.owner.pk, client_fields(location="Mumbai"))
        self.registry.create(self.other.pk, client_fields())
        self.assertEqual(Client.objects.for_owner(self.owner.pk).count(), 2)

    def test_update_cannot_create_duplicate(self):
        self.registry.create(self.owner.pk, client_fields())
        second = self.registry.create(self.owner.pk, client_fields(location="Mumbai"))

        with self.assertRaises(Conflict):
            self.registry.update(second.pk, self.owner.pk, {"location": "Pune"})

        second.refresh_from_db()
        self.assertEqual(second.location, "Mumbai")

    def test_update_writes_only_given_fields(self):
        client = self.registry.create(self.owner.pk, client_fields())

        updated = self.registry.update(client.pk, self.owner.pk, {
            "workStatus": "Completed", "bookedUnits": 10})
        updated.refresh_from_db()

        self.assertEqual(updated.work_status, "Completed")
        self.assertEqual(updated.booked_units, 10)
        self.assertEqual(updated.name, "Sunrise Towers")

    def test_other_owner_cannot_read_update_or_delete(self):
        client = self.registry.create(self.owner.pk, client_fields())

        with self.assertRaises(NotFound):
            self.registry.get(client.pk, self.other.pk)
        with self.assertRaises(NotFound):
            self.registry.update(client.pk, self.other.pk, {"name": "Hijacked"})
        with self.assertRaises(NotFound):
            self.registry.delete(client.pk, self.other.pk)
        self.assertEqual(self.registry.list(self.other.pk), [])

    def test_search_matches_name_promoter_and_location(self):
        towers = self.registry.create(self.owner.pk, client_fields())
        park = self.registry.create(self.owner.pk, client_fields(
            name="Blue Park", promoterName="Sunrise Group", location="Mumbai"))
        lake = self.registry.create(self.owner.pk, client_fields(
            name="Lake View", promoterName="Lakeside", location="Nashik"))
        self.registry.create(self.other.pk, client_fields())

        def ids(query):
            return [c.pk for c in self.registry.search(self.owner.pk, query)]

        self.assertEqual(ids("sunrise"), [towers.pk, park.pk])
        self.assertEqual(ids("MUMBAI"), [park.pk])
        self.assertEqual(ids("lake"), [lake.pk])
        self.assertEqual(ids(""), [towers.pk, park.pk, lake.pk])


class ClientDeleteCascadeTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="pw-owner")
        self.registry = ClientRegistry()
        self.client_obj = self.registry.create(self.owner.pk, client_fields())
        # unsettled payment and a task hang off the client
        self.payment = self.registry.ledger.create(self.client_obj.pk, self.owner.pk, "500")
        self.registry.ledger.record_payment(self.payment.pk, self.owner.pk, "100")
        self.task = self.registry.tasks.create(
            self.client_obj.pk, self.owner.pk, {"title": "File Form 1"})

    def test_delete_removes_client_and_dependents(self):
        self.registry.delete(self.client_obj.pk, self.owner.pk)

        self.assertFalse(Client.objects.exists())
        self.assertFalse(Checklist.objects.exists())
        self.assertFalse(Payment.objects.exists())
        self.assertFalse(Task.objects.exists())

    def test_failed_cascade_restores_everything(self):
        with mock.patch.object(
            self.registry.tasks, "delete_for_client", side_effect=StorageError("db down")
        ):
            with self.assertRaises(StorageError):
                self.registry.delete(self.client_obj.pk, self.owner.pk)

        self.assertTrue(Client.objects.filter(pk=self.client_obj.pk).exists())
        self.assertTrue(Checklist.objects.filter(client=self.client_obj).exists())
        self.assertTrue(Payment.objects.filter(pk=self.payment.pk).exists())
        self.assertTrue(Task.objects.filter(pk=self.task.pk).exists())


@pytest.mark.django_db
def test_registry_get_with_malformed_id_is_not_found(django_user_model):
    owner = django_user_model.objects.create_user(username="solo", password="pw")
    with pytest.raises(NotFound, match="Client not found"):
        ClientRegistry().get("not-a-number", owner.pk)


@pytest.mark.django_db
def test_lookups_with_malformed_id_raise_typed_errors(django_user_model):
    owner = django_user_model.objects.create_user(username="solo", password="pw")
    registry = ClientRegistry()

    # checklist lookups report the checklist as absent
    with pytest.raises(NotFound, match="Documents not found"):
        registry.checklists.get("abc", owner.pk)
    with pytest.raises(NotFound):
        registry.checklists.set_status("abc", owner.pk, "Sale Deed", "received")
    with pytest.raises(NotFound):
        registry.checklists.add_label("abc", owner.pk, "Fire NOC")
    with pytest.raises(NotFound):
        registry.checklists.pending_report(owner.pk, client_id="abc")

    # listings simply come back empty
    assert registry.ledger.list_for_client("abc", owner.pk) == []
    assert registry.tasks.list_for_client("abc", owner.pk) == []
    assert registry.tasks.delete_for_client("abc") == 0
