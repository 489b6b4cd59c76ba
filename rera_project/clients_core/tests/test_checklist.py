import datetime
from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.test import TestCase

from ..exceptions import Conflict, InvalidInput, NotFound
from ..models import NOT_RECEIVED, RECEIVED, AuditLog, Checklist, Client
from ..services import DEFAULT_DOCUMENTS, ChecklistManager, ClientRegistry

User = get_user_model()


class ChecklistWorkflowTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="pw-owner")
        self.other = User.objects.create_user(username="other", password="pw-other")
        self.registry = ClientRegistry()
        self.checklists = self.registry.checklists
        self.client_obj = self.registry.create(self.owner.pk, {
            "type": "Developer",
            "name": "Sunrise Towers",
            "location": "Pune",
            "mobile": "9000000001",
        })

    def test_new_client_gets_every_default_label_not_received(self):
        checklist = self.checklists.get(self.client_obj.pk, self.owner.pk)

        self.assertEqual(len(DEFAULT_DOCUMENTS), 37)
        self.assertEqual(set(checklist.documents), set(DEFAULT_DOCUMENTS))
        self.assertTrue(
            all(status == NOT_RECEIVED for status in checklist.documents.values()))
        # labels keep their exact spelling, dashes included
        self.assertIn("Form 3 – CA Certificate", checklist.documents)
        self.assertIn("NOC if Address Proof is not in the firm's name", checklist.documents)

    def test_seed_twice_is_a_conflict(self):
        with self.assertRaises(Conflict):
            self.checklists.seed(self.client_obj.pk, self.owner.pk)
        self.assertEqual(Checklist.objects.filter(client=self.client_obj).count(), 1)

    def test_set_status_replaces_only_that_label(self):
        checklist = self.checklists.set_status(
            self.client_obj.pk, self.owner.pk, "Sale Deed", RECEIVED)
        checklist.refresh_from_db()

        self.assertEqual(checklist.documents["Sale Deed"], RECEIVED)
        self.assertEqual(checklist.pending_labels().count("Sale Deed"), 0)
        self.assertEqual(len(checklist.pending_labels()), 36)

    def test_set_status_is_idempotent(self):
        self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Title Report", RECEIVED)
        first = dict(Checklist.objects.get(client=self.client_obj).documents)

        self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Title Report", RECEIVED)
        second = dict(Checklist.objects.get(client=self.client_obj).documents)

        self.assertEqual(first, second)

    def test_set_status_inserts_unknown_label(self):
        checklist = self.checklists.set_status(
            self.client_obj.pk, self.owner.pk, "Fire NOC", RECEIVED)
        self.assertEqual(checklist.documents["Fire NOC"], RECEIVED)
        self.assertEqual(len(checklist.documents), 38)

    def test_set_status_advances_last_updated(self):
        t1 = datetime.datetime(2025, 1, 10, 9, 0, tzinfo=datetime.timezone.utc)
        t2 = t1 + datetime.timedelta(hours=1)

        with mock.patch("django.utils.timezone.now", return_value=t1):
            self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Sale Deed", RECEIVED)
        with mock.patch("django.utils.timezone.now", return_value=t2):
            self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Sale Deed", NOT_RECEIVED)

        checklist = Checklist.objects.get(client=self.client_obj)
        self.assertEqual(checklist.last_updated, t2)
        self.assertGreater(checklist.last_updated, t1)

    def test_set_status_rejects_blank_label_and_non_string_status(self):
        with self.assertRaises(InvalidInput):
            self.checklists.set_status(self.client_obj.pk, self.owner.pk, "  ", RECEIVED)
        with self.assertRaises(InvalidInput):
            self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Sale Deed", True)

    def test_add_label_appends_not_received(self):
        checklist = self.checklists.add_label(self.client_obj.pk, self.owner.pk, "Fire NOC")
        checklist.refresh_from_db()
        self.assertEqual(checklist.documents["Fire NOC"], NOT_RECEIVED)

    def assert_checklist_unchanged(self, before):
        after = Checklist.objects.get(pk=before.pk)
        self.assertEqual(after.documents, before.documents)
        self.assertEqual(after.last_updated, before.last_updated)

    def test_add_existing_label_is_a_conflict(self):
        self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Sale Deed", RECEIVED)
        before = Checklist.objects.get(client=self.client_obj)

        with self.assertRaises(Conflict):
            self.checklists.add_label(self.client_obj.pk, self.owner.pk, "Sale Deed")

        # the map is left exactly as it was, received status included
        self.assert_checklist_unchanged(before)
        self.assertEqual(before.documents["Sale Deed"], RECEIVED)

    def test_add_label_conflicts_even_when_stored_value_is_empty(self):
        # presence is decided by the key, not by its value
        self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Fire NOC", "")
        before = Checklist.objects.get(client=self.client_obj)

        with self.assertRaises(Conflict):
            self.checklists.add_label(self.client_obj.pk, self.owner.pk, "Fire NOC")

        self.assert_checklist_unchanged(before)
        self.assertEqual(before.documents["Fire NOC"], "")

    def test_other_owner_cannot_see_or_change_checklist(self):
        with self.assertRaises(NotFound):
            self.checklists.get(self.client_obj.pk, self.other.pk)
        with self.assertRaises(NotFound):
            self.checklists.set_status(self.client_obj.pk, self.other.pk, "Sale Deed", RECEIVED)

        # status unchanged
        checklist = Checklist.objects.get(client=self.client_obj)
        self.assertEqual(checklist.documents["Sale Deed"], NOT_RECEIVED)

    def test_changes_are_audited(self):
        self.checklists.set_status(self.client_obj.pk, self.owner.pk, "Sale Deed", RECEIVED)
        entry = AuditLog.objects.for_owner(self.owner.pk).filter(action="set_status").get()
        self.assertEqual(entry.object_type, "Checklist")
        self.assertEqual(entry.changes["to"], RECEIVED)


class PendingReportTests(TestCase):
    def setUp(self):
        self.owner = User.objects.create_user(username="owner", password="pw-owner")
        self.registry = ClientRegistry()
        self.checklists = self.registry.checklists
        self.pending = self.registry.create(self.owner.pk, {
            "type": "Agent", "name": "Pending Co", "mobile": "9000000002"})
        self.done = self.registry.create(self.owner.pk, {
            "type": "Agent", "name": "Done Co", "mobile": "9000000003"})
        for label in DEFAULT_DOCUMENTS:
            self.checklists.set_status(self.done.pk, self.owner.pk, label, RECEIVED)

    def test_owner_report_skips_fully_received_clients(self):
        report = self.checklists.pending_report(self.owner.pk)

        self.assertEqual([row["clientId"] for row in report], [self.pending.pk])
        self.assertEqual(report[0]["clientName"], "Pending Co")
        self.assertEqual(len(report[0]["pending"]), 37)

    def test_single_client_report_includes_empty_pending(self):
        report = self.checklists.pending_report(self.owner.pk, client_id=self.done.pk)
        self.assertEqual(report, [
            {"clientId": self.done.pk, "clientName": "Done Co", "pending": []},
        ])


@pytest.mark.django_db
def test_checklist_lookup_for_unknown_client_is_not_found(django_user_model):
    owner = django_user_model.objects.create_user(username="solo", password="pw")
    manager = ChecklistManager()

    with pytest.raises(NotFound, match="Documents not found"):
        manager.get(12345, owner.pk)

    assert not Client.objects.exists()
