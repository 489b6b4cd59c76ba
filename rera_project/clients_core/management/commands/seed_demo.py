from decimal import Decimal
import datetime

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from clients_core.exceptions import Conflict
from clients_core.services import ClientRegistry

User = get_user_model()


class Command(BaseCommand):
    help = (
        "Create a demo owner with one client, a part-paid payment and a task."
    )

    # Define command-line arguments
    def add_arguments(self, parser):
        parser.add_argument(
            "--username", default="demo", help="User ID of the demo owner."
        )
        parser.add_argument(
            "--password", default="demo123", help="Password of the demo owner."
        )
        parser.add_argument(
            "--client-name",  # Define flag
            default="Demo Heights",
            help="Name of the demo client (default: Demo Heights)",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        # Read arguments from add_arguments()
        username = options["username"]
        password = options["password"]
        client_name = options["client_name"]

        registry = ClientRegistry()

        # 1. Owner account (reused when it already exists)
        owner, created = User.objects.get_or_create(username=username)
        if created:  # only a new account gets the given password
            owner.set_password(password)
            owner.save()
        self.stdout.write(
            self.style.SUCCESS(f"Owner: {owner.username} (pw={password})")
        )

        # 2. Client, which also seeds its document checklist
        try:
            client = registry.create(owner.pk, {
                "type": "Developer",
                "name": client_name,
                "promoterName": "Demo Promoters LLP",
                "location": "Pune",
                "mobile": "9000000000",
                "workStatus": "In Progress",
                "totalUnits": 48,
                "bookedUnits": 12,
            })
        except Conflict:
            self.stdout.write(self.style.WARNING(
                f"Client {client_name!r} already exists for {owner.username}, nothing to do"))
            return
        self.stdout.write(self.style.SUCCESS(f"Created client: {client}"))

        registry.checklists.set_status(
            client.pk, owner.pk, "PAN Card of the Firm/Company", "received")

        # 3. Payment with one instalment recorded
        payment = registry.ledger.create(
            client.pk, owner.pk, Decimal("50000.00"),
            description="MahaRERA registration fees",
            due_date=datetime.date.today() + datetime.timedelta(days=30),
        )
        registry.ledger.record_payment(
            payment.pk, owner.pk, Decimal("20000.00"),
            date=datetime.date.today(), notes="Advance")
        self.stdout.write(self.style.SUCCESS(f"Created payment: {payment.pk}"))

        # 4. Task
        task = registry.tasks.create(client.pk, owner.pk, {
            "title": "Upload quarterly progress report",
            "priority": "High",
            "status": "Open",
        })
        self.stdout.write(self.style.SUCCESS(f"Created task: {task}"))
        self.stdout.write(self.style.SUCCESS("Demo data seeded successfully!"))
