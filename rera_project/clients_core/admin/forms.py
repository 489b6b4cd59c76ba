from django import forms
from django.core.exceptions import ValidationError

from clients_core.exceptions import Conflict
from clients_core.models import Client
from clients_core.services import ClientRegistry

registry = ClientRegistry()

# -----------------------------
# Register custom admin forms
# ----------------------------


class ClientAdminForm(forms.ModelForm):
    class Meta:
        model = Client
        fields = "__all__"

    def clean(self):
        cleaned = super().clean()

        # Same per-owner (name, location) rule the registry applies
        owner = cleaned.get("owner") or getattr(self.instance, "owner", None)
        name = cleaned.get("name")
        if owner is not None and name:
            try:
                registry.ensure_unique(
                    owner.pk, name, cleaned.get("location"),
                    exclude_pk=self.instance.pk,
                )
            except Conflict as exc:
                raise ValidationError(str(exc))

        return cleaned
