from django.apps import AppConfig


class ClientsCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "clients_core"
    verbose_name = "RERA clients"
