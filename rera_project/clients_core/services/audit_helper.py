from ..models import AuditLog
from ..store import RecordStore

audit_store = RecordStore(AuditLog)


def log_action(
    *,
    action: str,
    instance,
    owner_id=None,
    changes: dict | None = None,
):
    """
    Central audit logger.
    Call inside the transaction of the change being recorded, so the
    entry is rolled back together with it.
    """

    if owner_id is None:
        owner_id = getattr(instance, "owner_id", None)

    audit_store.create(
        owner_id=owner_id,
        action=action,
        object_type=instance.__class__.__name__,
        object_id=str(instance.pk),
        changes=changes,
    )
