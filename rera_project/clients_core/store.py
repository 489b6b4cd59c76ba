"""
Persistence port used by the record-keeping services.

Each RecordStore wraps one model's manager and exposes the handful of
operations the services need (create, get, find, update, delete).
Services receive their stores at construction, so every database access
goes through here and every database failure surfaces as StorageError.
"""
import functools

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from .exceptions import InvalidInput, NotFound, StorageError


def _storage_errors(method):
    """Re-raise database failures as StorageError, keeping the cause."""
    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            raise StorageError(str(exc)) from exc
    return wrapper


def _validation_message(exc: ValidationError) -> str:
    # message_dict exists only for field-level errors
    if hasattr(exc, "message_dict"):
        return "; ".join(
            f"{field}: {' '.join(messages)}"
            for field, messages in exc.message_dict.items()
        )
    return " ".join(exc.messages)


class RecordStore:
    """Create / get / find / update / delete for one model."""

    def __init__(self, model):
        self.model = model

    @property
    def name(self):
        return self.model.__name__

    def _queryset(self):
        return self.model.objects.all()

    @_storage_errors
    def create(self, **fields):
        try:
            return self.model.objects.create(**fields)
        except ValidationError as exc:  # raised by full_clean() in save()
            raise InvalidInput(_validation_message(exc)) from exc

    @_storage_errors
    def get(self, pk, **scope):
        try:
            return self._queryset().get(pk=pk, **scope)
        except (self.model.DoesNotExist, ValueError, TypeError):
            # a malformed pk is as absent as a missing one
            raise NotFound(f"{self.name} not found")

    @_storage_errors
    def get_for_update(self, pk, **scope):
        """Fetch and lock the row until the surrounding transaction ends."""
        try:
            return self._queryset().select_for_update().get(pk=pk, **scope)
        except (self.model.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"{self.name} not found")

    @_storage_errors
    def find_one(self, **filters):
        try:
            return self._queryset().filter(**filters).first()
        except (ValueError, TypeError):
            # a malformed key matches nothing
            return None

    @_storage_errors
    def find(self, *conditions, **filters):
        try:
            return list(self._queryset().filter(*conditions, **filters))
        except (ValueError, TypeError):
            return []

    @_storage_errors
    def exists(self, *conditions, exclude=None, **filters):
        try:
            qs = self._queryset().filter(*conditions, **filters)
            if exclude:
                qs = qs.exclude(**exclude)
            return qs.exists()
        except (ValueError, TypeError):
            return False

    @_storage_errors
    def update_fields(self, instance, **fields):
        """Assign fields and persist them in a single save()."""
        for attr, value in fields.items():
            setattr(instance, attr, value)
        update_fields = list(fields)
        if hasattr(instance, "updated_at"):
            update_fields.append("updated_at")
        try:
            instance.save(update_fields=update_fields)
        except ValidationError as exc:
            raise InvalidInput(_validation_message(exc)) from exc
        return instance

    @_storage_errors
    def update_where(self, filters, **fields):
        """
        Conditional bulk update; returns the number of rows written.
        Used as a compare-and-swap: a zero count means the row changed
        (or vanished) since it was read.
        """
        return self._queryset().filter(**filters).update(**fields)

    @_storage_errors
    def delete(self, instance):
        instance.delete()

    @_storage_errors
    def delete_where(self, **filters):
        try:
            deleted, _ = self._queryset().filter(**filters).delete()
        except (ValueError, TypeError):
            return 0
        return deleted
