from django.db import models

# -----------------------------------------
# Enforce owner scoping across all models
# that belong to an authenticated user
# -----------------------------------------
# Define subclass of Django’s QuerySet
class OwnerQuerySet(models.QuerySet):
    def for_owner(self, owner_id):            # Add queryset helper
        return self.filter(owner_id=owner_id)  # Apply filter

    def for_client(self, client_id, owner_id):
        return self.filter(
                            client_id=client_id,
                            owner_id=owner_id  # enforce owner scoping
                        )
    # Enables query:
    # Payment.objects.for_client(client_id, request.owner.pk)


# Attach OwnerQuerySet to .objects
class OwnerManager(models.Manager):

    def get_queryset(self): # ensure every model gets OwnerQuerySet(so .for_owner() is always available)
        return OwnerQuerySet(self.model, using=self._db)

    def for_owner(self, owner_id): # can call for_owner() directly on objects
        return self.get_queryset().for_owner(owner_id)

    def for_client(self, client_id, owner_id):
        return self.get_queryset().for_client(client_id, owner_id)

    # every model using OwnerManager can call:
    # Client.objects.for_owner(request.owner.pk)
