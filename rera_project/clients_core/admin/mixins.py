class OwnerAdminMixin:
    """
    Enforce owner isolation in Django admin.
    Staff users only see (and create) rows they own;
    superusers see everything.
    """

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        # If superuser, show everything;
        # otherwise restrict to the logged-in owner
        if request.user.is_superuser:
            return qs
        return qs.filter(owner=request.user)

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        """
        Restrict foreignkey dropdowns to the current owner's rows.
        Example: the client field of a payment or task.
        """
        if not request.user.is_superuser:
            rel_model = getattr(db_field, "related_model", None)
            if db_field.name == "owner":
                kwargs["queryset"] = rel_model.objects.filter(pk=request.user.pk)
            elif rel_model is not None and hasattr(rel_model, "owner"):
                kwargs["queryset"] = rel_model.objects.filter(owner=request.user)
        return super().formfield_for_foreignkey(db_field, request, **kwargs)

    def save_model(self, request, obj, form, change):
        # Ensure object is always owned by the current user on save (unless superuser)
        if not request.user.is_superuser:
            obj.owner = request.user
        super().save_model(request, obj, form, change)
