from django.contrib.auth import get_user_model
from django.utils.deprecation import MiddlewareMixin

from .auth import decode_access_token


class BearerOwnerMiddleware(MiddlewareMixin):
    # Run on every request and
    # attach a .owner attribute to the request, based on the bearer token
    def process_request(self, request):
        request.owner = None

        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return  # Unauthenticated request: views decide whether that is allowed

        # expired or tampered tokens decode to None
        payload = decode_access_token(header.split(" ", 1)[1].strip())
        if not payload:
            return

        # ensure the token still points at an active account
        User = get_user_model()
        try:
            request.owner = User.objects.get(pk=payload.get("sub"), is_active=True)
        except (User.DoesNotExist, ValueError):
            request.owner = None
