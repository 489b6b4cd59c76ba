import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.db import DatabaseError
from jose import JWTError, jwt

from .exceptions import Conflict, InvalidInput, StorageError

logger = logging.getLogger(__name__)

# Fixed validity window of a bearer token
TOKEN_LIFETIME = timedelta(days=7)


def create_access_token(user, now: Optional[datetime] = None) -> str:
    """Create a JWT access token for an owner, valid for seven days."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user.pk),
        "userId": user.get_username(),
        "iat": int(issued.timestamp()),
        "exp": int((issued + TOKEN_LIFETIME).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict]:
    """Decode and validate a JWT token; expired or tampered tokens give None."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def register_owner(username, password):
    """Create an owner account; the password is stored hashed."""
    if not username or not password:
        raise InvalidInput("User ID and password required")
    User = get_user_model()
    try:
        if User.objects.filter(username=username).exists():
            raise Conflict("User ID already exists")
        user = User.objects.create_user(username=username, password=password)
    except DatabaseError as exc:
        raise StorageError(str(exc)) from exc
    logger.info("Registered owner %s", user.pk)
    return user


def authenticate_owner(username, password):
    """Check credentials with Django's hashers; returns the user or raises."""
    if not username or not password:
        raise InvalidInput("User ID and password required")
    user = authenticate(username=username, password=password)
    if user is None:
        logger.warning("Failed login for %r", username)
        raise InvalidInput("Invalid credentials")
    return user
