"""Shared-secret check for destructive endpoints."""
from __future__ import annotations

import hmac

from apkhub.errors import AuthorizationError


def verify_secret(supplied: str | None, expected: str) -> None:
    """Raise AuthorizationError unless ``supplied`` matches the configured secret."""
    if not supplied or not hmac.compare_digest(supplied.encode(), expected.encode()):
        raise AuthorizationError("Invalid delete secret")
