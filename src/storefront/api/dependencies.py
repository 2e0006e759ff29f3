"""Request dependencies shared by every API router."""

import hmac

from fastapi import Header

from storefront.domain import storefront
from storefront.shared.errors import Unauthenticated
from storefront.shared.identity import require_user

# Environments that may run without an admin key
OPEN_ADMIN_ENVS = frozenset({"development", "test"})


def current_user(x_user_id: str | None = Header(default=None)) -> str:
    """User id set by the identity provider's gateway."""
    return require_user(x_user_id)


def require_admin(x_admin_key: str | None = Header(default=None)) -> bool:
    """Admin routes need the configured ``ADMIN_API_KEY``.

    Without a configured key they are open only in development and test;
    every other environment rejects the call.
    """
    admin_key = storefront.config["custom"].get("ADMIN_API_KEY") or ""
    if not admin_key:
        if storefront.config["env"] in OPEN_ADMIN_ENVS:
            return True
        raise Unauthenticated({"admin_key": ["Admin access is not configured"]})

    if not x_admin_key or not hmac.compare_digest(x_admin_key, admin_key):
        raise Unauthenticated({"admin_key": ["Invalid admin key"]})
    return True
