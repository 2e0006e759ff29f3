"""Caller identity supplied by the external identity provider.

The core never looks the user up on its own: every command carries the user
id explicitly and its handler rejects the call when it is missing.
"""

from storefront.shared.errors import Unauthenticated


def require_user(user_id):
    """Return the normalized user id, or raise ``Unauthenticated``."""
    user_id = str(user_id).strip() if user_id is not None else ""
    if not user_id:
        raise Unauthenticated({"user_id": ["Authentication required"]})
    return user_id
