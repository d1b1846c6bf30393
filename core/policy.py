"""
Authorization policy.

Every route declares the capability it needs (see utils.deps.require).
Ownership of a specific resource can only be decided once the resource is
loaded, so services call ensure_owner() after their existence check.
"""

from enum import Enum

from core.config import settings
from core.exceptions import Forbidden
from utils.emails import normalize_email


class Capability(str, Enum):
    ANONYMOUS = "anonymous"
    SELF = "authenticated-self"
    OPERATOR = "operator"


def is_operator(user: dict) -> bool:
    return user.get("role") in settings.OPERATOR_ROLES


def granted(user: dict | None, capability: Capability) -> bool:
    if capability is Capability.ANONYMOUS:
        return True
    if user is None:
        return False
    if capability is Capability.SELF:
        return True
    return is_operator(user)


def ensure_owner(user: dict, owner_email: str, allow_operator: bool = True) -> None:
    """
    Raise Forbidden unless the caller owns the resource.

    Args:
        user: Caller as returned by get_current_user
        owner_email: Email recorded on the resource
        allow_operator: Let admins/librarians through even when they are not the owner
    """
    if owner_email and normalize_email(user.get("email", "")) == normalize_email(owner_email):
        return
    if allow_operator and is_operator(user):
        return
    raise Forbidden("Forbidden access")


def scope_to_caller(user: dict, email: str | None) -> str | None:
    """
    Resolve the buyer filter for a listing endpoint.

    Operators may list anyone's records (or everything when email is None).
    Everybody else only ever sees their own, and asking for another
    buyer's records is Forbidden rather than silently narrowed.
    """
    if is_operator(user):
        return normalize_email(email) if email else None
    if email and normalize_email(email) != normalize_email(user.get("email", "")):
        raise Forbidden("Forbidden access")
    return user.get("email")
