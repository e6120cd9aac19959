# accounts/identity.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """An authenticated caller: opaque id plus a display name."""
    id: str
    name: str
    is_staff: bool = False


def principal_for_user(user):
    if user is None or not user.is_authenticated:
        return None
    username = user.get_username()
    return Principal(
        id=username,
        name=(user.get_full_name() or '').strip() or username,
        is_staff=bool(getattr(user, 'is_staff', False)),
    )


def resolve_principal(request):
    """
    Return the Principal behind this request, or None when anonymous.
    Identity always comes from the auth middleware, never from request fields.
    """
    return principal_for_user(getattr(request, 'user', None))
