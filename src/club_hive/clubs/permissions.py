from __future__ import annotations

from ..core.exceptions import AuthorizationError
from ..core.identity import Identity
from .repository import MembershipRepository


def can_manage_club(identity: Identity, club_id: int, memberships: MembershipRepository) -> bool:
    """Site admins and approved board members manage a club."""
    if identity.is_admin:
        return True
    membership = memberships.get(user_id=identity.user_id, club_id=int(club_id))
    return bool(membership and membership.is_approved_board)


def require_club_manager(
    identity: Identity,
    club_id: int,
    memberships: MembershipRepository,
    *,
    message: str = "Admin or club board access required",
) -> None:
    if not can_manage_club(identity, club_id, memberships):
        raise AuthorizationError(message)
