from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import CLUB_NAME_MAX_LENGTH
from ..core.enums import ClubStatus, MembershipRole, MembershipStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.identity import Identity
from ..users.repository import UserRepository
from .model import Club, ClubListing, Membership, MembershipDetail
from .permissions import require_club_manager
from .repository import ClubRepository, MembershipRepository

logger = logging.getLogger(__name__)


class ClubService:
    """Use case: club catalogue (admin manages, everyone browses)."""

    def __init__(self, clubs: ClubRepository):
        self._clubs = clubs

    def get_club(self, club_id: int) -> Club:
        club = self._clubs.get_by_id(int(club_id))
        if not club:
            raise NotFoundError("Club not found")
        return club

    def list_clubs(self) -> Sequence[ClubListing]:
        return self._clubs.list_with_member_counts()

    def create_club(self, identity: Identity, *, name: str, description: Optional[str]) -> Club:
        if not identity.is_admin:
            raise AuthorizationError("Only admins can create clubs")

        name = require_max_length(require_non_empty(name, "Club name"), "Club name", CLUB_NAME_MAX_LENGTH)
        if self._clubs.get_by_name(name):
            raise ValidationError("A club with this name already exists")

        club_id = self._clubs.create(name=name, description=(description or "").strip() or None)
        logger.info("Club %s (%s) created by %s", club_id, name, identity.user_id)
        return self.get_club(club_id)

    def update_club(
        self,
        identity: Identity,
        *,
        club_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[ClubStatus] = None,
    ) -> Club:
        if not identity.is_admin:
            raise AuthorizationError("Only admins can edit clubs")

        club = self.get_club(club_id)
        new_name = club.name
        if name is not None:
            new_name = require_max_length(require_non_empty(name, "Club name"), "Club name", CLUB_NAME_MAX_LENGTH)
        if new_name != club.name:
            other = self._clubs.get_by_name(new_name)
            if other and other.club_id != club.club_id:
                raise ValidationError("A club with this name already exists")

        self._clubs.update(
            club_id=club.club_id,
            name=new_name,
            description=description if description is not None else club.description,
            status=status or club.status,
        )
        return self.get_club(club.club_id)

    def delete_club(self, identity: Identity, *, club_id: int) -> None:
        if not identity.is_admin:
            raise AuthorizationError("Only admins can delete clubs")

        club = self.get_club(club_id)
        if not self._clubs.delete(club.club_id):
            raise ValidationError("Deleting club failed")
        logger.info("Club %s deleted by %s", club.club_id, identity.user_id)


class MembershipService:
    """Use case: join requests, approvals and club roles.

    One membership row per (user, club); every write path checks for an
    existing row first and the schema enforces the same with a UNIQUE key.
    """

    def __init__(self, memberships: MembershipRepository, clubs: ClubRepository, users: UserRepository):
        self._memberships = memberships
        self._clubs = clubs
        self._users = users

    def _require_club(self, club_id: int) -> Club:
        club = self._clubs.get_by_id(int(club_id))
        if not club:
            raise NotFoundError("Club not found")
        return club

    def _require_membership(self, *, user_id: int, club_id: int) -> Membership:
        membership = self._memberships.get(user_id=int(user_id), club_id=int(club_id))
        if not membership:
            raise NotFoundError("Membership not found")
        return membership

    def request_join(self, identity: Identity, *, club_id: int) -> Membership:
        club = self._require_club(club_id)
        if club.status != ClubStatus.ACTIVE:
            raise ValidationError("This club is not accepting members")

        existing = self._memberships.get(user_id=identity.user_id, club_id=club.club_id)
        if existing:
            if existing.status == MembershipStatus.PENDING:
                raise ValidationError("Your join request is already pending")
            if existing.status == MembershipStatus.APPROVED:
                raise ValidationError("You are already a member of this club")
            self._memberships.update(membership_id=existing.membership_id, status=MembershipStatus.PENDING)
        else:
            self._memberships.create(
                user_id=identity.user_id,
                club_id=club.club_id,
                role=MembershipRole.MEMBER,
                status=MembershipStatus.PENDING,
            )
        logger.info("User %s requested to join club %s", identity.user_id, club.club_id)
        return self._require_membership(user_id=identity.user_id, club_id=club.club_id)

    def list_pending(self, identity: Identity, *, club_id: int) -> Sequence[MembershipDetail]:
        club = self._require_club(club_id)
        require_club_manager(identity, club.club_id, self._memberships)
        return self._memberships.list_for_club(club.club_id, status=MembershipStatus.PENDING)

    def decide(self, identity: Identity, *, club_id: int, user_id: int, status: MembershipStatus) -> Membership:
        if status == MembershipStatus.PENDING:
            raise ValidationError("Status must be approved or rejected")

        club = self._require_club(club_id)
        require_club_manager(identity, club.club_id, self._memberships)
        membership = self._require_membership(user_id=user_id, club_id=club.club_id)

        self._memberships.update(membership_id=membership.membership_id, status=status)
        logger.info("Membership of user %s in club %s set to %s", user_id, club.club_id, status.value)
        return self._require_membership(user_id=user_id, club_id=club.club_id)

    def list_members(self, *, club_id: int) -> Sequence[MembershipDetail]:
        club = self._require_club(club_id)
        return self._memberships.list_for_club(club.club_id, status=MembershipStatus.APPROVED)

    def my_clubs(self, identity: Identity) -> Sequence[MembershipDetail]:
        return self._memberships.list_for_user(identity.user_id)

    def memberships_of(self, identity: Identity, *, user_id: int) -> Sequence[MembershipDetail]:
        if not identity.is_admin and identity.user_id != int(user_id):
            raise AuthorizationError("Admin access required")
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")
        return self._memberships.list_for_user(int(user_id))

    def set_member_role(self, identity: Identity, *, club_id: int, user_id: int, role: MembershipRole) -> Membership:
        club = self._require_club(club_id)
        require_club_manager(identity, club.club_id, self._memberships)
        membership = self._require_membership(user_id=user_id, club_id=club.club_id)
        if membership.status != MembershipStatus.APPROVED:
            raise ValidationError("Only approved members can be given a club role")

        self._memberships.update(membership_id=membership.membership_id, role=role)
        return self._require_membership(user_id=user_id, club_id=club.club_id)

    def remove_member(self, identity: Identity, *, club_id: int, user_id: int) -> None:
        club = self._require_club(club_id)
        require_club_manager(identity, club.club_id, self._memberships)
        membership = self._require_membership(user_id=user_id, club_id=club.club_id)
        if not self._memberships.delete(membership.membership_id):
            raise ValidationError("Removing member failed")
        logger.info("User %s removed from club %s by %s", user_id, club.club_id, identity.user_id)

    def assign_club_role(self, identity: Identity, *, user_id: int, club_id: int, role: MembershipRole) -> Membership:
        """Admin shortcut: make ``user_id`` an approved member/board of the club."""
        if not identity.is_admin:
            raise AuthorizationError("Admin access required")

        club = self._require_club(club_id)
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

        existing = self._memberships.get(user_id=int(user_id), club_id=club.club_id)
        if existing:
            self._memberships.update(
                membership_id=existing.membership_id,
                role=role,
                status=MembershipStatus.APPROVED,
            )
        else:
            self._memberships.create(
                user_id=int(user_id),
                club_id=club.club_id,
                role=role,
                status=MembershipStatus.APPROVED,
            )
        logger.info("User %s assigned %s in club %s", user_id, role.value, club.club_id)
        return self._require_membership(user_id=user_id, club_id=club.club_id)
