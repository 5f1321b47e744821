from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ClubStatus, MembershipRole, MembershipStatus
from .model import Club, ClubListing, Membership, MembershipDetail


class ClubRepository(Protocol):
    def get_by_id(self, club_id: int) -> Optional[Club]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Club]:
        raise NotImplementedError

    def list_with_member_counts(self) -> Sequence[ClubListing]:
        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str]) -> int:
        raise NotImplementedError

    def update(self, *, club_id: int, name: str, description: Optional[str], status: ClubStatus) -> bool:
        raise NotImplementedError

    def delete(self, club_id: int) -> bool:
        raise NotImplementedError


class MembershipRepository(Protocol):
    def get(self, *, user_id: int, club_id: int) -> Optional[Membership]:
        raise NotImplementedError

    def create(self, *, user_id: int, club_id: int, role: MembershipRole, status: MembershipStatus) -> int:
        """Insert a membership. The store rejects a second row for the same pair."""

        raise NotImplementedError

    def update(
        self,
        *,
        membership_id: int,
        role: Optional[MembershipRole] = None,
        status: Optional[MembershipStatus] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, membership_id: int) -> bool:
        raise NotImplementedError

    def list_for_club(self, club_id: int, *, status: Optional[MembershipStatus] = None) -> Sequence[MembershipDetail]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, status: Optional[MembershipStatus] = None) -> Sequence[MembershipDetail]:
        raise NotImplementedError

    def list_user_ids(self, club_id: int, *, status: Optional[MembershipStatus] = None) -> Sequence[int]:
        """User ids with a membership row for ``club_id`` (any status unless filtered)."""

        raise NotImplementedError
