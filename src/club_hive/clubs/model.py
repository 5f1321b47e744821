from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ClubStatus, MembershipRole, MembershipStatus


@dataclass(frozen=True)
class Club:
    club_id: int
    name: str
    description: Optional[str]
    status: ClubStatus = ClubStatus.ACTIVE
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ClubListing:
    """Read-model for club lists: the club plus its approved member count."""

    club_id: int
    name: str
    description: Optional[str]
    status: ClubStatus
    member_count: int


@dataclass(frozen=True)
class Membership:
    """One (user, club) relationship. Unique per pair."""

    membership_id: int
    user_id: int
    club_id: int
    role: MembershipRole
    status: MembershipStatus
    created_at: Optional[datetime] = None

    @property
    def is_approved_board(self) -> bool:
        return self.role == MembershipRole.BOARD and self.status == MembershipStatus.APPROVED


@dataclass(frozen=True)
class MembershipDetail:
    """Read-model joining a membership with its user and club names."""

    membership_id: int
    user_id: int
    club_id: int
    role: MembershipRole
    status: MembershipStatus
    user_name: str
    user_email: str
    club_name: str
    created_at: Optional[datetime] = None
