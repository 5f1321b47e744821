from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Site-wide role used for authorization."""

    ADMIN = "admin"
    MEMBER = "member"


class ClubStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class MembershipRole(str, Enum):
    """Role inside one club. Board members manage the club."""

    MEMBER = "member"
    BOARD = "board"


class MembershipStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ParticipationStatus(str, Enum):
    REGISTERED = "registered"
    ABSENT = "absent"
    ATTENDED = "attended"


class NotificationType(str, Enum):
    ANNOUNCEMENT = "announcement"
    POINTS_AWARDED = "points_awarded"
    EVENT_REMINDER = "event_reminder"


class RelatedType(str, Enum):
    """What a notification's related_id points at."""

    ANNOUNCEMENT = "announcement"
    EVENT = "event"
