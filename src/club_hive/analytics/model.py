from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class SystemCounts:
    users: int
    clubs: int
    events: int
    active_members: int
    recent_events: int
    recent_memberships: int
    participations: int
    attended: int


@dataclass(frozen=True)
class ClubMemberCount:
    club_id: int
    name: str
    member_count: int


@dataclass(frozen=True)
class ClubCounts:
    members: int
    board_members: int
    pending_requests: int
    events: int
    participations: int
    attended: int


@dataclass(frozen=True)
class ActiveMember:
    user_id: int
    name: str
    email: str
    events_attended: int


@dataclass(frozen=True)
class MemberCounts:
    clubs: int
    registered: int
    attended: int


@dataclass(frozen=True)
class AttendedEvent:
    event_id: int
    title: str
    event_date: datetime
    points: int
    club_name: str


@dataclass(frozen=True)
class MonthlyValue:
    month: str
    value: int


@dataclass(frozen=True)
class SystemReport:
    total_users: int
    total_clubs: int
    total_events: int
    total_active_members: int
    recent_events: int
    recent_memberships: int
    attendance_rate: float
    top_clubs: List[ClubMemberCount] = field(default_factory=list)


@dataclass(frozen=True)
class ClubReport:
    club_id: int
    club_name: str
    total_members: int
    board_members: int
    pending_requests: int
    total_events: int
    attendance_rate: float
    member_growth: List[MonthlyValue] = field(default_factory=list)
    active_members: List[ActiveMember] = field(default_factory=list)


@dataclass(frozen=True)
class EventReport:
    event_id: int
    title: str
    event_date: datetime
    venue: Optional[str]
    points: int
    club_id: int
    club_name: str
    total_registrations: int
    registered: int
    attended: int
    absent: int
    attendance_rate: float
    no_show_rate: float


@dataclass(frozen=True)
class MemberReport:
    user_id: int
    name: str
    email: str
    total_points: int
    total_clubs: int
    total_events_registered: int
    total_events_attended: int
    attendance_rate: float
    points_history: List[MonthlyValue] = field(default_factory=list)
    clubs: List[str] = field(default_factory=list)
    recent_events: List[AttendedEvent] = field(default_factory=list)
