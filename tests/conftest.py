from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from werkzeug.security import generate_password_hash

from club_hive.analytics.model import (
    ActiveMember,
    AttendedEvent,
    ClubCounts,
    ClubMemberCount,
    MemberCounts,
    SystemCounts,
)
from club_hive.announcements.model import Announcement, AnnouncementView
from club_hive.clubs.model import Club, ClubListing, Membership, MembershipDetail
from club_hive.container import assemble_container
from club_hive.core.enums import (
    ClubStatus,
    MembershipRole,
    MembershipStatus,
    ParticipationStatus,
    Role,
)
from club_hive.core.identity import Identity
from club_hive.events.model import Event, EventListing, Participant, Participation
from club_hive.main import create_app
from club_hive.notifications.model import NewNotification, Notification
from club_hive.users.model import User

PASSWORD = "secret123"


class InMemoryDB:
    """Tables shared by every fake repository; ``clock`` stamps new rows."""

    def __init__(self):
        self.clock = datetime(2026, 3, 1, 12, 0, 0)
        self.users: Dict[int, User] = {}
        self.clubs: Dict[int, Club] = {}
        self.memberships: Dict[int, Membership] = {}
        self.events: Dict[int, Event] = {}
        self.participations: Dict[int, Participation] = {}
        self.announcements: Dict[int, Announcement] = {}
        self.notifications: Dict[int, Notification] = {}
        self._ids: Dict[str, int] = {}

    def next_id(self, table: str) -> int:
        self._ids[table] = self._ids.get(table, 0) + 1
        return self._ids[table]

    def insert_notification(self, item: NewNotification) -> int:
        nid = self.next_id("notifications")
        self.notifications[nid] = Notification(
            notification_id=nid,
            user_id=item.user_id,
            type=item.type,
            title=item.title,
            content=item.content,
            is_read=False,
            related_id=item.related_id,
            related_type=item.related_type,
            created_at=self.clock,
        )
        return nid


class FakeUsers:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def get_by_id(self, user_id):
        return self.db.users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self.db.users.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role):
        if self.get_by_email(email):
            raise ValueError("duplicate email")
        uid = self.db.next_id("users")
        self.db.users[uid] = User(
            user_id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            points=0,
            created_at=self.db.clock,
        )
        return uid

    def list_all(self):
        return sorted(self.db.users.values(), key=lambda u: u.user_id)

    def update_role(self, user_id, role):
        user = self.db.users.get(int(user_id))
        if not user:
            return False
        self.db.users[user.user_id] = replace(user, role=role)
        return True

    def list_ids_excluding_role(self, role):
        return [u.user_id for u in self.list_all() if u.role != role]

    def top_by_points(self, *, limit, exclude_role=Role.ADMIN):
        users = [u for u in self.db.users.values() if u.role != exclude_role]
        users.sort(key=lambda u: (-u.points, u.name))
        return users[:limit]


class FakeClubs:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def get_by_id(self, club_id):
        return self.db.clubs.get(int(club_id))

    def get_by_name(self, name):
        return next((c for c in self.db.clubs.values() if c.name == name), None)

    def list_with_member_counts(self):
        out = []
        for club in sorted(self.db.clubs.values(), key=lambda c: c.name):
            count = sum(
                1
                for m in self.db.memberships.values()
                if m.club_id == club.club_id and m.status == MembershipStatus.APPROVED
            )
            out.append(
                ClubListing(
                    club_id=club.club_id,
                    name=club.name,
                    description=club.description,
                    status=club.status,
                    member_count=count,
                )
            )
        return out

    def create(self, *, name, description):
        cid = self.db.next_id("clubs")
        self.db.clubs[cid] = Club(club_id=cid, name=name, description=description, created_at=self.db.clock)
        return cid

    def update(self, *, club_id, name, description, status):
        club = self.db.clubs.get(int(club_id))
        if not club:
            return False
        self.db.clubs[club.club_id] = replace(club, name=name, description=description, status=status)
        return True

    def delete(self, club_id):
        if int(club_id) not in self.db.clubs:
            return False
        del self.db.clubs[int(club_id)]
        for mid in [m.membership_id for m in self.db.memberships.values() if m.club_id == int(club_id)]:
            del self.db.memberships[mid]
        return True


class FakeMemberships:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def _detail(self, m: Membership) -> MembershipDetail:
        user = self.db.users[m.user_id]
        return MembershipDetail(
            membership_id=m.membership_id,
            user_id=m.user_id,
            club_id=m.club_id,
            role=m.role,
            status=m.status,
            user_name=user.name,
            user_email=user.email,
            club_name=self.db.clubs[m.club_id].name,
            created_at=m.created_at,
        )

    def get(self, *, user_id, club_id):
        return next(
            (
                m
                for m in self.db.memberships.values()
                if m.user_id == int(user_id) and m.club_id == int(club_id)
            ),
            None,
        )

    def create(self, *, user_id, club_id, role, status):
        if self.get(user_id=user_id, club_id=club_id):
            raise ValueError("duplicate membership")
        mid = self.db.next_id("memberships")
        self.db.memberships[mid] = Membership(
            membership_id=mid,
            user_id=int(user_id),
            club_id=int(club_id),
            role=role,
            status=status,
            created_at=self.db.clock,
        )
        return mid

    def update(self, *, membership_id, role=None, status=None):
        m = self.db.memberships.get(int(membership_id))
        if not m:
            return False
        self.db.memberships[m.membership_id] = replace(m, role=role or m.role, status=status or m.status)
        return True

    def delete(self, membership_id):
        return self.db.memberships.pop(int(membership_id), None) is not None

    def list_for_club(self, club_id, *, status=None):
        return [
            self._detail(m)
            for m in self.db.memberships.values()
            if m.club_id == int(club_id) and (status is None or m.status == status)
        ]

    def list_for_user(self, user_id, *, status=None):
        return [
            self._detail(m)
            for m in self.db.memberships.values()
            if m.user_id == int(user_id) and (status is None or m.status == status)
        ]

    def list_user_ids(self, club_id, *, status=None):
        return sorted(
            m.user_id
            for m in self.db.memberships.values()
            if m.club_id == int(club_id) and (status is None or m.status == status)
        )


class FakeEvents:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def get_by_id(self, event_id):
        return self.db.events.get(int(event_id))

    def list_all(self, *, club_id=None):
        events = [e for e in self.db.events.values() if club_id is None or e.club_id == int(club_id)]
        events.sort(key=lambda e: (e.event_date, e.event_id))
        return [
            EventListing(
                event_id=e.event_id,
                club_id=e.club_id,
                club_name=self.db.clubs[e.club_id].name,
                title=e.title,
                description=e.description,
                venue=e.venue,
                event_date=e.event_date,
                points=e.points,
            )
            for e in events
        ]

    def create(self, *, club_id, title, description, venue, event_date, points):
        eid = self.db.next_id("events")
        self.db.events[eid] = Event(
            event_id=eid,
            club_id=int(club_id),
            title=title,
            description=description,
            venue=venue,
            event_date=event_date,
            points=int(points),
            created_at=self.db.clock,
        )
        return eid

    def list_between(self, start, end):
        return sorted(
            (e for e in self.db.events.values() if start <= e.event_date <= end),
            key=lambda e: e.event_date,
        )


class FakeParticipations:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def get(self, *, event_id, user_id):
        return next(
            (
                p
                for p in self.db.participations.values()
                if p.event_id == int(event_id) and p.user_id == int(user_id)
            ),
            None,
        )

    def create(self, *, event_id, user_id, status):
        if self.get(event_id=event_id, user_id=user_id):
            raise ValueError("duplicate participation")
        pid = self.db.next_id("participations")
        self.db.participations[pid] = Participation(
            participation_id=pid,
            event_id=int(event_id),
            user_id=int(user_id),
            status=status,
            created_at=self.db.clock,
            updated_at=self.db.clock,
        )
        return pid

    def delete(self, participation_id):
        return self.db.participations.pop(int(participation_id), None) is not None

    def list_for_event(self, event_id):
        out = []
        for p in self.db.participations.values():
            if p.event_id != int(event_id):
                continue
            user = self.db.users[p.user_id]
            out.append(
                Participant(
                    participation_id=p.participation_id,
                    event_id=p.event_id,
                    user_id=p.user_id,
                    user_name=user.name,
                    user_email=user.email,
                    status=p.status,
                )
            )
        return sorted(out, key=lambda p: p.user_name)

    def list_user_ids_for_event(self, event_id, *, status):
        return [
            p.user_id
            for p in self.db.participations.values()
            if p.event_id == int(event_id) and p.status == status
        ]


class FakeAnnouncements:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def _view(self, a: Announcement) -> AnnouncementView:
        author = self.db.users[a.created_by]
        club = self.db.clubs.get(a.club_id) if a.club_id is not None else None
        return AnnouncementView(
            announcement_id=a.announcement_id,
            title=a.title,
            content=a.content,
            club_id=a.club_id,
            club_name=club.name if club else None,
            created_by=a.created_by,
            author_name=author.name,
            author_email=author.email,
            created_at=a.created_at,
        )

    def create(self, *, title, content, club_id, created_by):
        aid = self.db.next_id("announcements")
        self.db.announcements[aid] = Announcement(
            announcement_id=aid,
            title=title,
            content=content,
            club_id=club_id,
            created_by=int(created_by),
            created_at=self.db.clock,
        )
        return aid

    def get_by_id(self, announcement_id):
        return self.db.announcements.get(int(announcement_id))

    def get_view(self, announcement_id):
        a = self.get_by_id(announcement_id)
        return self._view(a) if a else None

    def _newest_first(self, items):
        return sorted(items, key=lambda a: (a.created_at, a.announcement_id), reverse=True)

    def list_feed(self, *, club_ids, limit, offset):
        items = [
            a
            for a in self.db.announcements.values()
            if club_ids is None or a.club_id is None or a.club_id in club_ids
        ]
        return [self._view(a) for a in self._newest_first(items)[offset : offset + limit]]

    def list_for_club(self, club_id):
        items = [a for a in self.db.announcements.values() if a.club_id == int(club_id)]
        return [self._view(a) for a in self._newest_first(items)]

    def delete(self, announcement_id):
        return self.db.announcements.pop(int(announcement_id), None) is not None


class FakeNotifications:
    def __init__(self, db: InMemoryDB):
        self.db = db
        self.batches: List[int] = []

    def create(self, item):
        return self.db.insert_notification(item)

    def create_many(self, items):
        self.batches.append(len(items))
        for item in items:
            self.db.insert_notification(item)
        return len(items)

    def exists(self, *, user_id, type, related_id, related_type):
        return any(
            n.user_id == int(user_id)
            and n.type == type
            and n.related_id == int(related_id)
            and n.related_type == related_type
            for n in self.db.notifications.values()
        )

    def get_for_user(self, *, notification_id, user_id):
        n = self.db.notifications.get(int(notification_id))
        return n if n and n.user_id == int(user_id) else None

    def list_for_user(self, *, user_id, unread_only=False, limit=50, offset=0):
        items = [
            n
            for n in self.db.notifications.values()
            if n.user_id == int(user_id) and (not unread_only or not n.is_read)
        ]
        items.sort(key=lambda n: (n.created_at, n.notification_id), reverse=True)
        return items[offset : offset + limit]

    def count_unread(self, *, user_id):
        return sum(1 for n in self.db.notifications.values() if n.user_id == int(user_id) and not n.is_read)

    def mark_read(self, *, notification_id, user_id):
        n = self.get_for_user(notification_id=notification_id, user_id=user_id)
        if not n:
            return False
        self.db.notifications[n.notification_id] = replace(n, is_read=True)
        return True

    def mark_all_read(self, *, user_id):
        count = 0
        for n in list(self.db.notifications.values()):
            if n.user_id == int(user_id) and not n.is_read:
                self.db.notifications[n.notification_id] = replace(n, is_read=True)
                count += 1
        return count

    def delete(self, *, notification_id, user_id):
        if not self.get_for_user(notification_id=notification_id, user_id=user_id):
            return False
        del self.db.notifications[int(notification_id)]
        return True


class FakeAttendanceLedger:
    def __init__(self, db: InMemoryDB):
        self.db = db
        self.calls: List[dict] = []

    def record_attendance(self, *, participation_id, status, user_id, user_points=None, notification=None):
        self.calls.append(
            dict(
                participation_id=participation_id,
                status=status,
                user_id=user_id,
                user_points=user_points,
                notification=notification,
            )
        )
        p = self.db.participations[int(participation_id)]
        self.db.participations[p.participation_id] = replace(p, status=status, updated_at=self.db.clock)
        if user_points is not None:
            user = self.db.users[int(user_id)]
            self.db.users[user.user_id] = replace(user, points=max(0, int(user_points)))
        if notification is not None:
            self.db.insert_notification(notification)


class FakeAnalytics:
    def __init__(self, db: InMemoryDB):
        self.db = db

    def _approved(self):
        return [m for m in self.db.memberships.values() if m.status == MembershipStatus.APPROVED]

    def _club_participations(self, club_id):
        return [p for p in self.db.participations.values() if self.db.events[p.event_id].club_id == int(club_id)]

    def system_counts(self, *, since):
        parts = list(self.db.participations.values())
        return SystemCounts(
            users=sum(1 for u in self.db.users.values() if u.role != Role.ADMIN),
            clubs=len(self.db.clubs),
            events=len(self.db.events),
            active_members=len({m.user_id for m in self._approved()}),
            recent_events=sum(1 for e in self.db.events.values() if e.created_at >= since),
            recent_memberships=sum(1 for m in self._approved() if m.created_at >= since),
            participations=len(parts),
            attended=sum(1 for p in parts if p.status == ParticipationStatus.ATTENDED),
        )

    def top_clubs(self, *, limit):
        counts = [
            ClubMemberCount(
                club_id=c.club_id,
                name=c.name,
                member_count=sum(1 for m in self._approved() if m.club_id == c.club_id),
            )
            for c in self.db.clubs.values()
        ]
        counts.sort(key=lambda c: (-c.member_count, c.name))
        return counts[:limit]

    def club_counts(self, club_id):
        members = [m for m in self.db.memberships.values() if m.club_id == int(club_id)]
        parts = self._club_participations(club_id)
        return ClubCounts(
            members=sum(1 for m in members if m.status == MembershipStatus.APPROVED),
            board_members=sum(
                1 for m in members if m.status == MembershipStatus.APPROVED and m.role == MembershipRole.BOARD
            ),
            pending_requests=sum(1 for m in members if m.status == MembershipStatus.PENDING),
            events=sum(1 for e in self.db.events.values() if e.club_id == int(club_id)),
            participations=len(parts),
            attended=sum(1 for p in parts if p.status == ParticipationStatus.ATTENDED),
        )

    def approved_members_before(self, club_id, before):
        return sum(1 for m in self._approved() if m.club_id == int(club_id) and m.created_at < before)

    def most_active_members(self, club_id, *, limit):
        parts = self._club_participations(club_id)
        out = []
        for m in self._approved():
            if m.club_id != int(club_id):
                continue
            user = self.db.users[m.user_id]
            attended = sum(
                1 for p in parts if p.user_id == m.user_id and p.status == ParticipationStatus.ATTENDED
            )
            out.append(ActiveMember(user_id=user.user_id, name=user.name, email=user.email, events_attended=attended))
        out.sort(key=lambda a: (-a.events_attended, a.name))
        return out[:limit]

    def event_status_counts(self, event_id):
        counts = {s: 0 for s in ParticipationStatus}
        for p in self.db.participations.values():
            if p.event_id == int(event_id):
                counts[p.status] += 1
        return counts

    def member_counts(self, user_id):
        parts = [p for p in self.db.participations.values() if p.user_id == int(user_id)]
        return MemberCounts(
            clubs=sum(1 for m in self._approved() if m.user_id == int(user_id)),
            registered=len(parts),
            attended=sum(1 for p in parts if p.status == ParticipationStatus.ATTENDED),
        )

    def points_earned_between(self, user_id, start, end):
        return sum(
            self.db.events[p.event_id].points
            for p in self.db.participations.values()
            if p.user_id == int(user_id)
            and p.status == ParticipationStatus.ATTENDED
            and start <= p.updated_at < end
        )

    def recent_attended_events(self, user_id, *, limit):
        parts = [
            p
            for p in self.db.participations.values()
            if p.user_id == int(user_id) and p.status == ParticipationStatus.ATTENDED
        ]
        parts.sort(key=lambda p: (p.updated_at, p.participation_id), reverse=True)
        out = []
        for p in parts[:limit]:
            e = self.db.events[p.event_id]
            out.append(
                AttendedEvent(
                    event_id=e.event_id,
                    title=e.title,
                    event_date=e.event_date,
                    points=e.points,
                    club_name=self.db.clubs[e.club_id].name,
                )
            )
        return out


@pytest.fixture
def db():
    return InMemoryDB()


@pytest.fixture
def ident():
    def _ident(user: User) -> Identity:
        return Identity(user_id=user.user_id, role=user.role)

    return _ident


@pytest.fixture
def container(db):
    return assemble_container(
        users_repo=FakeUsers(db),
        clubs_repo=FakeClubs(db),
        memberships_repo=FakeMemberships(db),
        events_repo=FakeEvents(db),
        participations_repo=FakeParticipations(db),
        announcements_repo=FakeAnnouncements(db),
        notifications_repo=FakeNotifications(db),
        attendance_ledger=FakeAttendanceLedger(db),
        analytics_repo=FakeAnalytics(db),
    )


@pytest.fixture
def make_user(db, container):
    def _make(name: str, *, role: Role = Role.MEMBER, points: int = 0) -> User:
        email = f"{name.lower().replace(' ', '.')}@campus.edu"
        uid = container.users_repo.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(PASSWORD),
            role=role,
        )
        if points:
            db.users[uid] = replace(db.users[uid], points=points)
        return db.users[uid]

    return _make


@pytest.fixture
def make_club(db, container):
    def _make(name: str, *, status: ClubStatus = ClubStatus.ACTIVE) -> Club:
        cid = container.clubs_repo.create(name=name, description=f"{name} description")
        if status != ClubStatus.ACTIVE:
            db.clubs[cid] = replace(db.clubs[cid], status=status)
        return db.clubs[cid]

    return _make


@pytest.fixture
def make_event(db, container):
    def _make(club: Club, title: str = "Spring Mixer", *, points: int = 10, when: Optional[datetime] = None) -> Event:
        eid = container.events_repo.create(
            club_id=club.club_id,
            title=title,
            description=None,
            venue="Hall A",
            event_date=when or datetime(2026, 3, 2, 18, 30),
            points=points,
        )
        return db.events[eid]

    return _make


@pytest.fixture
def campus(container, make_user, make_club):
    """Admin, a board member, an approved member, a pending member and an outsider around one club."""
    admin = make_user("Ada Admin", role=Role.ADMIN)
    board = make_user("Bea Board")
    alice = make_user("Alice")
    bob = make_user("Bob")
    outsider = make_user("Olly Outsider")
    club = make_club("Chess Club")

    memberships = container.memberships_repo
    memberships.create(
        user_id=board.user_id, club_id=club.club_id, role=MembershipRole.BOARD, status=MembershipStatus.APPROVED
    )
    memberships.create(
        user_id=alice.user_id, club_id=club.club_id, role=MembershipRole.MEMBER, status=MembershipStatus.APPROVED
    )
    memberships.create(
        user_id=bob.user_id, club_id=club.club_id, role=MembershipRole.MEMBER, status=MembershipStatus.PENDING
    )
    return SimpleNamespace(admin=admin, board=board, alice=alice, bob=bob, outsider=outsider, club=club)


@pytest.fixture
def app(container):
    flask_app = create_app("config.testing", container=container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user: User):
        resp = client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
