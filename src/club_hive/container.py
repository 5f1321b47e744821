from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.mysql_analytics_repository import MySQLAnalyticsRepository
from .analytics.repository import AnalyticsRepository
from .analytics.service import AnalyticsService
from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.mysql_attendance_ledger import MySQLAttendanceLedger
from .attendance.repository import AttendanceLedger
from .attendance.service import AttendanceService
from .clubs.mysql_club_repository import MySQLClubRepository
from .clubs.mysql_membership_repository import MySQLMembershipRepository
from .clubs.repository import ClubRepository, MembershipRepository
from .clubs.service import ClubService, MembershipService
from .core.constants import REMINDER_LOOKAHEAD_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.mysql_participation_repository import MySQLParticipationRepository
from .events.repository import EventRepository, ParticipationRepository
from .events.service import EventService
from .notifications.fanout import NotificationFanout
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService
from .reminders.service import EventReminderService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    clubs_repo: ClubRepository
    memberships_repo: MembershipRepository
    events_repo: EventRepository
    participations_repo: ParticipationRepository
    announcements_repo: AnnouncementRepository
    notifications_repo: NotificationRepository
    attendance_ledger: AttendanceLedger
    analytics_repo: AnalyticsRepository

    fanout: NotificationFanout
    auth_service: AuthService
    user_service: UserService
    club_service: ClubService
    membership_service: MembershipService
    event_service: EventService
    attendance_service: AttendanceService
    announcement_service: AnnouncementService
    notification_service: NotificationService
    reminder_service: EventReminderService
    analytics_service: AnalyticsService


def assemble_container(
    *,
    users_repo: UserRepository,
    clubs_repo: ClubRepository,
    memberships_repo: MembershipRepository,
    events_repo: EventRepository,
    participations_repo: ParticipationRepository,
    announcements_repo: AnnouncementRepository,
    notifications_repo: NotificationRepository,
    attendance_ledger: AttendanceLedger,
    analytics_repo: AnalyticsRepository,
    conn: Optional[DatabaseConnection] = None,
    reminder_lookahead_hours: int = REMINDER_LOOKAHEAD_HOURS,
) -> Container:
    """Wire services over the given repositories (MySQL in the app, fakes in tests)."""

    fanout = NotificationFanout(notifications_repo, memberships_repo, users_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        clubs_repo=clubs_repo,
        memberships_repo=memberships_repo,
        events_repo=events_repo,
        participations_repo=participations_repo,
        announcements_repo=announcements_repo,
        notifications_repo=notifications_repo,
        attendance_ledger=attendance_ledger,
        analytics_repo=analytics_repo,
        fanout=fanout,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        club_service=ClubService(clubs_repo),
        membership_service=MembershipService(memberships_repo, clubs_repo, users_repo),
        event_service=EventService(
            events_repo,
            participations_repo,
            clubs_repo,
            memberships_repo,
            announcements_repo,
            fanout,
        ),
        attendance_service=AttendanceService(
            attendance_ledger,
            events_repo,
            participations_repo,
            users_repo,
            memberships_repo,
        ),
        announcement_service=AnnouncementService(announcements_repo, clubs_repo, memberships_repo, fanout),
        notification_service=NotificationService(notifications_repo),
        reminder_service=EventReminderService(
            events_repo,
            participations_repo,
            notifications_repo,
            lookahead_hours=reminder_lookahead_hours,
        ),
        analytics_service=AnalyticsService(
            analytics_repo,
            users_repo,
            clubs_repo,
            events_repo,
            memberships_repo,
        ),
    )


def build_container(*, db_config: dict, reminder_lookahead_hours: int = REMINDER_LOOKAHEAD_HOURS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        clubs_repo=MySQLClubRepository(conn),
        memberships_repo=MySQLMembershipRepository(conn),
        events_repo=MySQLEventRepository(conn),
        participations_repo=MySQLParticipationRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        attendance_ledger=MySQLAttendanceLedger(conn),
        analytics_repo=MySQLAnalyticsRepository(conn),
        reminder_lookahead_hours=reminder_lookahead_hours,
    )
