from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..clubs.permissions import require_club_manager
from ..clubs.repository import ClubRepository, MembershipRepository
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import DEFAULT_PAGE_LIMIT, TITLE_MAX_LENGTH
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.identity import Identity
from ..notifications.fanout import NotificationFanout
from .model import Announcement, AnnouncementView
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(
        self,
        announcements: AnnouncementRepository,
        clubs: ClubRepository,
        memberships: MembershipRepository,
        fanout: NotificationFanout,
    ):
        self._announcements = announcements
        self._clubs = clubs
        self._memberships = memberships
        self._fanout = fanout

    def create(self, identity: Identity, *, title: str, content: str, club_id: Optional[int] = None) -> AnnouncementView:
        """Post an announcement and notify its audience.

        Club announcements need admin or club board rights; global ones are admin only.
        """
        title = require_max_length(require_non_empty(title, "Title"), "Title", TITLE_MAX_LENGTH)
        content = require_non_empty(content, "Content")

        if club_id is not None:
            if not self._clubs.get_by_id(int(club_id)):
                raise NotFoundError("Club not found")
            require_club_manager(
                identity,
                int(club_id),
                self._memberships,
                message="Not authorized to post announcements for this club",
            )
        elif not identity.is_admin:
            raise AuthorizationError("Only site admins can post global announcements")

        announcement_id = self._announcements.create(
            title=title,
            content=content,
            club_id=int(club_id) if club_id is not None else None,
            created_by=identity.user_id,
        )
        announcement = Announcement(
            announcement_id=announcement_id,
            title=title,
            content=content,
            club_id=int(club_id) if club_id is not None else None,
            created_by=identity.user_id,
        )
        self._fanout.notify_announcement(announcement)
        return self._announcements.get_view(announcement_id)

    def list_feed(self, identity: Identity, *, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0) -> Sequence[AnnouncementView]:
        if limit <= 0 or offset < 0:
            raise ValidationError("limit must be positive and offset non-negative")
        if identity.is_admin:
            return self._announcements.list_feed(club_ids=None, limit=limit, offset=offset)

        club_ids = [m.club_id for m in self._memberships.list_for_user(identity.user_id)]
        return self._announcements.list_feed(club_ids=club_ids, limit=limit, offset=offset)

    def list_for_club(self, identity: Identity, *, club_id: int) -> Sequence[AnnouncementView]:
        if not self._clubs.get_by_id(int(club_id)):
            raise NotFoundError("Club not found")
        if not identity.is_admin and not self._memberships.get(user_id=identity.user_id, club_id=int(club_id)):
            raise AuthorizationError("Not a member of this club")
        return self._announcements.list_for_club(int(club_id))

    def delete(self, identity: Identity, *, announcement_id: int) -> None:
        announcement = self._announcements.get_by_id(int(announcement_id))
        if not announcement:
            raise NotFoundError("Announcement not found")
        if announcement.created_by != identity.user_id and not identity.is_admin:
            raise AuthorizationError("Not authorized to delete this announcement")

        self._announcements.delete(announcement.announcement_id)
        logger.info("Announcement %s deleted by %s", announcement.announcement_id, identity.user_id)
