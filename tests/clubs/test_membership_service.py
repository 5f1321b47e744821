from __future__ import annotations

import pytest

from club_hive.core.enums import ClubStatus, MembershipRole, MembershipStatus
from club_hive.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_join_request_creates_pending_membership(container, campus, ident):
    membership = container.membership_service.request_join(ident(campus.outsider), club_id=campus.club.club_id)

    assert membership.status == MembershipStatus.PENDING
    assert membership.role == MembershipRole.MEMBER


def test_join_twice_is_rejected(container, campus, ident):
    with pytest.raises(ValidationError):
        container.membership_service.request_join(ident(campus.bob), club_id=campus.club.club_id)
    with pytest.raises(ValidationError):
        container.membership_service.request_join(ident(campus.alice), club_id=campus.club.club_id)


def test_rejected_member_can_ask_again(container, campus, db, ident):
    svc = container.membership_service
    svc.decide(ident(campus.board), club_id=campus.club.club_id, user_id=campus.bob.user_id, status=MembershipStatus.REJECTED)

    again = svc.request_join(ident(campus.bob), club_id=campus.club.club_id)

    assert again.status == MembershipStatus.PENDING
    assert sum(1 for m in db.memberships.values() if m.user_id == campus.bob.user_id) == 1


def test_join_unknown_or_inactive_club(container, campus, make_club, ident):
    closed = make_club("Closed Club", status=ClubStatus.INACTIVE)
    with pytest.raises(NotFoundError):
        container.membership_service.request_join(ident(campus.outsider), club_id=999)
    with pytest.raises(ValidationError):
        container.membership_service.request_join(ident(campus.outsider), club_id=closed.club_id)


def test_board_approves_pending_request(container, campus, ident):
    svc = container.membership_service
    pending = svc.list_pending(ident(campus.board), club_id=campus.club.club_id)
    assert [m.user_id for m in pending] == [campus.bob.user_id]

    approved = svc.decide(
        ident(campus.board), club_id=campus.club.club_id, user_id=campus.bob.user_id, status=MembershipStatus.APPROVED
    )

    assert approved.status == MembershipStatus.APPROVED
    assert campus.bob.user_id in [m.user_id for m in svc.list_members(club_id=campus.club.club_id)]


def test_decide_requires_manager_and_final_status(container, campus, ident):
    svc = container.membership_service
    with pytest.raises(AuthorizationError):
        svc.decide(ident(campus.alice), club_id=campus.club.club_id, user_id=campus.bob.user_id, status=MembershipStatus.APPROVED)
    with pytest.raises(ValidationError):
        svc.decide(ident(campus.admin), club_id=campus.club.club_id, user_id=campus.bob.user_id, status=MembershipStatus.PENDING)


def test_pending_board_membership_grants_no_rights(container, campus, make_user, ident):
    hopeful = make_user("Hopeful")
    container.memberships_repo.create(
        user_id=hopeful.user_id, club_id=campus.club.club_id, role=MembershipRole.BOARD, status=MembershipStatus.PENDING
    )
    with pytest.raises(AuthorizationError):
        container.membership_service.list_pending(ident(hopeful), club_id=campus.club.club_id)


def test_set_member_role_only_for_approved_members(container, campus, ident):
    svc = container.membership_service
    promoted = svc.set_member_role(
        ident(campus.board), club_id=campus.club.club_id, user_id=campus.alice.user_id, role=MembershipRole.BOARD
    )
    assert promoted.role == MembershipRole.BOARD

    with pytest.raises(ValidationError):
        svc.set_member_role(
            ident(campus.board), club_id=campus.club.club_id, user_id=campus.bob.user_id, role=MembershipRole.BOARD
        )


def test_remove_member(container, campus, ident):
    svc = container.membership_service
    svc.remove_member(ident(campus.admin), club_id=campus.club.club_id, user_id=campus.alice.user_id)

    assert container.memberships_repo.get(user_id=campus.alice.user_id, club_id=campus.club.club_id) is None
    with pytest.raises(NotFoundError):
        svc.remove_member(ident(campus.admin), club_id=campus.club.club_id, user_id=campus.alice.user_id)


def test_admin_assigns_club_role_creating_or_updating(container, campus, ident):
    svc = container.membership_service
    created = svc.assign_club_role(
        ident(campus.admin), user_id=campus.outsider.user_id, club_id=campus.club.club_id, role=MembershipRole.BOARD
    )
    updated = svc.assign_club_role(
        ident(campus.admin), user_id=campus.bob.user_id, club_id=campus.club.club_id, role=MembershipRole.MEMBER
    )

    assert (created.role, created.status) == (MembershipRole.BOARD, MembershipStatus.APPROVED)
    assert (updated.role, updated.status) == (MembershipRole.MEMBER, MembershipStatus.APPROVED)
    with pytest.raises(AuthorizationError):
        svc.assign_club_role(
            ident(campus.board), user_id=campus.bob.user_id, club_id=campus.club.club_id, role=MembershipRole.BOARD
        )


def test_memberships_of_is_self_or_admin(container, campus, ident):
    svc = container.membership_service
    assert len(svc.memberships_of(ident(campus.alice), user_id=campus.alice.user_id)) == 1
    assert len(svc.memberships_of(ident(campus.admin), user_id=campus.alice.user_id)) == 1
    with pytest.raises(AuthorizationError):
        svc.memberships_of(ident(campus.bob), user_id=campus.alice.user_id)
