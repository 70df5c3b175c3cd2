import itertools

import pytest

from workflow.authorizer import allowed_transitions, can_transition
from workflow.errors import InvalidStatus
from workflow.policy import DEFAULT_POLICY
from workflow.resolver import auto_advance
from workflow.states import ALL_ROLES, ALL_STATUSES, Role, VideoStatus


@pytest.mark.parametrize("current,requested", list(itertools.product(ALL_STATUSES, ALL_STATUSES)))
def test_admin_may_perform_any_transition(current, requested):
    assert can_transition("admin", current, requested) is True


@pytest.mark.parametrize("role", ["viewer", "content_reviewer", "media_reviewer", "", None])
def test_undefined_roles_are_denied(role):
    for current, requested in itertools.product(ALL_STATUSES, ALL_STATUSES):
        assert can_transition(role, current, requested) is False


def test_optimizer_claim_scenario():
    assert can_transition("optimizer", "pending", "in_progress") is True
    assert auto_advance("optimizer", "pending") == VideoStatus.IN_PROGRESS


def test_reviewer_cannot_touch_pending_videos():
    assert can_transition("reviewer", "pending", "in_progress") is False
    assert auto_advance("reviewer", "pending") is None


@pytest.mark.parametrize("requested", ALL_STATUSES)
def test_optimizer_editing_session_may_save_any_target(requested):
    assert can_transition("optimizer", "in_progress", requested) is True


def test_no_requested_status_is_always_permitted():
    for role in ALL_ROLES:
        assert can_transition(role, "completed", None) is True


@pytest.mark.parametrize("role", [role for role in ALL_ROLES if role != Role.ADMIN])
def test_terminal_statuses_have_no_forward_edges(role):
    for terminal in (VideoStatus.COMPLETED, VideoStatus.EN_REVISION):
        assert allowed_transitions(role, terminal) == frozenset()
        for requested in ALL_STATUSES:
            assert can_transition(role, terminal, requested) is False


@pytest.mark.parametrize("role,status", list(itertools.product(ALL_ROLES, ALL_STATUSES)))
def test_auto_transitions_are_manually_allowed(role, status):
    target = auto_advance(role, status)
    if target is None:
        return
    assert can_transition(role, status, target) is True
    if role != Role.ADMIN:
        assert target in DEFAULT_POLICY.allowed_from(role, status)


def test_reviewer_table_examples():
    assert can_transition("reviewer", "optimize_review", "youtube_ready") is True
    assert can_transition("reviewer", "optimize_review", "title_corrections") is True
    assert can_transition("reviewer", "content_review", "upload_media") is True
    assert can_transition("reviewer", "media_review", "final_review") is True
    assert can_transition("reviewer", "media_review", "completed") is False


def test_youtuber_may_only_hand_media_to_review():
    assert can_transition("youtuber", "upload_media", "media_review") is True
    assert can_transition("youtuber", "media_corrections", "media_review") is True
    assert can_transition("youtuber", "upload_media", "completed") is False
    assert auto_advance("youtuber", "upload_media") is None


def test_auto_advance_for_viewer_and_unknown_roles():
    assert auto_advance("viewer", "pending") is None
    assert auto_advance("", "pending") is None
    assert auto_advance("producer", "media_corrections") is None


def test_auto_advance_table_examples():
    assert auto_advance("optimizer", "title_corrections") == VideoStatus.IN_PROGRESS
    assert auto_advance("reviewer", "upload_review") == VideoStatus.OPTIMIZE_REVIEW
    assert auto_advance("uploader", "media_corrections") == VideoStatus.UPLOAD_REVIEW
    assert auto_advance("admin", "optimize_review") == VideoStatus.YOUTUBE_READY
    assert auto_advance("optimizer", "completed") is None


def test_unknown_status_raises_invalid_status():
    with pytest.raises(InvalidStatus):
        can_transition("reviewer", "published", "completed")
    with pytest.raises(InvalidStatus):
        can_transition("reviewer", "optimize_review", "published")
    with pytest.raises(InvalidStatus):
        auto_advance("optimizer", "published")


def test_status_strings_are_normalized():
    assert can_transition("Optimizer", " PENDING ", "in_progress") is True
