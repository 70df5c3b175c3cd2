import pytest

from workflow.errors import InvalidStatus
from workflow.reversion import can_revert, can_unassign, revert_target, unassign_target
from workflow.states import ALL_STATUSES, VideoStatus


def test_unassign_targets():
    assert unassign_target("upload_media") == VideoStatus.MEDIA_REVIEW
    assert unassign_target("media_corrections") == VideoStatus.MEDIA_REVIEW
    assert unassign_target("completed") == VideoStatus.AVAILABLE
    assert unassign_target("in_progress") == VideoStatus.AVAILABLE


def test_youtuber_unassign_scenario():
    assert can_unassign("youtuber", "media_corrections") is True
    assert unassign_target("media_corrections") == VideoStatus.MEDIA_REVIEW
    assert can_unassign("youtuber", "completed") is False


@pytest.mark.parametrize("status", ALL_STATUSES)
def test_admin_unassign_blocked_only_for_final_statuses(status):
    blocked = {VideoStatus.COMPLETED, VideoStatus.YOUTUBE_READY, VideoStatus.EN_REVISION}
    assert can_unassign("admin", status) is (status not in blocked)


@pytest.mark.parametrize("role", ["optimizer", "reviewer", "uploader", "viewer"])
def test_other_roles_never_unassign(role):
    assert not any(can_unassign(role, status) for status in ALL_STATUSES)


@pytest.mark.parametrize("status", ALL_STATUSES)
def test_admin_may_revert_every_status(status):
    assert can_revert("admin", status) is True


def test_role_revert_permissions():
    assert can_revert("optimizer", "optimize_review") is True
    assert can_revert("optimizer", "pending") is False
    assert can_revert("reviewer", "media_review") is True
    assert can_revert("reviewer", "content_corrections") is True
    assert can_revert("youtuber", "upload_media") is True
    assert can_revert("youtuber", "youtube_ready") is False
    assert can_revert("uploader", "media_corrections") is False
    assert can_revert("content_reviewer", "content_review") is False


def test_revert_target_follows_state_graph():
    assert revert_target("optimize_review") == VideoStatus.IN_PROGRESS
    assert revert_target("media_corrections") == VideoStatus.MEDIA_REVIEW
    assert revert_target("pending") is None


def test_invalid_status_raises():
    with pytest.raises(InvalidStatus):
        revert_target("archived")
    with pytest.raises(InvalidStatus):
        can_unassign("admin", "archived")
