"""Role work queues: which videos a user should see in their list."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from workflow.effective import effective_assignment, effective_status
from workflow.labels import get_status_label
from workflow.models import UserId, Video, same_user
from workflow.policy import DEFAULT_POLICY, WorkflowPolicy
from workflow.states import ALL_STATUSES, Role, VideoStatus as S, parse_role


WORK_QUEUE_STATUSES: Dict[Role, FrozenSet[S]] = {
    Role.ADMIN: frozenset(ALL_STATUSES),
    Role.OPTIMIZER: frozenset(
        {S.AVAILABLE, S.CONTENT_CORRECTIONS, S.PENDING, S.IN_PROGRESS, S.TITLE_CORRECTIONS}
    ),
    Role.REVIEWER: frozenset({S.CONTENT_REVIEW, S.MEDIA_REVIEW, S.OPTIMIZE_REVIEW, S.TITLE_CORRECTIONS}),
    Role.YOUTUBER: frozenset({S.UPLOAD_MEDIA, S.MEDIA_CORRECTIONS, S.UPLOAD_REVIEW}),
    Role.UPLOADER: frozenset({S.MEDIA_CORRECTIONS, S.UPLOAD_REVIEW, S.YOUTUBE_READY}),
}


def work_queue_statuses(role: Any) -> FrozenSet[S]:
    return WORK_QUEUE_STATUSES[parse_role(role)]


def _touched_by(video: Video, role: Role, user_id: UserId) -> bool:
    if same_user(video.current_reviewer_id, user_id):
        return True
    if role == Role.OPTIMIZER:
        return same_user(video.optimized_by, user_id) or same_user(video.metadata.assigned_optimizer_id, user_id)
    if role == Role.REVIEWER:
        return same_user(video.content_reviewed_by, user_id) or same_user(video.media_reviewed_by, user_id)
    if role in (Role.YOUTUBER, Role.UPLOADER):
        return same_user(video.content_uploaded_by, user_id)
    return False


def in_work_queue(video: Video, role: Any, user_id: UserId) -> bool:
    """A video is queued for a user when its status belongs to the role's
    queue or the user already worked on it in that role."""
    role = parse_role(role)
    if role == Role.ADMIN:
        return True
    return video.status in WORK_QUEUE_STATUSES[role] or _touched_by(video, role, user_id)


def build_work_queue(
    videos: Iterable[Video],
    role: Any,
    user_id: UserId,
    *,
    username: Optional[str] = None,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> List[Dict[str, Any]]:
    role = parse_role(role)
    queue: List[Dict[str, Any]] = []
    for video in videos:
        if not in_work_queue(video, role, user_id):
            continue
        if role == Role.ADMIN:
            # Admins are outside the visibility table and see the raw status.
            display = video.status.value
        else:
            display = effective_status(video, role, user_id, policy=policy)
        queue.append(
            {
                "video_id": video.id,
                "status": video.status.value,
                "effective_status": display,
                "label": get_status_label(display, role, video=video),
                "assignment": effective_assignment(video, role, user_id, current_username=username),
            }
        )
    return queue
