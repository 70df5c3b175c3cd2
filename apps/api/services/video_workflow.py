"""
Video workflow service: claim, transition, revert and unassign.

Every operation takes a video snapshot and returns an updated copy. The caller
must persist the result with compare-and-swap semantics on `status` (or under
a row lock) so two users racing on the same snapshot cannot both win.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config import settings
from workflow.authorizer import can_transition
from workflow.effective import REVIEWER_CLAIM_STATUSES, YOUTUBER_CLAIM_STATUSES, can_view_video
from workflow.errors import AlreadyClaimed, InvalidStatus, Unauthorized
from workflow.models import Assignment, OptimizationInfo, RoleView, UserId, Video, YoutuberView, same_user
from workflow.policy import DEFAULT_POLICY, WorkflowPolicy
from workflow.resolver import auto_advance
from workflow.reversion import can_revert, can_unassign, revert_target, unassign_target
from workflow.states import Role, StatusLike, VideoStatus as S, parse_role, parse_status

logger = logging.getLogger(__name__)

CONTENT_STAGE = frozenset({S.OPTIMIZE_REVIEW, S.TITLE_CORRECTIONS, S.CONTENT_REVIEW, S.CONTENT_CORRECTIONS})
MEDIA_STAGE = frozenset({S.UPLOAD_REVIEW, S.MEDIA_REVIEW, S.MEDIA_CORRECTIONS, S.FINAL_REVIEW})
OPTIMIZER_ASSIGN_STATUSES = frozenset({S.PENDING, S.TITLE_CORRECTIONS})

# Statuses where opening a video takes the claim held in current_reviewer_id.
# Elsewhere a claim only applies the auto-transition.
CLAIM_STATUSES = {
    Role.OPTIMIZER: OPTIMIZER_ASSIGN_STATUSES | {S.IN_PROGRESS},
    Role.REVIEWER: REVIEWER_CLAIM_STATUSES,
    Role.YOUTUBER: YOUTUBER_CLAIM_STATUSES,
}


def owns_claim(role: Role, status: S) -> bool:
    return role == Role.ADMIN or status in CLAIM_STATUSES.get(role, frozenset())


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _deny(action: str, video: Video, role: Role, requested: Optional[S] = None) -> Unauthorized:
    if settings.LOG_AUTHORIZATION_DENIALS:
        logger.warning(
            "video_%s_denied video=%s role=%s status=%s requested=%s",
            action,
            video.id,
            role.value,
            video.status.value,
            requested.value if requested is not None else None,
        )
    return Unauthorized(
        action,
        role=role.value,
        status=video.status.value,
        requested_status=requested.value if requested is not None else None,
        video_id=video.id,
    )


def _parse_requested(video: Video, requested_status: StatusLike) -> S:
    try:
        return parse_status(requested_status)
    except InvalidStatus:
        logger.error("video_transition_invalid_status video=%s requested=%r", video.id, requested_status)
        raise


def _audit_updates(
    video: Video,
    role: Role,
    user_id: UserId,
    *,
    comments: Optional[str],
    now: datetime,
) -> Dict[str, Any]:
    updates: Dict[str, Any] = {}
    if role == Role.OPTIMIZER:
        updates["optimized_by"] = user_id
    elif role in (Role.YOUTUBER, Role.UPLOADER):
        updates["content_uploaded_by"] = user_id
    elif role == Role.REVIEWER:
        if video.status in CONTENT_STAGE:
            updates["content_reviewed_by"] = user_id
            updates["content_last_reviewed_at"] = now
            if comments:
                updates["content_review_comments"] = [*video.content_review_comments, comments]
        elif video.status in MEDIA_STAGE:
            updates["media_reviewed_by"] = user_id
            updates["media_last_reviewed_at"] = now
            if comments:
                updates["media_review_comments"] = [*video.media_review_comments, comments]
    return updates


def transition_video(
    video: Video,
    *,
    role: Any,
    user_id: UserId,
    requested_status: Optional[StatusLike],
    comments: Optional[str] = None,
    now: Optional[datetime] = None,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> Video:
    """Apply an explicit, user-chosen status change.

    `requested_status=None` saves the video without moving it. Moving to a
    different status hands the video to the next stage and releases the
    current reviewer claim.
    """
    role = parse_role(role)
    requested = _parse_requested(video, requested_status) if requested_status is not None else None

    if not can_transition(role, video.status, requested, policy=policy):
        raise _deny("transition", video, role, requested)

    timestamp = _now(now)
    updates = _audit_updates(video, role, user_id, comments=comments, now=timestamp)
    updates["updated_at"] = timestamp
    if requested is not None and requested != video.status:
        updates["status"] = requested
        updates["current_reviewer_id"] = None

    logger.info(
        "video_transition video=%s role=%s user=%s from=%s to=%s",
        video.id,
        role.value,
        user_id,
        video.status.value,
        requested.value if requested is not None else video.status.value,
    )
    return video.model_copy(update=updates)


def claim_video(
    video: Video,
    *,
    role: Any,
    user_id: UserId,
    username: str = "",
    now: Optional[datetime] = None,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> Video:
    """Start working on a video: apply the auto-transition and, where the role
    owns the stage, record the claim."""
    role = parse_role(role)
    takes_claim = owns_claim(role, video.status)

    if not can_view_video(video, role, user_id, policy=policy):
        raise _deny("claim", video, role)

    if (
        takes_claim
        and role != Role.ADMIN
        and video.current_reviewer_id is not None
        and not same_user(video.current_reviewer_id, user_id)
    ):
        logger.info("video_claim_conflict video=%s user=%s claimed_by=%s", video.id, user_id, video.current_reviewer_id)
        raise AlreadyClaimed(video_id=video.id, claimed_by=video.current_reviewer_id)

    target = auto_advance(role, video.status, policy=policy)
    if target is not None and not can_transition(role, video.status, target, policy=policy):
        raise _deny("claim", video, role, target)

    timestamp = _now(now)
    metadata = video.metadata

    if role in (Role.OPTIMIZER, Role.ADMIN) and video.status in OPTIMIZER_ASSIGN_STATUSES:
        optimization = metadata.optimization or OptimizationInfo()
        assignment = Assignment(user_id=user_id, username=username, assigned_at=timestamp)
        metadata = metadata.model_copy(
            update={"optimization": optimization.model_copy(update={"assigned_to": assignment})}
        )
    elif role == Role.YOUTUBER and takes_claim:
        role_view = metadata.role_view or RoleView()
        metadata = metadata.model_copy(
            update={
                "role_view": role_view.model_copy(
                    update={"youtuber": YoutuberView(status="video_disponible", hide_assignment=False)}
                )
            }
        )

    updates: Dict[str, Any] = {"metadata": metadata, "updated_at": timestamp}
    if takes_claim:
        updates["current_reviewer_id"] = user_id
    if target is not None:
        updates["status"] = target

    logger.info(
        "video_claim video=%s role=%s user=%s from=%s to=%s",
        video.id,
        role.value,
        user_id,
        video.status.value,
        (target or video.status).value,
    )
    return video.model_copy(update=updates)


def revert_video(
    video: Video,
    *,
    role: Any,
    user_id: UserId,
    now: Optional[datetime] = None,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> Video:
    """Move a video back to its predecessor status."""
    role = parse_role(role)
    if not can_revert(role, video.status, policy=policy):
        raise _deny("revert", video, role)

    target = revert_target(video.status, policy=policy)
    if target is None:
        raise _deny("revert", video, role)

    metadata = video.metadata
    if target == policy.graph.initial_status() and metadata.optimization is not None:
        metadata = metadata.model_copy(
            update={"optimization": metadata.optimization.model_copy(update={"assigned_to": None})}
        )

    logger.info(
        "video_revert video=%s role=%s user=%s from=%s to=%s",
        video.id,
        role.value,
        user_id,
        video.status.value,
        target.value,
    )
    return video.model_copy(
        update={
            "status": target,
            "current_reviewer_id": None,
            "metadata": metadata,
            "updated_at": _now(now),
        }
    )


def unassign_video(
    video: Video,
    *,
    role: Any,
    user_id: UserId,
    now: Optional[datetime] = None,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> Video:
    """Release the current claim and return the video to its unassigned status."""
    role = parse_role(role)
    if not can_unassign(role, video.status, policy=policy):
        raise _deny("unassign", video, role)

    target = unassign_target(video.status, policy=policy)

    metadata = video.metadata
    if metadata.optimization is not None:
        metadata = metadata.model_copy(
            update={"optimization": metadata.optimization.model_copy(update={"assigned_to": None})}
        )
    if metadata.role_view is not None and metadata.role_view.youtuber is not None:
        metadata = metadata.model_copy(
            update={"role_view": metadata.role_view.model_copy(update={"youtuber": None})}
        )

    logger.info(
        "video_unassign video=%s role=%s user=%s from=%s to=%s released=%s",
        video.id,
        role.value,
        user_id,
        video.status.value,
        target.value,
        video.current_reviewer_id,
    )
    return video.model_copy(
        update={
            "status": target,
            "current_reviewer_id": None,
            "metadata": metadata,
            "updated_at": _now(now),
        }
    )
