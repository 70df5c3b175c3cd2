"""
Role-aware display status derivation.

The raw persisted status is never changed here. The order of the rules is
load-bearing:

1. visibility gate: a role without visibility into the raw status sees
   `no_disponible`, whatever the metadata says;
2. `metadata.customStatus` override;
3. per-role claim overlays;
4. the role's default label for the raw status, else the raw status.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from workflow.models import UserId, Video, same_user
from workflow.policy import DEFAULT_POLICY, WorkflowPolicy
from workflow.states import (
    ASIGNADO,
    DISPONIBLE,
    EN_PROCESO,
    EN_REVISION,
    NO_DISPONIBLE,
    REVISANDO_TITULO,
    VIDEO_DISPONIBLE,
    Role,
    VideoStatus as S,
    coerce_role,
)

YOUTUBER_CLAIM_STATUSES = frozenset({S.UPLOAD_REVIEW, S.YOUTUBE_READY})
OPTIMIZER_CLAIM_STATUSES = frozenset({S.PENDING, S.IN_PROGRESS, S.OPTIMIZE_REVIEW, S.TITLE_CORRECTIONS})
REVIEWER_CLAIM_STATUSES = frozenset({S.OPTIMIZE_REVIEW, S.TITLE_CORRECTIONS})
UPLOADER_OPEN_STATUSES = frozenset({S.MEDIA_CORRECTIONS, S.YOUTUBE_READY})


def _role_overlay(video: Video, role: Any, current_user_id: Optional[UserId]) -> Optional[str]:
    status = video.status

    if role == Role.YOUTUBER and status in YOUTUBER_CLAIM_STATUSES:
        return ASIGNADO if same_user(video.current_reviewer_id, current_user_id) else VIDEO_DISPONIBLE

    if role == Role.OPTIMIZER and status in OPTIMIZER_CLAIM_STATUSES:
        assigned = video.metadata.assigned_optimizer_id
        return EN_PROCESO if same_user(assigned, current_user_id) else DISPONIBLE

    if role == Role.REVIEWER and status in REVIEWER_CLAIM_STATUSES:
        if video.current_reviewer_id is None:
            return DISPONIBLE
        return REVISANDO_TITULO if same_user(video.current_reviewer_id, current_user_id) else EN_REVISION

    if role == Role.UPLOADER and status in UPLOADER_OPEN_STATUSES:
        return DISPONIBLE

    return None


def effective_status(
    video: Video,
    role: Any,
    current_user_id: Optional[UserId],
    *,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> str:
    role = coerce_role(role)
    visibility = policy.visibility_for(video.status, role)
    if not visibility or visibility == NO_DISPONIBLE:
        return NO_DISPONIBLE

    if video.metadata.custom_status:
        return video.metadata.custom_status

    overlay = _role_overlay(video, role, current_user_id)
    if overlay is not None:
        return overlay

    return visibility or video.status.value


def can_view_video(
    video: Video,
    role: Any,
    current_user_id: Optional[UserId],
    *,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> bool:
    """Admins see everything; other roles need visibility into the raw status."""
    role = coerce_role(role)
    if role == Role.ADMIN:
        return True
    return effective_status(video, role, current_user_id, policy=policy) != NO_DISPONIBLE


def effective_assignment(
    video: Video,
    role: Any,
    current_user_id: Optional[UserId],
    *,
    current_username: Optional[str] = None,
    reviewer_name: Optional[str] = None,
) -> Dict[str, Any]:
    """Who the UI should show as the video's assignee for this viewer."""
    role = coerce_role(role)

    if role == Role.REVIEWER and video.status == S.UPLOAD_REVIEW:
        return {"name": "Disponible", "id": None}

    if role == Role.YOUTUBER and video.status == S.UPLOAD_REVIEW:
        if same_user(video.current_reviewer_id, current_user_id):
            return {"name": current_username or "Tú", "id": video.current_reviewer_id}
        if video.current_reviewer_id is not None:
            return {"name": "No disponible", "id": video.current_reviewer_id}
        return {"name": "Disponible", "id": None}

    optimization = video.metadata.optimization
    secondary = video.metadata.secondary_status
    if (
        role == Role.OPTIMIZER
        and secondary is not None
        and secondary.type == "title_approved"
        and optimization is not None
        and optimization.reviewed_by is not None
        and optimization.reviewed_by.approved
        and optimization.optimized_by is not None
    ):
        return {
            "name": optimization.optimized_by.username,
            "id": optimization.optimized_by.user_id,
        }

    return {"name": reviewer_name, "id": video.current_reviewer_id}
