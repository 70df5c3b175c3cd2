"""Automatic status change applied when a role claims a video."""

from __future__ import annotations

from typing import Any, Optional

from workflow.policy import DEFAULT_POLICY, WorkflowPolicy
from workflow.states import StatusLike, VideoStatus, coerce_role, parse_status


def auto_advance(
    role: Any,
    current_status: StatusLike,
    *,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> Optional[VideoStatus]:
    """Return the status a claim moves the video to, or None for no change.

    Viewers, unknown roles and unmapped statuses all resolve to None.
    """
    if not role or role == "viewer":
        return None
    return policy.auto_target(coerce_role(role), parse_status(current_status))
