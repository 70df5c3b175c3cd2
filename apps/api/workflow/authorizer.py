"""Role-gated transition authorization."""

from __future__ import annotations

from typing import Any, FrozenSet, Optional

from workflow.policy import DEFAULT_POLICY, WorkflowPolicy
from workflow.states import Role, StatusLike, VideoStatus, coerce_role, parse_status


def allowed_transitions(
    role: Any,
    current_status: StatusLike,
    *,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> FrozenSet[VideoStatus]:
    """Statuses `role` may explicitly move a video to from `current_status`."""
    return policy.allowed_from(coerce_role(role), parse_status(current_status))


def can_transition(
    role: Any,
    current_status: StatusLike,
    requested_status: Optional[StatusLike],
    *,
    policy: WorkflowPolicy = DEFAULT_POLICY,
) -> bool:
    """Return whether `role` may move a video from `current_status` to `requested_status`.

    A `None` request means "no status change" and is always permitted. Admin
    bypasses the table, and an optimizer already editing (`in_progress`) may
    keep saving regardless of target. Everything else is deny-by-default.
    """
    role = coerce_role(role)
    current = parse_status(current_status)

    if role == Role.ADMIN:
        return True
    if current == VideoStatus.IN_PROGRESS and role == Role.OPTIMIZER:
        return True
    if requested_status is None:
        return True
    return parse_status(requested_status) in policy.allowed_from(role, current)
