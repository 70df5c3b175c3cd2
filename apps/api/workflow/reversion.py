"""Revert and unassign rules."""

from __future__ import annotations

from typing import Any, Optional

from workflow.policy import DEFAULT_POLICY, WorkflowPolicy
from workflow.states import StatusLike, VideoStatus, coerce_role, parse_status


def can_revert(role: Any, current_status: StatusLike, *, policy: WorkflowPolicy = DEFAULT_POLICY) -> bool:
    allowed = policy.revert_permissions.get(coerce_role(role), frozenset())
    return parse_status(current_status) in allowed


def revert_target(current_status: StatusLike, *, policy: WorkflowPolicy = DEFAULT_POLICY) -> Optional[VideoStatus]:
    return policy.graph.previous_of(current_status)


def can_unassign(role: Any, current_status: StatusLike, *, policy: WorkflowPolicy = DEFAULT_POLICY) -> bool:
    role = coerce_role(role)
    status = parse_status(current_status)
    if role not in policy.unassign_roles:
        return False
    allowed = policy.unassign_roles[role]
    if allowed is None:
        return status not in policy.unassign_blocked
    return status in allowed


def unassign_target(current_status: StatusLike, *, policy: WorkflowPolicy = DEFAULT_POLICY) -> VideoStatus:
    # Anything without an explicit target falls back to `available`.
    status = parse_status(current_status)
    return policy.unassign_targets.get(status, policy.unassign_fallback)
