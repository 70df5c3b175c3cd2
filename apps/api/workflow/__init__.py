"""Video status state machine and role-gated transition engine."""

from workflow.authorizer import allowed_transitions, can_transition
from workflow.effective import can_view_video, effective_assignment, effective_status
from workflow.errors import (
    AlreadyClaimed,
    InvalidRole,
    InvalidStatus,
    PolicyError,
    Unauthorized,
    WorkflowError,
)
from workflow.labels import get_status_label
from workflow.models import Video, VideoMetadata, parse_video
from workflow.policy import DEFAULT_POLICY, WorkflowPolicy, build_policy, describe_policy, validate_policy
from workflow.resolver import auto_advance
from workflow.reversion import can_revert, can_unassign, revert_target, unassign_target
from workflow.states import Role, VideoStatus, parse_role, parse_status


def initial_status():
    return DEFAULT_POLICY.graph.initial_status()


def previous_of(status):
    return DEFAULT_POLICY.graph.previous_of(status)


__all__ = [
    "AlreadyClaimed",
    "DEFAULT_POLICY",
    "InvalidRole",
    "InvalidStatus",
    "PolicyError",
    "Role",
    "Unauthorized",
    "Video",
    "VideoMetadata",
    "VideoStatus",
    "WorkflowError",
    "WorkflowPolicy",
    "allowed_transitions",
    "auto_advance",
    "build_policy",
    "can_revert",
    "can_transition",
    "can_unassign",
    "can_view_video",
    "describe_policy",
    "effective_assignment",
    "effective_status",
    "get_status_label",
    "initial_status",
    "parse_role",
    "parse_status",
    "parse_video",
    "previous_of",
    "revert_target",
    "unassign_target",
    "validate_policy",
]
