"""Exceptions raised by the video workflow core and its calling layer."""

from __future__ import annotations

from typing import Any, Iterable, Optional


class WorkflowError(Exception):
    """Base class for every workflow failure."""


class InvalidStatus(WorkflowError, ValueError):
    """A status value outside the canonical vocabulary reached the core."""

    def __init__(self, status: Any):
        self.status = status
        super().__init__(f"Unknown video status: {status!r}")


class InvalidRole(WorkflowError, ValueError):
    """A role value outside the closed role set reached the boundary."""

    def __init__(self, role: Any):
        self.role = role
        super().__init__(f"Unknown role: {role!r}")


class Unauthorized(WorkflowError):
    """A mutation was attempted that the policy denies for this actor."""

    def __init__(
        self,
        action: str,
        *,
        role: Any,
        status: Any,
        requested_status: Any = None,
        video_id: Optional[Any] = None,
    ):
        self.action = action
        self.role = role
        self.status = status
        self.requested_status = requested_status
        self.video_id = video_id
        target = f" -> {requested_status}" if requested_status is not None else ""
        super().__init__(f"Role {role} may not {action} video in status {status}{target}")


class AlreadyClaimed(WorkflowError):
    """The video is currently claimed by a different user."""

    def __init__(self, *, video_id: Any, claimed_by: Any):
        self.video_id = video_id
        self.claimed_by = claimed_by
        super().__init__(f"Video {video_id} is already claimed by user {claimed_by}")


class PolicyError(WorkflowError):
    """The configured workflow policy violates a build-time invariant."""

    def __init__(self, violations: Iterable[str]):
        self.violations = list(violations)
        super().__init__("Invalid workflow policy: " + "; ".join(self.violations))
