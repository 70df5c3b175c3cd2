"""
Video snapshot models consumed by the workflow core.

Payloads arrive in the UI's camelCase shape; every field is optional unless
the workflow genuinely needs it, so the deriver only ever asks "is this field
present" instead of probing a free-form dict.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from workflow.errors import InvalidStatus
from workflow.states import VideoStatus

UserId = Union[int, str]


class WorkflowModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class UserRef(WorkflowModel):
    user_id: UserId
    username: str = ""


class Assignment(UserRef):
    assigned_at: Optional[datetime] = None


class ReviewDecision(UserRef):
    approved: bool = False
    reviewed_at: Optional[datetime] = None
    comments: Optional[str] = None


class OptimizedBy(UserRef):
    optimized_at: Optional[datetime] = None


class ApprovalEntry(WorkflowModel):
    action: Literal["approved", "rejected"]
    timestamp: Optional[datetime] = None
    user_id: Optional[UserId] = None
    username: Optional[str] = None
    comments: Optional[str] = None


class OptimizationInfo(WorkflowModel):
    assigned_to: Optional[Assignment] = None
    reviewed_by: Optional[ReviewDecision] = None
    optimized_by: Optional[OptimizedBy] = None
    approval_history: List[ApprovalEntry] = Field(default_factory=list)


ReviewState = Literal["pendiente", "en_revision", "aprobado", "rechazado"]


class ReviewHistoryEntry(WorkflowModel):
    status: str
    timestamp: Optional[datetime] = None
    user_id: Optional[UserId] = None
    username: Optional[str] = None
    comments: Optional[str] = None
    changed_aspects: List[str] = Field(default_factory=list)


class ReviewTrack(WorkflowModel):
    status: ReviewState = "pendiente"
    assigned_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    comments: Optional[str] = None
    review_aspects: Dict[str, bool] = Field(default_factory=dict)
    history: List[ReviewHistoryEntry] = Field(default_factory=list)


class ReviewerView(WorkflowModel):
    title_review: Optional[ReviewTrack] = None
    content_review: Optional[ReviewTrack] = None


class YoutuberView(WorkflowModel):
    status: Literal["video_disponible", "asignado", "completado"] = "video_disponible"
    hide_assignment: bool = False


class OptimizerView(WorkflowModel):
    status: Literal["disponible", "pendiente_revision", "en_revision", "completado"] = "disponible"
    last_reviewed_by: Optional[UserRef] = None


class RoleView(WorkflowModel):
    youtuber: Optional[YoutuberView] = None
    optimizer: Optional[OptimizerView] = None
    reviewer: Optional[ReviewerView] = None


class SecondaryStatus(WorkflowModel):
    type: Literal["title_approved", "title_rejected", "needs_review", "in_review"]
    timestamp: Optional[datetime] = None
    updated_by: Optional[UserRef] = None


class VideoMetadata(WorkflowModel):
    custom_status: Optional[str] = None
    optimization: Optional[OptimizationInfo] = None
    role_view: Optional[RoleView] = None
    secondary_status: Optional[SecondaryStatus] = None

    @property
    def assigned_optimizer_id(self) -> Optional[UserId]:
        if self.optimization and self.optimization.assigned_to:
            return self.optimization.assigned_to.user_id
        return None

    @property
    def last_approval_action(self) -> Optional[str]:
        if self.optimization and self.optimization.approval_history:
            return self.optimization.approval_history[-1].action
        return None


class Video(WorkflowModel):
    id: Optional[UserId] = None
    project_id: Optional[int] = None
    title: str = ""
    series_number: Optional[str] = None
    status: VideoStatus = VideoStatus.PENDING
    current_reviewer_id: Optional[UserId] = None
    title_corrected: bool = False
    metadata: Optional[VideoMetadata] = Field(default_factory=VideoMetadata)

    optimized_by: Optional[UserId] = None
    content_reviewed_by: Optional[UserId] = None
    content_last_reviewed_at: Optional[datetime] = None
    content_review_comments: Optional[List[str]] = Field(default_factory=list)
    content_uploaded_by: Optional[UserId] = None
    media_reviewed_by: Optional[UserId] = None
    media_last_reviewed_at: Optional[datetime] = None
    media_review_comments: Optional[List[str]] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_or_empty(cls, value: Any) -> Any:
        return VideoMetadata() if value is None else value

    @field_validator("content_review_comments", "media_review_comments", mode="before")
    @classmethod
    def _comments_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("current_reviewer_id", mode="before")
    @classmethod
    def _unclaimed_when_falsy(cls, value: Any) -> Any:
        # 0 and "" mean nobody holds the claim.
        return value or None


def same_user(left: Optional[UserId], right: Optional[UserId]) -> bool:
    """Compare user ids that may arrive as ints or numeric strings."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


def parse_video(payload: Dict[str, Any]) -> Video:
    """Validate a raw video payload, surfacing unknown statuses as InvalidStatus."""
    try:
        return Video.model_validate(payload)
    except ValidationError as exc:
        for error in exc.errors():
            if error.get("loc", ())[:1] == ("status",):
                raise InvalidStatus(payload.get("status")) from exc
        raise
