"""
Canonical video status and role vocabularies.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from workflow.errors import InvalidRole, InvalidStatus


class VideoStatus(str, Enum):
    # Title optimization
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    OPTIMIZE_REVIEW = "optimize_review"
    TITLE_CORRECTIONS = "title_corrections"
    # Content review
    CONTENT_REVIEW = "content_review"
    CONTENT_CORRECTIONS = "content_corrections"
    AVAILABLE = "available"
    # Media upload and review
    UPLOAD_MEDIA = "upload_media"
    UPLOAD_REVIEW = "upload_review"
    MEDIA_REVIEW = "media_review"
    MEDIA_CORRECTIONS = "media_corrections"
    FINAL_REVIEW = "final_review"
    # Publication
    YOUTUBE_READY = "youtube_ready"
    COMPLETED = "completed"
    EN_REVISION = "en_revision"

    def __str__(self) -> str:
        return self.value


class Role(str, Enum):
    ADMIN = "admin"
    OPTIMIZER = "optimizer"
    REVIEWER = "reviewer"
    UPLOADER = "uploader"
    YOUTUBER = "youtuber"

    def __str__(self) -> str:
        return self.value


ALL_STATUSES = tuple(VideoStatus)
ALL_ROLES = tuple(Role)

# Derived display statuses produced by the effective status deriver.
NO_DISPONIBLE = "no_disponible"
DISPONIBLE = "disponible"
EN_PROCESO = "en_proceso"
ASIGNADO = "asignado"
VIDEO_DISPONIBLE = "video_disponible"
REVISANDO_TITULO = "revisando_titulo"
EN_REVISION = "en_revision"

StatusLike = Union[VideoStatus, str]
RoleLike = Union[Role, str]


def parse_status(value: Any) -> VideoStatus:
    """Return the canonical status for `value` or raise InvalidStatus."""
    if isinstance(value, VideoStatus):
        return value
    try:
        return VideoStatus(str(value).strip().lower())
    except ValueError:
        raise InvalidStatus(value) from None


def parse_role(value: Any) -> Role:
    """Return the canonical role for `value` or raise InvalidRole."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value or "").strip().lower())
    except ValueError:
        raise InvalidRole(value) from None


def coerce_role(value: Any) -> Any:
    """Best-effort role normalization for deny-by-default lookups.

    Unknown role strings are passed through unchanged so that table lookups
    simply miss instead of raising.
    """
    try:
        return parse_role(value)
    except InvalidRole:
        return value
