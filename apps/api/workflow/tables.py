"""
Static workflow tables.

These are plain literals; `workflow.policy` freezes them into a
`WorkflowPolicy` once at import time. Every non-admin role lists every status
so that "no transitions" is explicit.
"""

from __future__ import annotations

from workflow.states import (
    DISPONIBLE,
    NO_DISPONIBLE,
    Role,
    VideoStatus as S,
)

INITIAL_STATUS = S.PENDING

TERMINAL_STATUSES = (S.COMPLETED, S.EN_REVISION)

# status -> predecessor, used only for reverting.
STATE_FLOW = {
    S.PENDING: None,
    # Title optimization
    S.IN_PROGRESS: S.PENDING,
    S.OPTIMIZE_REVIEW: S.IN_PROGRESS,
    S.TITLE_CORRECTIONS: S.OPTIMIZE_REVIEW,
    # Content
    S.CONTENT_REVIEW: S.TITLE_CORRECTIONS,
    S.CONTENT_CORRECTIONS: S.CONTENT_REVIEW,
    S.AVAILABLE: S.CONTENT_REVIEW,
    # Media
    S.MEDIA_REVIEW: S.CONTENT_REVIEW,
    S.UPLOAD_MEDIA: S.MEDIA_REVIEW,
    S.UPLOAD_REVIEW: S.UPLOAD_MEDIA,
    S.MEDIA_CORRECTIONS: S.MEDIA_REVIEW,
    S.FINAL_REVIEW: S.MEDIA_REVIEW,
    # Publication
    S.YOUTUBE_READY: S.MEDIA_REVIEW,
    S.COMPLETED: S.YOUTUBE_READY,
    S.EN_REVISION: S.COMPLETED,
}

ROLE_TRANSITIONS = {
    Role.ADMIN: {
        # Admin bypasses this table; it documents the usual admin moves.
        S.PENDING: [S.IN_PROGRESS],
        S.IN_PROGRESS: [S.OPTIMIZE_REVIEW, S.YOUTUBE_READY],
        S.OPTIMIZE_REVIEW: [S.YOUTUBE_READY, S.COMPLETED],
        S.TITLE_CORRECTIONS: [S.IN_PROGRESS, S.OPTIMIZE_REVIEW, S.YOUTUBE_READY],
        S.CONTENT_REVIEW: [S.UPLOAD_MEDIA, S.CONTENT_CORRECTIONS],
        S.CONTENT_CORRECTIONS: [S.CONTENT_REVIEW],
        S.AVAILABLE: [S.CONTENT_REVIEW],
        S.UPLOAD_MEDIA: [S.MEDIA_REVIEW],
        S.UPLOAD_REVIEW: [S.OPTIMIZE_REVIEW, S.YOUTUBE_READY, S.COMPLETED],
        S.MEDIA_REVIEW: [S.MEDIA_CORRECTIONS, S.FINAL_REVIEW],
        S.MEDIA_CORRECTIONS: [S.UPLOAD_REVIEW, S.YOUTUBE_READY, S.COMPLETED],
        S.FINAL_REVIEW: [S.YOUTUBE_READY, S.COMPLETED],
        S.YOUTUBE_READY: [S.COMPLETED],
        S.COMPLETED: [],
        S.EN_REVISION: [],
    },
    Role.OPTIMIZER: {
        S.PENDING: [S.IN_PROGRESS],
        S.IN_PROGRESS: [S.OPTIMIZE_REVIEW],
        S.OPTIMIZE_REVIEW: [S.YOUTUBE_READY],
        # Claiming a corrected title reopens the editing session.
        S.TITLE_CORRECTIONS: [S.IN_PROGRESS, S.OPTIMIZE_REVIEW],
        S.CONTENT_REVIEW: [],
        S.CONTENT_CORRECTIONS: [S.CONTENT_REVIEW],
        S.AVAILABLE: [S.CONTENT_REVIEW],
        S.UPLOAD_MEDIA: [],
        S.UPLOAD_REVIEW: [S.YOUTUBE_READY],
        S.MEDIA_REVIEW: [],
        S.MEDIA_CORRECTIONS: [],
        S.FINAL_REVIEW: [],
        S.YOUTUBE_READY: [S.COMPLETED],
        S.COMPLETED: [],
        S.EN_REVISION: [],
    },
    Role.REVIEWER: {
        S.PENDING: [],
        S.IN_PROGRESS: [],
        S.OPTIMIZE_REVIEW: [S.TITLE_CORRECTIONS, S.UPLOAD_REVIEW, S.YOUTUBE_READY],
        S.TITLE_CORRECTIONS: [],
        S.CONTENT_REVIEW: [S.UPLOAD_MEDIA, S.CONTENT_CORRECTIONS],
        S.CONTENT_CORRECTIONS: [],
        S.AVAILABLE: [],
        S.UPLOAD_MEDIA: [],
        S.UPLOAD_REVIEW: [S.OPTIMIZE_REVIEW, S.YOUTUBE_READY],
        S.MEDIA_REVIEW: [S.MEDIA_CORRECTIONS, S.FINAL_REVIEW],
        S.MEDIA_CORRECTIONS: [S.UPLOAD_REVIEW, S.YOUTUBE_READY],
        S.FINAL_REVIEW: [],
        S.YOUTUBE_READY: [S.COMPLETED],
        S.COMPLETED: [],
        S.EN_REVISION: [],
    },
    Role.UPLOADER: {
        S.PENDING: [],
        S.IN_PROGRESS: [],
        S.OPTIMIZE_REVIEW: [S.YOUTUBE_READY],
        S.TITLE_CORRECTIONS: [],
        S.CONTENT_REVIEW: [],
        S.CONTENT_CORRECTIONS: [],
        S.AVAILABLE: [],
        S.UPLOAD_MEDIA: [],
        S.UPLOAD_REVIEW: [S.OPTIMIZE_REVIEW, S.YOUTUBE_READY],
        S.MEDIA_REVIEW: [],
        S.MEDIA_CORRECTIONS: [S.UPLOAD_REVIEW, S.YOUTUBE_READY],
        S.FINAL_REVIEW: [],
        S.YOUTUBE_READY: [S.COMPLETED],
        S.COMPLETED: [],
        S.EN_REVISION: [],
    },
    Role.YOUTUBER: {
        S.PENDING: [],
        S.IN_PROGRESS: [],
        S.OPTIMIZE_REVIEW: [],
        S.TITLE_CORRECTIONS: [],
        S.CONTENT_REVIEW: [],
        S.CONTENT_CORRECTIONS: [],
        S.AVAILABLE: [],
        S.UPLOAD_MEDIA: [S.MEDIA_REVIEW],
        S.UPLOAD_REVIEW: [],
        S.MEDIA_REVIEW: [],
        S.MEDIA_CORRECTIONS: [S.MEDIA_REVIEW],
        S.FINAL_REVIEW: [],
        S.YOUTUBE_READY: [],
        S.COMPLETED: [],
        S.EN_REVISION: [],
    },
}

# Status change applied the moment a role claims a video.
AUTO_TRANSITIONS = {
    Role.ADMIN: {
        S.PENDING: S.IN_PROGRESS,
        S.TITLE_CORRECTIONS: S.IN_PROGRESS,
        S.OPTIMIZE_REVIEW: S.YOUTUBE_READY,
        S.UPLOAD_REVIEW: S.OPTIMIZE_REVIEW,
        S.MEDIA_CORRECTIONS: S.UPLOAD_REVIEW,
    },
    Role.OPTIMIZER: {
        S.PENDING: S.IN_PROGRESS,
        S.TITLE_CORRECTIONS: S.IN_PROGRESS,
    },
    Role.REVIEWER: {
        S.OPTIMIZE_REVIEW: S.YOUTUBE_READY,
        S.UPLOAD_REVIEW: S.OPTIMIZE_REVIEW,
        S.MEDIA_CORRECTIONS: S.UPLOAD_REVIEW,
    },
    Role.UPLOADER: {
        S.MEDIA_CORRECTIONS: S.UPLOAD_REVIEW,
    },
    Role.YOUTUBER: {},
}

REVERT_PERMISSIONS = {
    Role.ADMIN: list(STATE_FLOW),
    Role.OPTIMIZER: [S.IN_PROGRESS, S.OPTIMIZE_REVIEW, S.TITLE_CORRECTIONS],
    Role.REVIEWER: [
        S.OPTIMIZE_REVIEW,
        S.TITLE_CORRECTIONS,
        S.CONTENT_REVIEW,
        S.CONTENT_CORRECTIONS,
        S.MEDIA_REVIEW,
        S.MEDIA_CORRECTIONS,
        S.YOUTUBE_READY,
        S.COMPLETED,
    ],
    Role.UPLOADER: [],
    Role.YOUTUBER: [S.UPLOAD_MEDIA, S.MEDIA_CORRECTIONS],
}

UNASSIGN_ROLES = {
    # None means "every status outside the blocked set".
    Role.ADMIN: None,
    Role.YOUTUBER: [S.UPLOAD_MEDIA, S.MEDIA_CORRECTIONS],
}
UNASSIGN_BLOCKED = (S.COMPLETED, S.YOUTUBE_READY, S.EN_REVISION)
UNASSIGN_TARGETS = {
    S.UPLOAD_MEDIA: S.MEDIA_REVIEW,
    S.MEDIA_CORRECTIONS: S.MEDIA_REVIEW,
}
UNASSIGN_FALLBACK = S.AVAILABLE

_ND = NO_DISPONIBLE
_D = DISPONIBLE

# status -> role -> default display label; admin is deliberately absent.
ROLE_VISIBILITY = {
    S.PENDING: {Role.OPTIMIZER: _D, Role.REVIEWER: _ND, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.IN_PROGRESS: {Role.OPTIMIZER: _D, Role.REVIEWER: _ND, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.OPTIMIZE_REVIEW: {Role.OPTIMIZER: _D, Role.REVIEWER: _D, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.TITLE_CORRECTIONS: {Role.OPTIMIZER: _D, Role.REVIEWER: _D, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.CONTENT_REVIEW: {Role.OPTIMIZER: _ND, Role.REVIEWER: _D, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.CONTENT_CORRECTIONS: {Role.OPTIMIZER: _D, Role.REVIEWER: _ND, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.AVAILABLE: {Role.OPTIMIZER: _D, Role.REVIEWER: _ND, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.UPLOAD_MEDIA: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _D, Role.UPLOADER: _ND},
    S.UPLOAD_REVIEW: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _D, Role.UPLOADER: _D},
    S.MEDIA_REVIEW: {Role.OPTIMIZER: _ND, Role.REVIEWER: _D, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.MEDIA_CORRECTIONS: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _D, Role.UPLOADER: _D},
    S.FINAL_REVIEW: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
    S.YOUTUBE_READY: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _D, Role.UPLOADER: _D},
    S.COMPLETED: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _D, Role.UPLOADER: _D},
    S.EN_REVISION: {Role.OPTIMIZER: _ND, Role.REVIEWER: _ND, Role.YOUTUBER: _ND, Role.UPLOADER: _ND},
}
