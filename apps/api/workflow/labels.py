"""Human-readable (Spanish UI) labels for raw and derived statuses."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from workflow.models import Video
from workflow.states import Role, coerce_role

LabelFn = Callable[[str, Optional[Video]], str]


def _reviewer_optimize_review(previous_status: str, video: Optional[Video]) -> str:
    if video is None:
        return "Disponible"
    if video.title_corrected:
        return "Corregido"
    if video.metadata.last_approval_action == "rejected":
        return "A Revisar"
    secondary = video.metadata.secondary_status
    if secondary is not None and secondary.type == "title_rejected":
        return "A Revisar"
    return "Disponible"


ROLE_LABELS: Dict[Role, Dict[str, Union[str, LabelFn]]] = {
    Role.OPTIMIZER: {
        "pending": "Disponible",
        "in_progress": "En Proceso",
        "optimize_review": "En Revisión",
        "title_corrections": "Con Correcciones",
        "completed": "Completado",
        "upload_review": "Completado",
        "media_corrections": "Completado",
        "youtube_ready": "Completado",
        "disponible": "Título Disponible",
        "en_proceso": "En Proceso",
        "en_revision": "En Revisión",
        "needs_attention": "Necesita Atención",
    },
    Role.REVIEWER: {
        "optimize_review": _reviewer_optimize_review,
        "title_corrections": "Correcciones de Título",
        "upload_review": "Rev. Archivos",
        "revisando_titulo": "Revisando Título",
        "en_revision": "En Revisión",
    },
    Role.YOUTUBER: {
        "video_disponible": "Video Disponible",
        "asignado": "Asignado",
        "youtube_ready": "Listo para YouTube",
    },
    Role.UPLOADER: {},
    Role.ADMIN: {},
}

DEFAULT_LABELS: Dict[str, str] = {
    "pending": "Pendiente",
    "in_progress": "En Proceso",
    "title_corrections": "Correcciones de Título",
    "optimize_review": "Rev. Optimización",
    "content_review": "Revisión de Contenido",
    "content_corrections": "En Corrección",
    "available": "Disponible",
    "upload_media": "Subiendo Media",
    "upload_review": "Rev. Archivos",
    "media_review": "Revisión de Medios",
    "media_corrections": "Correcciones de Archivos",
    "final_review": "Rev. Final",
    "youtube_ready": "Listo YouTube",
    "completed": "Completado",
    "en_revision": "En Revisión",
    "needs_attention": "Necesita Atención",
    "disponible": "Disponible",
    "no_disponible": "No Disponible",
    "en_proceso": "En Proceso",
    "asignado": "Asignado",
    "video_disponible": "Video Disponible",
    "revisando_titulo": "Revisando Título",
}


def get_status_label(
    status: Any,
    role: Any = None,
    previous_status: Optional[str] = None,
    video: Optional[Video] = None,
) -> str:
    """Role-specific label first, then the default label, then the status itself."""
    key = getattr(status, "value", status)
    key = str(key) if key is not None else ""

    if role:
        label = ROLE_LABELS.get(coerce_role(role), {}).get(key)
        if label:
            return label(previous_status or "", video) if callable(label) else label

    return DEFAULT_LABELS.get(key, key)
