"""Workflow router: stateless decisions over video snapshots."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from routers.actor_scope import ActorContext, get_actor_context
from services.video_workflow import claim_video, revert_video, transition_video, unassign_video
from services.work_queue import build_work_queue, work_queue_statuses
from workflow.authorizer import allowed_transitions, can_transition
from workflow.effective import can_view_video, effective_assignment, effective_status
from workflow.errors import AlreadyClaimed, InvalidRole, InvalidStatus, Unauthorized, WorkflowError
from workflow.labels import get_status_label
from workflow.models import Video, parse_video
from workflow.policy import DEFAULT_POLICY, describe_policy
from workflow.resolver import auto_advance
from workflow.reversion import can_revert, can_unassign, revert_target, unassign_target
from workflow.states import ALL_STATUSES, parse_status

router = APIRouter()
logger = logging.getLogger(__name__)


class StatusCheckRequest(BaseModel):
    current_status: str
    requested_status: Optional[str] = None


class VideoRequest(BaseModel):
    video: Dict[str, Any]


class TransitionRequest(VideoRequest):
    requested_status: Optional[str] = None
    comments: Optional[str] = None


class LabelRequest(BaseModel):
    status: str
    role: Optional[str] = None
    previous_status: Optional[str] = None
    video: Optional[Dict[str, Any]] = None


class QueueRequest(BaseModel):
    videos: List[Dict[str, Any]] = Field(default_factory=list)


def _http_error(exc: WorkflowError) -> HTTPException:
    if isinstance(exc, InvalidStatus):
        logger.error("workflow_invalid_status status=%r", exc.status)
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, InvalidRole):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, Unauthorized):
        return HTTPException(status_code=403, detail="No tienes permiso para realizar esta transición de estado")
    if isinstance(exc, AlreadyClaimed):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _load_video(payload: Dict[str, Any]) -> Video:
    try:
        return parse_video(payload)
    except InvalidStatus as exc:
        raise _http_error(exc) from exc
    except ValidationError as exc:
        logger.info("workflow_invalid_video errors=%d", exc.error_count())
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc


def _dump(video: Video) -> Dict[str, Any]:
    return video.model_dump(mode="json", by_alias=True)


@router.get("/policy")
async def get_policy():
    return describe_policy(DEFAULT_POLICY)


def _status_row(graph, status) -> Dict[str, Any]:
    previous = graph.previous_of(status)
    return {
        "status": status.value,
        "label": get_status_label(status),
        "previous": previous.value if previous is not None else None,
        "terminal": graph.is_terminal(status),
    }


@router.get("/statuses")
async def list_statuses():
    graph = DEFAULT_POLICY.graph
    return {
        "initial_status": graph.initial_status().value,
        "statuses": [_status_row(graph, status) for status in ALL_STATUSES],
    }


@router.get("/queue/statuses")
async def get_queue_statuses(actor: ActorContext = Depends(get_actor_context)):
    return {
        "role": actor.role.value,
        "statuses": sorted(status.value for status in work_queue_statuses(actor.role)),
    }


@router.post("/can-transition")
async def check_transition(
    request: StatusCheckRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    try:
        allowed = can_transition(actor.role, request.current_status, request.requested_status)
        options = allowed_transitions(actor.role, request.current_status)
        can_revert_now = can_revert(actor.role, request.current_status)
        can_unassign_now = can_unassign(actor.role, request.current_status)
        revert_to = revert_target(request.current_status)
        unassign_to = unassign_target(request.current_status)
    except WorkflowError as exc:
        raise _http_error(exc) from exc

    return {
        "role": actor.role.value,
        "current_status": parse_status(request.current_status).value,
        "requested_status": request.requested_status,
        "allowed": allowed,
        "allowed_transitions": sorted(status.value for status in options),
        "can_revert": can_revert_now,
        "revert_target": revert_to.value if revert_to is not None else None,
        "can_unassign": can_unassign_now,
        "unassign_target": unassign_to.value,
    }


@router.post("/auto-advance")
async def check_auto_advance(
    request: StatusCheckRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    try:
        target = auto_advance(actor.role, request.current_status)
    except WorkflowError as exc:
        raise _http_error(exc) from exc
    return {
        "role": actor.role.value,
        "current_status": request.current_status,
        "next_status": target.value if target is not None else None,
    }


@router.post("/effective-status")
async def get_effective_status(
    request: VideoRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    video = _load_video(request.video)
    display = effective_status(video, actor.role, actor.user_id)
    return {
        "video_id": video.id,
        "status": video.status.value,
        "effective_status": display,
        "label": get_status_label(display, actor.role, video=video),
        "visible": can_view_video(video, actor.role, actor.user_id),
        "assignment": effective_assignment(
            video,
            actor.role,
            actor.user_id,
            current_username=actor.username,
        ),
    }


@router.post("/label")
async def get_label(request: LabelRequest):
    video = _load_video(request.video) if request.video is not None else None
    return {
        "status": request.status,
        "label": get_status_label(request.status, request.role, request.previous_status, video),
    }


@router.post("/queue")
async def get_work_queue(
    request: QueueRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    videos = [_load_video(payload) for payload in request.videos]
    items = build_work_queue(videos, actor.role, actor.user_id, username=actor.username)
    return {"role": actor.role.value, "count": len(items), "items": items}


@router.post("/videos/transition")
async def post_transition(
    request: TransitionRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    video = _load_video(request.video)
    try:
        updated = transition_video(
            video,
            role=actor.role,
            user_id=actor.user_id,
            requested_status=request.requested_status,
            comments=request.comments,
        )
    except WorkflowError as exc:
        raise _http_error(exc) from exc
    return {"previous_status": video.status.value, "video": _dump(updated)}


@router.post("/videos/claim")
async def post_claim(
    request: VideoRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    video = _load_video(request.video)
    try:
        updated = claim_video(
            video,
            role=actor.role,
            user_id=actor.user_id,
            username=actor.username or "",
        )
    except WorkflowError as exc:
        raise _http_error(exc) from exc
    return {"previous_status": video.status.value, "video": _dump(updated)}


@router.post("/videos/revert")
async def post_revert(
    request: VideoRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    video = _load_video(request.video)
    try:
        updated = revert_video(video, role=actor.role, user_id=actor.user_id)
    except WorkflowError as exc:
        raise _http_error(exc) from exc
    return {"previous_status": video.status.value, "video": _dump(updated)}


@router.post("/videos/unassign")
async def post_unassign(
    request: VideoRequest,
    actor: ActorContext = Depends(get_actor_context),
):
    video = _load_video(request.video)
    try:
        updated = unassign_video(video, role=actor.role, user_id=actor.user_id)
    except WorkflowError as exc:
        raise _http_error(exc) from exc
    return {"previous_status": video.status.value, "video": _dump(updated)}
