"""Actor resolution for workflow requests.

Authentication happens upstream; the gateway forwards the authenticated user
id and role in headers.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException

from workflow.errors import InvalidRole
from workflow.states import Role, parse_role


@dataclass
class ActorContext:
    user_id: str
    role: Role
    username: Optional[str] = None


async def get_actor_context(
    x_actor_id: Optional[str] = Header(default=None),
    x_actor_role: Optional[str] = Header(default=None),
    x_actor_username: Optional[str] = Header(default=None),
) -> ActorContext:
    """Resolve the acting user from X-Actor-* headers."""
    if not x_actor_id or not x_actor_role:
        raise HTTPException(status_code=401, detail="Missing X-Actor-Id / X-Actor-Role headers.")

    try:
        role = parse_role(x_actor_role)
    except InvalidRole as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return ActorContext(
        user_id=x_actor_id.strip(),
        role=role,
        username=(x_actor_username or "").strip() or None,
    )
