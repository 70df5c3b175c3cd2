"""
Health check endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from config import settings
from workflow.policy import DEFAULT_POLICY, find_policy_violations

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns overall system health status.
    """
    violations = find_policy_violations(DEFAULT_POLICY)
    return {
        "status": "healthy" if not violations else "degraded",
        "api": "up",
        "version": settings.APP_VERSION,
        "workflow_policy": "valid" if not violations else f"invalid: {len(violations)} violation(s)",
    }


@router.get("/health/ready")
async def readiness_check():
    """Kubernetes-style readiness probe."""
    violations = find_policy_violations(DEFAULT_POLICY)
    if violations:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "violations": violations},
        )
    return {"ready": True}


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}
