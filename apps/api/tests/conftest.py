import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from main import app
from workflow.models import Video


@pytest.fixture
def actor_headers():
    def _headers(role: str, user_id, username: str = "") -> dict:
        headers = {"X-Actor-Id": str(user_id), "X-Actor-Role": role}
        if username:
            headers["X-Actor-Username"] = username
        return headers

    return _headers


@pytest.fixture
def make_video():
    """Build a validated video snapshot from camelCase overrides."""

    def _make(status: str = "pending", **overrides) -> Video:
        payload = {"id": 1, "title": "Receta de pan casero", "status": status}
        payload.update(overrides)
        return Video.model_validate(payload)

    return _make


@pytest_asyncio.fixture
async def api_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
