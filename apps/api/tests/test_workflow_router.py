import pytest


@pytest.mark.asyncio
async def test_health_reports_valid_policy(api_client):
    response = await api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["workflow_policy"] == "valid"

    ready = await api_client.get("/health/ready")
    assert ready.json() == {"ready": True}


@pytest.mark.asyncio
async def test_policy_dump(api_client):
    response = await api_client.get("/workflow/policy")
    assert response.status_code == 200
    payload = response.json()

    assert payload["initial_status"] == "pending"
    assert payload["transitions"]["reviewer"]["pending"] == []
    assert payload["auto_transitions"]["optimizer"]["pending"] == "in_progress"
    assert payload["unassign"]["fallback"] == "available"


@pytest.mark.asyncio
async def test_status_listing(api_client):
    response = await api_client.get("/workflow/statuses")
    statuses = {row["status"]: row for row in response.json()["statuses"]}

    assert statuses["pending"]["previous"] is None
    assert statuses["completed"]["terminal"] is True
    assert statuses["upload_media"]["previous"] == "media_review"


@pytest.mark.asyncio
async def test_missing_actor_headers_is_401(api_client):
    response = await api_client.post("/workflow/can-transition", json={"current_status": "pending"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_legacy_role_is_422(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/can-transition",
        json={"current_status": "content_review"},
        headers=actor_headers("content_reviewer", 5),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_can_transition_endpoint(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/can-transition",
        json={"current_status": "pending", "requested_status": "in_progress"},
        headers=actor_headers("reviewer", 5),
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["allowed"] is False
    assert payload["allowed_transitions"] == []

    response = await api_client.post(
        "/workflow/can-transition",
        json={"current_status": "media_corrections"},
        headers=actor_headers("youtuber", 9),
    )
    payload = response.json()
    assert payload["allowed"] is True
    assert payload["allowed_transitions"] == ["media_review"]
    assert payload["can_unassign"] is True
    assert payload["unassign_target"] == "media_review"


@pytest.mark.asyncio
async def test_unknown_status_is_422(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/can-transition",
        json={"current_status": "published"},
        headers=actor_headers("admin", 1),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_auto_advance_endpoint(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/auto-advance",
        json={"current_status": "pending"},
        headers=actor_headers("optimizer", 3),
    )
    assert response.json()["next_status"] == "in_progress"


@pytest.mark.asyncio
async def test_effective_status_endpoint(api_client, actor_headers):
    video = {"id": 10, "status": "optimize_review", "currentReviewerId": 42}

    mine = await api_client.post(
        "/workflow/effective-status",
        json={"video": video},
        headers=actor_headers("reviewer", 42),
    )
    other = await api_client.post(
        "/workflow/effective-status",
        json={"video": video},
        headers=actor_headers("reviewer", 7),
    )

    assert mine.json()["effective_status"] == "revisando_titulo"
    assert mine.json()["label"] == "Revisando Título"
    assert other.json()["effective_status"] == "en_revision"
    assert other.json()["visible"] is True


@pytest.mark.asyncio
async def test_label_endpoint(api_client):
    response = await api_client.post(
        "/workflow/label",
        json={"status": "optimize_review", "role": "reviewer", "video": {"status": "optimize_review", "titleCorrected": True}},
    )
    assert response.json()["label"] == "Corregido"


@pytest.mark.asyncio
async def test_claim_then_conflict(api_client, actor_headers):
    claimed = await api_client.post(
        "/workflow/videos/claim",
        json={"video": {"id": 20, "status": "pending"}},
        headers=actor_headers("optimizer", 3, "ana"),
    )
    assert claimed.status_code == 200
    body = claimed.json()
    assert body["previous_status"] == "pending"
    assert body["video"]["status"] == "in_progress"
    assert body["video"]["metadata"]["optimization"]["assignedTo"]["username"] == "ana"

    conflict = await api_client.post(
        "/workflow/videos/claim",
        json={"video": body["video"]},
        headers=actor_headers("optimizer", 4),
    )
    assert conflict.status_code == 409


@pytest.mark.asyncio
async def test_denied_transition_is_403(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/videos/transition",
        json={"video": {"id": 21, "status": "pending"}, "requested_status": "completed"},
        headers=actor_headers("uploader", 2),
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_revert_and_unassign_endpoints(api_client, actor_headers):
    reverted = await api_client.post(
        "/workflow/videos/revert",
        json={"video": {"id": 22, "status": "optimize_review"}},
        headers=actor_headers("optimizer", 3),
    )
    assert reverted.json()["video"]["status"] == "in_progress"

    released = await api_client.post(
        "/workflow/videos/unassign",
        json={"video": {"id": 23, "status": "upload_media", "currentReviewerId": 9}},
        headers=actor_headers("youtuber", 9),
    )
    assert released.json()["video"]["status"] == "media_review"
    assert released.json()["video"]["currentReviewerId"] is None


@pytest.mark.asyncio
async def test_queue_endpoint_filters_by_role(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/queue",
        json={
            "videos": [
                {"id": 1, "status": "upload_review", "currentReviewerId": 9},
                {"id": 2, "status": "upload_media"},
                {"id": 3, "status": "pending"},
            ]
        },
        headers=actor_headers("youtuber", 9),
    )
    payload = response.json()

    assert payload["count"] == 2
    assert [item["effective_status"] for item in payload["items"]] == ["asignado", "disponible"]


@pytest.mark.asyncio
async def test_null_metadata_is_accepted(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/effective-status",
        json={"video": {"id": 30, "status": "pending", "metadata": None, "contentReviewComments": None}},
        headers=actor_headers("optimizer", 3),
    )
    assert response.status_code == 200
    assert response.json()["effective_status"] == "disponible"


@pytest.mark.asyncio
async def test_malformed_video_is_422(api_client, actor_headers):
    response = await api_client.post(
        "/workflow/effective-status",
        json={"video": {"id": 31, "status": "pending", "metadata": {"secondaryStatus": {"type": "whatever"}}}},
        headers=actor_headers("optimizer", 3),
    )
    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"][:2] == ["metadata", "secondaryStatus"]

    response = await api_client.post(
        "/workflow/videos/claim",
        json={"video": {"id": 32, "status": "pending", "metadata": {"optimization": {"approvalHistory": [{"action": "maybe"}]}}}},
        headers=actor_headers("optimizer", 3),
    )
    assert response.status_code == 422
