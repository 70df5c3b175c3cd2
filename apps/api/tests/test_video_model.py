import pytest
from pydantic import ValidationError

from workflow.errors import InvalidStatus
from workflow.models import Video, parse_video, same_user
from workflow.states import VideoStatus


def test_parse_video_accepts_camel_case_payload():
    video = parse_video(
        {
            "id": 12,
            "projectId": 3,
            "title": "Tutorial de acuarela",
            "status": "upload_review",
            "currentReviewerId": 9,
            "contentReviewComments": ["Buen ritmo"],
            "metadata": {
                "customStatus": "en_revision",
                "optimization": {"assignedTo": {"userId": 3, "username": "ana", "assignedAt": "2026-03-01T10:00:00Z"}},
                "roleView": {
                    "reviewer": {
                        "titleReview": {
                            "status": "rechazado",
                            "history": [{"status": "rechazado", "userId": 42, "username": "rev"}],
                        }
                    }
                },
            },
        }
    )

    assert video.status == VideoStatus.UPLOAD_REVIEW
    assert video.metadata.custom_status == "en_revision"
    assert video.metadata.assigned_optimizer_id == 3
    assert video.metadata.role_view.reviewer.title_review.history[0].user_id == 42
    assert video.content_review_comments == ["Buen ritmo"]


def test_parse_video_defaults():
    video = parse_video({"title": "Sin estado"})

    assert video.status == VideoStatus.PENDING
    assert video.metadata.custom_status is None
    assert video.metadata.assigned_optimizer_id is None
    assert video.metadata.last_approval_action is None


def test_unknown_status_raises_invalid_status():
    with pytest.raises(InvalidStatus) as exc_info:
        parse_video({"title": "x", "status": "review"})
    assert exc_info.value.status == "review"


def test_malformed_metadata_is_rejected_at_the_boundary():
    with pytest.raises(ValidationError):
        parse_video({"status": "pending", "metadata": {"secondaryStatus": {"type": "whatever"}}})


def test_dump_round_trips_aliases():
    video = Video(status=VideoStatus.PENDING, current_reviewer_id=5)
    payload = video.model_dump(mode="json", by_alias=True)

    assert payload["currentReviewerId"] == 5
    assert payload["status"] == "pending"


def test_same_user():
    assert same_user(42, "42")
    assert not same_user(None, None)
    assert not same_user(42, 43)


def test_null_metadata_and_comments_read_as_empty():
    video = parse_video(
        {
            "id": 1,
            "status": "pending",
            "metadata": None,
            "contentReviewComments": None,
            "mediaReviewComments": None,
        }
    )

    assert video.metadata.custom_status is None
    assert video.metadata.assigned_optimizer_id is None
    assert video.content_review_comments == []
    assert video.media_review_comments == []


@pytest.mark.parametrize("unclaimed", [0, "", None])
def test_falsy_reviewer_id_means_unclaimed(unclaimed):
    video = parse_video({"status": "optimize_review", "currentReviewerId": unclaimed})
    assert video.current_reviewer_id is None
