"""
Unit tests for the Response Registry.
Covers registration, updates with audit trail, deletion and persistence.
"""

import json
import os
import tempfile
import uuid

import pytest

from feedbackpulse.models.response import FeedbackUpdate, FormResponse
from feedbackpulse.registry import (
    FeedbackValidationError,
    ResponseRegistry,
    VersionConflictError,
)


@pytest.fixture
def tmpdir_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def registry(tmpdir_path):
    return ResponseRegistry(os.path.join(tmpdir_path, "responses.json"))


def make_response(form_id="form-1", comment="The checkout is slow", sentiment="negative", **kwargs):
    metadata = kwargs.pop("metadata", {"urgency": "medium", "categories": ["Performance"]})
    return FormResponse(
        form_id=form_id,
        comment=comment,
        sentiment=sentiment,
        metadata=metadata,
        **kwargs
    )


def test_registry_initialization(registry):
    assert len(registry.responses) == 0
    assert registry.version == "1.0.0"


def test_add_and_get_response(registry):
    response = make_response()
    response_id = registry.add_response(response)

    assert response_id == response.response_id
    assert registry.get_response(response_id) is response
    assert registry.get_response(str(uuid.uuid4())) is None


def test_duplicate_response_rejected(registry):
    response = make_response()
    registry.add_response(response)

    with pytest.raises(ValueError, match="already exists"):
        registry.add_response(response)


def test_list_responses_filters_and_orders(registry):
    late = make_response(submitted_at="2024-06-03T00:00:00Z")
    early = make_response(submitted_at="2024-06-01T00:00:00Z")
    other_form = make_response(form_id="form-2", submitted_at="2024-06-02T00:00:00Z")
    hidden = make_response(
        submitted_at="2024-06-02T00:00:00Z",
        metadata={"isVisible": False}
    )
    for r in (late, early, other_form, hidden):
        registry.add_response(r)

    assert registry.list_responses(form_id="form-1") == [early, late]
    assert registry.list_responses(form_id="form-1", include_hidden=True) == [early, hidden, late]
    assert len(registry.list_responses()) == 3


def test_save_and_load(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "data", "responses.json")
    registry = ResponseRegistry(registry_path)
    response = make_response(answers={"q1": "The checkout is slow", "q2": 4})
    registry.add_response(response)
    registry.save()

    with open(registry_path) as f:
        data = json.load(f)
    assert data["version"] == "1.0.0"
    assert data["responses"][0]["id"] == response.response_id

    reloaded = ResponseRegistry(registry_path)
    restored = reloaded.get_response(response.response_id)

    assert restored.to_dict() == response.to_dict()


def test_load_plain_list(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    response = make_response()
    with open(registry_path, "w") as f:
        json.dump([response.to_dict()], f)

    registry = ResponseRegistry(registry_path)

    assert response.response_id in registry.responses


def test_backup_created_on_save(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    registry = ResponseRegistry(registry_path)
    registry.add_response(make_response())
    registry.save()

    assert not os.path.exists(f"{registry_path}.backup")

    registry.add_response(make_response())
    registry.save()

    assert os.path.exists(f"{registry_path}.backup")
    assert not os.path.exists(f"{registry_path}.tmp")


def test_corrupted_registry_restored_from_backup(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    registry = ResponseRegistry(registry_path)
    first = make_response()
    registry.add_response(first)
    registry.save()
    registry.add_response(make_response())
    registry.save()

    with open(registry_path, "w") as f:
        f.write("{ not json")

    restored = ResponseRegistry(registry_path)

    assert list(restored.responses) == [first.response_id]
    with open(registry_path) as f:
        assert json.load(f)["responses"][0]["id"] == first.response_id


def test_corrupted_registry_without_backup(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    with open(registry_path, "w") as f:
        f.write("garbage")

    registry = ResponseRegistry(registry_path)

    assert registry.responses == {}


@pytest.mark.parametrize("payload", [
    None,
    "text",
    [1],
    {"responses": None},
    {"responses": "text"},
])
def test_wrong_shape_registry_starts_empty(tmpdir_path, payload):
    """Valid JSON that is not a list of records is treated as corrupt."""
    registry_path = os.path.join(tmpdir_path, "responses.json")
    with open(registry_path, "w") as f:
        json.dump(payload, f)

    registry = ResponseRegistry(registry_path)

    assert registry.responses == {}


def test_wrong_shape_registry_restored_from_backup(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    response = make_response()
    with open(f"{registry_path}.backup", "w") as f:
        json.dump({"responses": [response.to_dict()]}, f)
    with open(registry_path, "w") as f:
        json.dump({"responses": None}, f)

    registry = ResponseRegistry(registry_path)

    assert list(registry.responses) == [response.response_id]


def test_null_metadata_record_is_listed(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    record = {"id": str(uuid.uuid4()), "form_id": "f", "answers": None, "metadata": None}
    with open(registry_path, "w") as f:
        json.dump([record], f)

    registry = ResponseRegistry(registry_path)
    listed = registry.list_responses("f")

    assert len(listed) == 1
    assert listed[0].metadata == {}
    assert listed[0].answers == {}
    assert listed[0].is_visible is True
    assert listed[0].urgency == "low"
    assert listed[0].categories == []
    assert listed[0].analysis is None
    assert listed[0].categorization is None


def test_stored_analysis_is_readable(tmpdir_path):
    registry_path = os.path.join(tmpdir_path, "responses.json")
    registry = ResponseRegistry(registry_path)
    response = make_response(metadata={
        "sentimentAnalysis": {
            "sentiment": "negative",
            "confidence": 0.75,
            "categories": ["Performance"],
            "keywords": ["checkout", "slow"],
            "emotions": {"anger": 0.3}
        },
        "categorization": {
            "primaryCategory": "Performance",
            "secondaryCategories": [],
            "urgency": "medium",
            "actionRequired": True,
            "suggestedActions": ["Forward to engineering team"]
        }
    })
    registry.add_response(response)
    registry.save()

    restored = ResponseRegistry(registry_path).get_response(response.response_id)

    assert restored.analysis.sentiment == "negative"
    assert restored.analysis.confidence == 0.75
    assert restored.analysis.keywords == ["checkout", "slow"]
    assert restored.analysis.emotions.anger == 0.3
    assert restored.analysis.emotions.joy == 0.0
    assert restored.categorization.primary_category == "Performance"
    assert restored.categorization.action_required is True
    assert restored.categorization.suggested_actions == ["Forward to engineering team"]


def test_update_fields_and_version(registry):
    response = make_response()
    registry.add_response(response)

    update = FeedbackUpdate(
        response_id=response.response_id,
        urgency="critical",
        categories=["Performance", "Bug Report"],
        notes="Escalated to on-call",
        rating=3,
        is_visible=False
    )
    updated = registry.update_response(update, expected_version=1, modified_by="admin")

    assert updated.version == 2
    assert updated.urgency == "critical"
    assert updated.categories == ["Performance", "Bug Report"]
    assert updated.metadata["notes"] == "Escalated to on-call"
    assert updated.overall_rating == 3
    assert updated.is_visible is False
    assert updated.metadata["modifiedBy"] == "admin"
    assert updated.metadata["lastModified"].endswith("Z")


def test_update_records_history(registry):
    response = make_response()
    registry.add_response(response)

    registry.update_response(FeedbackUpdate(response_id=response.response_id, urgency="high"))
    history = response.metadata["modificationHistory"]

    assert len(history) == 1
    assert history[0]["userId"] == "system"
    assert history[0]["changes"] == {"urgency": {"from": "medium", "to": "high"}}


def test_history_is_capped(tmpdir_path):
    registry = ResponseRegistry(os.path.join(tmpdir_path, "responses.json"), history_limit=3)
    response = make_response()
    registry.add_response(response)

    for notes in ["one", "two", "three", "four", "five"]:
        registry.update_response(FeedbackUpdate(response_id=response.response_id, notes=notes))

    history = response.metadata["modificationHistory"]
    assert len(history) == 3
    assert [h["changes"]["notes"]["to"] for h in history] == ["three", "four", "five"]
    assert response.version == 6


def test_comment_change_is_reanalyzed(registry):
    response = make_response(comment="The checkout is slow", sentiment="negative")
    registry.add_response(response)

    registry.update_response(FeedbackUpdate(
        response_id=response.response_id,
        comment="Excellent and amazing service now"
    ))

    assert response.comment == "Excellent and amazing service now"
    assert response.sentiment == "positive"
    assert response.metadata["sentimentAnalysis"]["sentiment"] == "positive"


def test_empty_comment_is_not_recorded(registry):
    """An empty comment leaves the stored comment and the history untouched."""
    response = make_response(comment="The checkout is slow")
    registry.add_response(response)

    registry.update_response(FeedbackUpdate(
        response_id=response.response_id,
        comment="",
        notes="checked"
    ))

    assert response.comment == "The checkout is slow"
    assert response.metadata["modificationHistory"][0]["changes"] == {
        "notes": {"from": None, "to": "checked"}
    }


def test_explicit_sentiment_wins_over_reanalysis(registry):
    response = make_response()
    registry.add_response(response)

    registry.update_response(FeedbackUpdate(
        response_id=response.response_id,
        comment="Excellent and amazing service now",
        sentiment="neutral"
    ))

    assert response.sentiment == "neutral"
    assert response.metadata["sentimentAnalysis"]["sentiment"] == "positive"


def test_version_conflict(registry):
    response = make_response()
    registry.add_response(response)
    registry.update_response(FeedbackUpdate(response_id=response.response_id, notes="first"))

    with pytest.raises(VersionConflictError):
        registry.update_response(
            FeedbackUpdate(response_id=response.response_id, notes="stale"),
            expected_version=1
        )

    assert response.metadata["notes"] == "first"
    assert response.version == 2


def test_update_validation_failure(registry):
    response = make_response()
    registry.add_response(response)

    with pytest.raises(FeedbackValidationError) as exc_info:
        registry.update_response(FeedbackUpdate(
            response_id=response.response_id,
            rating=11,
            urgency="whenever"
        ))

    assert "Invalid urgency value" in exc_info.value.errors
    assert response.version == 1


def test_update_missing_response(registry):
    with pytest.raises(ValueError, match="Response not found"):
        registry.update_response(FeedbackUpdate(response_id=str(uuid.uuid4()), notes="x"))


def test_apply_update_reports_outcome(registry):
    response = make_response()
    registry.add_response(response)

    ok = registry.apply_update(FeedbackUpdate(response_id=response.response_id, notes="ok"))
    invalid = registry.apply_update(FeedbackUpdate(response_id="not-a-uuid"))
    conflict = registry.apply_update(
        FeedbackUpdate(response_id=response.response_id, notes="late"),
        expected_version=1
    )

    assert ok.success is True
    assert ok.version == 2
    assert ok.data["metadata"]["notes"] == "ok"

    assert invalid.success is False
    assert invalid.error == "Validation failed"
    assert invalid.validation_errors == ["Invalid feedback ID format"]

    assert conflict.success is False
    assert "modified by another user" in conflict.error


def test_batch_update(registry):
    first = make_response()
    second = make_response()
    registry.add_response(first)
    registry.add_response(second)

    all_ok, results, summary = registry.batch_update([
        FeedbackUpdate(response_id=first.response_id, urgency="low"),
        FeedbackUpdate(response_id=second.response_id, sentiment="furious"),
        FeedbackUpdate(response_id=str(uuid.uuid4()), notes="missing"),
    ])

    assert all_ok is False
    assert [r.success for r in results] == [True, False, False]
    assert summary == {"successful": 1, "failed": 2}
    assert first.version == 2
    assert second.version == 1


def test_delete_response(registry):
    response = make_response()
    registry.add_response(response)

    registry.delete_response(response.response_id)

    assert registry.get_response(response.response_id) is None
    with pytest.raises(ValueError, match="not found or already deleted"):
        registry.delete_response(response.response_id)


def test_delete_invalid_id(registry):
    with pytest.raises(ValueError, match="Invalid feedback ID format"):
        registry.delete_response("12345")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
