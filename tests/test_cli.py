"""
Tests for the command-line entry point.
"""

import json
import os
import tempfile
from unittest.mock import patch

import pytest

import main


@pytest.fixture
def workspace():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


def run_cli(workspace, *args):
    argv = [
        "--registry-path", os.path.join(workspace, "data", "responses.json"),
        "--data-root", os.path.join(workspace, "data"),
        "--output-dir", os.path.join(workspace, "output"),
        *args
    ]
    with patch("main.setup_logging"):
        return main.main(argv)


def submit_answers(workspace, answers, capsys):
    answers_path = os.path.join(workspace, "answers.json")
    with open(answers_path, "w") as f:
        json.dump(answers, f)

    assert run_cli(workspace, "submit", "--form", "onboarding", "--answers", answers_path) == 0
    return json.loads(capsys.readouterr().out)


def test_analyze_command(workspace, capsys):
    exit_code = run_cli(workspace, "analyze", "--text", "Support was terrible, fix this immediately")
    output = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert output["sentimentAnalysis"]["sentiment"] == "negative"
    assert output["categorization"]["urgency"] == "critical"


def test_submit_and_insights(workspace, capsys):
    record = submit_answers(workspace, {"q1": "The new layout is excellent", "q2": 9}, capsys)

    assert record["form_id"] == "onboarding"
    assert record["sentiment"] == "positive"

    exit_code = run_cli(
        workspace, "insights", "--form", "onboarding", "--date", "2024-06-01", "--export"
    )
    output = capsys.readouterr().out

    assert exit_code == 0
    assert '"totalResponses": 1' in output
    assert os.path.exists(os.path.join(workspace, "output", "insights_onboarding.csv"))
    assert os.path.exists(
        os.path.join(workspace, "data", "insights", "onboarding", "2024-06-01.json")
    )


def test_update_hide_excludes_from_insights(workspace, capsys):
    record = submit_answers(workspace, {"q1": "Checkout keeps failing on mobile"}, capsys)

    exit_code = run_cli(workspace, "update", "--id", record["id"], "--hide", "--expected-version", "1")
    assert exit_code == 0
    assert "updated to version 2" in capsys.readouterr().out

    run_cli(workspace, "insights", "--form", "onboarding", "--date", "2024-06-01")
    output = capsys.readouterr().out
    snapshot = json.loads(output)

    assert snapshot["totalResponses"] == 0


def test_update_rejected(workspace, capsys):
    record = submit_answers(workspace, {"q1": "Checkout keeps failing on mobile"}, capsys)

    exit_code = run_cli(workspace, "update", "--id", record["id"], "--rating", "12")
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "Validation failed" in output
    assert "Rating must not exceed 10" in output


def test_delete_command(workspace, capsys):
    record = submit_answers(workspace, {"q1": "Checkout keeps failing on mobile"}, capsys)

    assert run_cli(workspace, "delete", "--id", record["id"]) == 0
    assert run_cli(workspace, "delete", "--id", record["id"]) == 1
    assert "not found or already deleted" in capsys.readouterr().out


def test_submit_rejects_non_object_answers(workspace, capsys):
    answers_path = os.path.join(workspace, "answers.json")
    with open(answers_path, "w") as f:
        json.dump(["not", "an", "object"], f)

    exit_code = run_cli(workspace, "submit", "--form", "onboarding", "--answers", answers_path)

    assert exit_code == 1
    assert "Answers file must contain a JSON object" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
