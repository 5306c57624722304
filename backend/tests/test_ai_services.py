from pathlib import Path
import json
import sys

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerpath.services import ai
from careerpath.services import learning_resources as lr


REQUEST_DATA = {
    "professionalLevel": "Mid-Level",
    "currentSkills": "Excel, SQL",
    "educationalBackground": "BA Economics",
    "careerHistory": "Analyst at Initech",
    "desiredRole": "Data Scientist",
    "state": "Ontario",
    "country": "Canada",
}


class DummyDB:
    def __init__(self):
        self.added = []

    def add(self, entry):
        self.added.append(entry)

    def commit(self):
        return None

    def rollback(self):
        return None


def _configure_ai(monkeypatch, enabled: bool = True):
    monkeypatch.setattr(ai.settings, "ai_enabled", enabled)
    monkeypatch.setattr(ai.settings, "llm_provider", "openai")
    monkeypatch.setattr(ai.settings, "openai_api_key", "sk-test" if enabled else None)


def test_safe_json_extracts_object_from_surrounding_text():
    assert ai._safe_json('Here you go: {"a": 1} thanks') == {"a": 1}
    assert ai._safe_json("[1, 2]") is None
    assert ai._safe_json("nothing here") is None


def test_unknown_provider_falls_back_to_openai(monkeypatch):
    monkeypatch.setattr(ai.settings, "llm_provider", "mystery")

    assert ai.get_active_ai_provider() == "openai"


def test_analysis_uses_sample_report_when_ai_is_not_configured(monkeypatch):
    _configure_ai(monkeypatch, enabled=False)
    monkeypatch.setattr(ai.settings, "ai_fallback_to_sample", True)

    report, source = ai.generate_career_analysis(REQUEST_DATA)

    assert source == "sample"
    assert report["executiveSummary"]["careerGoal"] == "Data Scientist"


def test_analysis_without_ai_or_fallback_raises(monkeypatch):
    _configure_ai(monkeypatch, enabled=False)
    monkeypatch.setattr(ai.settings, "ai_fallback_to_sample", False)

    with pytest.raises(RuntimeError, match="not configured"):
        ai.generate_career_analysis(REQUEST_DATA)


def test_analysis_structures_partial_model_output_and_audits(monkeypatch):
    _configure_ai(monkeypatch)
    partial = {"executiveSummary": {"summary": "Good fit", "fitScore": {"score": "8"}}, "quickTips": "n/a"}
    monkeypatch.setattr(ai, "_call_llm", lambda *_args, **_kwargs: json.dumps(partial))
    db = DummyDB()

    report, source = ai.generate_career_analysis(REQUEST_DATA, db=db, user_id="user-1")

    assert source == "ai"
    assert report["executiveSummary"]["fitScore"] == {"score": 8, "outOf": 10, "description": ""}
    assert report["quickTips"]["quickWins"] == []
    assert db.added[0].feature == "career_analysis"
    assert db.added[0].user_id == "user-1"


def test_non_json_model_output_is_a_runtime_error(monkeypatch):
    _configure_ai(monkeypatch)
    monkeypatch.setattr(ai, "_call_llm", lambda *_args, **_kwargs: "I cannot help with that")

    with pytest.raises(RuntimeError, match="not a JSON object"):
        ai.generate_career_analysis(REQUEST_DATA)


def test_recommendations_fill_missing_resource_fields(monkeypatch):
    monkeypatch.setattr(
        lr,
        "call_json_llm",
        lambda *_args, **_kwargs: {"SQL": [{"title": "SQLBolt"}, None], "Python": "unexpected"},
    )

    result = lr.get_resource_recommendations(
        [{"skill": "SQL", "currentLevel": "beginner", "targetLevel": "advanced", "context": "Reporting work"}]
    )

    first, placeholder = result["SQL"]
    assert first["title"] == "SQLBolt"
    assert first["id"].startswith("resource-")
    assert first["type"] == "article"
    assert first["provider"] == "Unknown"
    assert first["url"] == "N/A"
    assert first["estimatedHours"] == 10
    assert first["relevanceScore"] == 7
    assert first["matchReason"] == "Recommended for learning SQL"
    assert placeholder["title"] == "Resource unavailable"
    assert result["Python"] == []


def test_recommendation_failure_is_wrapped(monkeypatch):
    def boom(*_args, **_kwargs):
        raise RuntimeError("LLM API error (500): down")

    monkeypatch.setattr(lr, "call_json_llm", boom)

    with pytest.raises(RuntimeError, match="^Failed to get learning resources: LLM API error"):
        lr.get_resource_recommendations(
            [{"skill": "SQL", "currentLevel": 1, "targetLevel": 3, "context": "Reporting work"}]
        )


def test_learning_path_defaults(monkeypatch):
    monkeypatch.setattr(
        lr,
        "call_json_llm",
        lambda *_args, **_kwargs: {"recommendedSequence": [{"resources": [{"title": "Docs"}, "bad"]}, "skip"]},
    )

    path = lr.generate_learning_path("Docker", "beginner", "intermediate", "Ship services at work")

    assert path["skill"] == "Docker"
    assert path["description"] == "Learning path for Docker"
    assert len(path["recommendedSequence"]) == 1
    step = path["recommendedSequence"][0]
    assert step["step"] == 1
    assert step["resources"][0]["id"].startswith("resource-")
    assert step["resources"][1]["matchReason"] == "Added as fallback"


@pytest.mark.parametrize(
    "reply",
    [
        httpx.Response(200, json={"error": "overloaded"}),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json=["unexpected"]),
        httpx.Response(200, text="<html>gateway</html>"),
    ],
)
def test_malformed_provider_reply_is_a_runtime_error(monkeypatch, reply):
    _configure_ai(monkeypatch)
    transport = httpx.MockTransport(lambda request: reply)
    real_client = httpx.Client
    monkeypatch.setattr(ai.httpx, "Client", lambda **kwargs: real_client(transport=transport, **kwargs))

    with pytest.raises(RuntimeError, match="^Malformed response from openai$"):
        ai._call_llm("system", "{}")
