from pathlib import Path
import sys

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).resolve().parents[1]))

from careerpath.api.routes import meta
from careerpath.main import app


def test_meta_health_endpoint_shape(monkeypatch):
    engine = create_engine("sqlite://", poolclass=StaticPool)
    monkeypatch.setattr(meta, "engine", engine)
    client = TestClient(app)

    response = client.get("/meta/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["ok"] is True
    assert payload["database"] == {"ok": True, "error": None}
    assert "ai" in payload
    assert "fallback_to_sample" in payload["ai"]


def test_meta_ai_reports_provider(monkeypatch):
    monkeypatch.setattr(meta.settings, "llm_provider", "groq")
    monkeypatch.setattr(meta.settings, "groq_api_key", None)
    client = TestClient(app)

    payload = client.get("/api/meta/ai").json()

    assert payload["provider"] == "groq"
    assert payload["ai_enabled"] is False
