"""
Tests for the HTTP surface.

Run with: python -m pytest tests/test_api.py -v
"""

import random
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from fakes import make_client, server_error_handler


@pytest.fixture
def client(monkeypatch):
    """App wired to local-only services so no request leaves the process."""
    from main import app
    from reflect.services import analysis_service, reframing_service
    from reflect.utils.reflection_generator import ReflectionGenerator

    offline = make_client(server_error_handler, api_key="")
    monkeypatch.setattr(
        analysis_service,
        "_analysis_service",
        analysis_service.AnalysisService(client=offline, reflection_generator=ReflectionGenerator(rng=random.Random(0))),
    )
    monkeypatch.setattr(
        reframing_service,
        "_reframing_service",
        reframing_service.ReframingService(client=offline, rng=random.Random(0)),
    )
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert isinstance(response.json()["ai_configured"], bool)


class TestAnalysisRoutes:
    def test_analyze_uses_camel_case(self, client):
        response = client.post(
            "/api/analysis/analyze",
            json={
                "text": "I always fail at everything and it's a complete disaster",
                "toolkit": [{"emotion": "Anxiety", "actions": ["Call mom"]}],
                "aiEnabled": True,
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["emotion"]["emotion"] == "neutral"
        assert body["suggestedEmoji"] == "😐"
        assert body["distortions"][0]["type"] == "Catastrophizing"
        assert "userQuotes" in body["distortions"][0]
        assert "reframingPrompt" in body["distortions"][0]
        assert body["reflection"]

    def test_analyze_ai_disabled(self, client):
        response = client.post(
            "/api/analysis/analyze",
            json={"text": "I always fail at everything and it's a complete disaster", "aiEnabled": False},
        )

        assert response.status_code == 200
        assert response.json()["distortions"] == []

    def test_empty_text_rejected(self, client):
        response = client.post("/api/analysis/analyze", json={"text": ""})

        assert response.status_code == 422

    def test_reframe(self, client):
        from reflect.services.reframing_service import REFRAME_TEMPLATES

        response = client.post(
            "/api/analysis/reframe",
            json={"originalThought": "They all hate me", "distortionType": "Mind Reading"},
        )

        assert response.status_code == 200
        assert response.json()["reframedThought"] in REFRAME_TEMPLATES["Mind Reading"]


class TestInsightRoutes:
    def _entries(self):
        now = datetime.now().isoformat()
        return [
            {"id": 1, "content": "I am so happy today", "createdAt": now},
            {"id": 2, "content": "I always fail at everything and it's a complete disaster", "createdAt": now},
        ]

    def test_emotions(self, client):
        response = client.post("/api/insights/emotions", json={"entries": self._entries(), "timeframe": "week"})

        assert response.status_code == 200
        body = response.json()
        assert body["totalEntries"] == 2
        assert body["topEmotions"][0]["count"] == 1

    def test_invalid_timeframe(self, client):
        response = client.post("/api/insights/emotions", json={"entries": [], "timeframe": "year"})

        assert response.status_code == 422

    def test_thinking_patterns(self, client):
        response = client.post("/api/insights/thinking-patterns", json={"entries": self._entries()})

        assert response.status_code == 200
        assert response.json()["Catastrophizing"] == 1

    def test_healing_strength(self, client):
        response = client.post("/api/insights/healing-strength", json={"entries": self._entries(), "weeks": 4})

        assert response.status_code == 200
        body = response.json()
        assert body["patterns"][0]["pattern"] == "Catastrophizing"
        assert len(body["patterns"][0]["weeklyData"]) == 4
        assert 0 <= body["overallScore"] <= 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
