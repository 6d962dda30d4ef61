# tests/test_api.py
import json

import pytest
from fastapi.testclient import TestClient

from config.settings import settings
from main import app
from tests.helpers import analysis_json, transform_json
from utils.exceptions import LLMAPIError


@pytest.fixture
def client(monkeypatch, orchestrator, feedback_log):
    monkeypatch.setattr("api.transform.orchestrator", orchestrator)
    monkeypatch.setattr("api.usage.orchestrator", orchestrator)
    monkeypatch.setattr("api.feedback.feedback_logger", feedback_log)
    return TestClient(app)


FEEDBACK_BODY = {
    "sessionId": "s-1",
    "originalText": "빨리 좀 해줘요",
    "transformedText": "가능하시다면 빠른 처리 부탁드립니다.",
    "transformSettings": {"purpose": "messenger", "intent": "request", "politeness": 2, "smartMode": False},
    "rating": "satisfied",
}


class TestTransformEndpoint:

    def test_direct_transform_returns_result(self, client, fake_llm):
        fake_llm.responses = [transform_json(revision="자료 공유 부탁드립니다.")]

        response = client.post("/api/transform", json={
            "text": "자료 빨리 줘요", "purpose": "messenger", "intent": "request", "politeness": 2,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"]["revision"] == "자료 공유 부탁드립니다."
        assert body["data"]["needsConfirmation"] is False
        assert body["data"]["modelUsed"] == "gpt-4o-mini"

    def test_low_confidence_returns_analysis_only(self, client, fake_llm):
        fake_llm.responses = [analysis_json(confidence=0.5)]

        response = client.post("/api/transform", json={"text": "음... 그거 어떻게 됐죠?", "smartMode": True})

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["needsConfirmation"] is True
        assert data["revision"] == ""
        assert data["analysis"]["confidence"] == 0.5
        assert data["analysis"]["analysis"]["detectedEmotions"] == ["짜증", "조급함"]

    def test_confirmed_analysis_round_trip(self, client, fake_llm):
        fake_llm.responses = [analysis_json(confidence=0.5)]
        first = client.post("/api/transform", json={"text": "그거 어떻게 됐죠?", "smartMode": True}).json()

        fake_llm.responses = [transform_json()]
        second = client.post("/api/transform", json={
            "text": "그거 어떻게 됐죠?",
            "smartMode": True,
            "confirmedAnalysis": first["data"]["analysis"],
        })

        assert second.status_code == 200
        assert second.json()["data"]["needsConfirmation"] is False
        assert fake_llm.schemas == ["analysis_result", "transform_result"]

    @pytest.mark.parametrize("body", [
        {"text": ""},
        {"text": "가" * 501},
        {"text": "안녕", "politeness": 4},
        {"text": "안녕", "purpose": "letter"},
        {"text": "안녕", "model": "gpt-5"},
        {},
    ])
    def test_invalid_request_rejected_before_generation(self, client, fake_llm, body):
        response = client.post("/api/transform", json=body)

        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "잘못된 요청입니다."}
        assert fake_llm.calls == []

    def test_premium_model_without_key_is_forbidden(self, client, fake_llm):
        response = client.post("/api/transform", json={"text": "보고서 주세요", "model": "gpt-4o", "premium": True})

        assert response.status_code == 403
        assert response.json()["ok"] is False
        assert "gpt-4o" in response.json()["error"]
        assert fake_llm.calls == []

    def test_premium_model_with_key_is_allowed(self, client, fake_llm):
        fake_llm.responses = [transform_json()]

        response = client.post(
            "/api/transform",
            json={"text": "보고서 주세요", "model": "gpt-4o", "purpose": "email", "intent": "request", "politeness": 2},
            headers={"X-Premium-Key": "test_premium_key"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["modelUsed"] == "gpt-4o"

    def test_quota_exhausted_returns_429(self, client, fake_llm):
        body = {"text": "확인 부탁", "purpose": "memo", "intent": "notice", "politeness": 1}
        headers = {"X-Client-Id": "quota-user"}
        fake_llm.responses = [transform_json() for _ in range(5)]
        for _ in range(5):
            assert client.post("/api/transform", json=body, headers=headers).status_code == 200

        response = client.post("/api/transform", json=body, headers=headers)

        assert response.status_code == 429
        assert response.json()["ok"] is False
        assert len(fake_llm.calls) == 5

    def test_generation_failure_returns_generic_error(self, client, fake_llm):
        fake_llm.responses = [LLMAPIError("upstream exploded: sk-secret")]

        response = client.post("/api/transform", json={
            "text": "자료 빨리 줘요", "purpose": "messenger", "intent": "request", "politeness": 2,
        })

        assert response.status_code == 502
        assert response.json() == {"ok": False, "error": LLMAPIError.default_message}


class TestFeedbackEndpoint:

    def test_submit_returns_feedback_id(self, client, feedback_log):
        response = client.post("/api/feedback", json=FEEDBACK_BODY, headers={
            "User-Agent": "test-agent", "X-Forwarded-For": "203.0.113.7",
        })

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["feedbackId"].startswith("fb_")
        assert data["message"]

        page = feedback_log.list(admin_key="admin-secret")
        assert page.feedbacks[0]["ip"] == "203.0.113.7"
        assert page.feedbacks[0]["userAgent"] == "test-agent"

    def test_submitted_json_round_trips_unchanged(self, client):
        settings_sent = {
            **FEEDBACK_BODY["transformSettings"],
            "analysisResult": json.loads(analysis_json(confidence=1)),
        }
        body = {**FEEDBACK_BODY, "transformSettings": settings_sent, "comment": "줄바꿈\n따옴표 \" 😀"}
        client.post("/api/feedback", json=body)

        stored = client.get("/api/feedback", params={"key": "admin-secret"}).json()["data"]["feedbacks"][0]

        for field, value in body.items():
            assert json.dumps(stored[field], ensure_ascii=False) == json.dumps(value, ensure_ascii=False)

    def test_invalid_rating_rejected(self, client):
        response = client.post("/api/feedback", json={**FEEDBACK_BODY, "rating": "meh"})

        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_list_requires_admin_key(self, client):
        client.post("/api/feedback", json=FEEDBACK_BODY)

        assert client.get("/api/feedback").status_code == 403
        assert client.get("/api/feedback", params={"key": "nope"}).status_code == 403

    def test_list_with_filter(self, client):
        client.post("/api/feedback", json=FEEDBACK_BODY)
        client.post("/api/feedback", json={**FEEDBACK_BODY, "rating": "needs_improvement", "feedbackType": "length"})

        response = client.get("/api/feedback", params={"key": "admin-secret", "rating": "needs_improvement"})

        data = response.json()["data"]
        assert response.status_code == 200
        assert data["total"] == 2
        assert len(data["feedbacks"]) == 1
        assert data["stats"] == {"satisfied": 1, "needs_improvement": 1}


class TestUsageEndpoints:

    def test_usage_for_free_client(self, client):
        response = client.get("/api/usage", params={"model": "gpt-4o-mini"}, headers={"X-Client-Id": "u1"})

        data = response.json()["data"]
        assert data["tier"] == "free"
        assert data["allowed"] is True
        assert data["usage"] == {"canUse": True, "remaining": 5, "limit": 5}

    def test_usage_for_premium_model_on_free_tier(self, client):
        data = client.get("/api/usage", params={"model": "gpt-4o"}).json()["data"]

        assert data["allowed"] is False
        assert data["usage"]["canUse"] is False

    def test_reset_only_in_debug(self, client, monkeypatch, gate):
        gate.increment_usage("gpt-4o-mini", "dev")
        monkeypatch.setattr(settings, "debug", False)
        assert client.delete("/api/usage", headers={"X-Client-Id": "dev"}).status_code == 403

        monkeypatch.setattr(settings, "debug", True)
        response = client.delete("/api/usage", headers={"X-Client-Id": "dev"})

        assert response.status_code == 200
        assert response.json()["data"]["removed"] == 1

    def test_model_catalog(self, client):
        models = {m["model"]: m for m in client.get("/api/models").json()["data"]}

        assert set(models) == {"gpt-4o-mini", "gpt-4o"}
        assert models["gpt-4o"]["tier"] == "premium"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
