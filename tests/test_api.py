import random

import pytest
from fastapi.testclient import TestClient

import experience_x.api.app as api_module
from experience_x.config import Settings
from experience_x.service.experience import ENHANCED_MODEL, FALLBACK_MODEL, ExperienceOrchestrator

client = TestClient(api_module.app)


@pytest.fixture(autouse=True)
def offline_orchestrator(monkeypatch) -> ExperienceOrchestrator:
    orchestrator = ExperienceOrchestrator(Settings(DEEPSEEK_API_KEY=""), rng=random.Random(2))
    monkeypatch.setattr(api_module, "orchestrator", orchestrator)
    return orchestrator


def _assert_cors(resp) -> None:
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-allow-credentials"] == "true"
    assert "POST" in resp.headers["access-control-allow-methods"]
    assert "Content-Type" in resp.headers["access-control-allow-headers"]


def test_healthz() -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_post_without_credential_uses_fallback() -> None:
    resp = client.post("/api/experience", json={"query": "tell me about the ocean"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["model"] == FALLBACK_MODEL
    assert data["query"] == "tell me about the ocean"
    assert "tell me about the ocean" in data["response"]
    assert data["timestamp"].endswith("Z")
    assert "error" not in data
    assert "note" not in data
    _assert_cors(resp)


def test_post_without_credential_enhanced_tier_names_ocean_theme(monkeypatch) -> None:
    orchestrator = ExperienceOrchestrator(
        Settings(DEEPSEEK_API_KEY="", NO_KEY_TIER="enhanced"),
        rng=random.Random(2),
    )
    monkeypatch.setattr(api_module, "orchestrator", orchestrator)

    resp = client.post("/api/experience", json={"query": "tell me about the ocean"})
    assert resp.status_code == 200
    assert "Neural Ocean" in resp.json()["response"]


def test_degraded_response_is_still_success(monkeypatch) -> None:
    class _FailingClient:
        model = "deepseek-chat"

        async def complete(self, query: str) -> str:
            from experience_x.errors import UpstreamTransportOrFormatError

            raise UpstreamTransportOrFormatError("API request failed with status 500", status_code=500)

    orchestrator = ExperienceOrchestrator(
        Settings(DEEPSEEK_API_KEY="sk-test"),
        llm_client=_FailingClient(),  # type: ignore[arg-type]
        rng=random.Random(2),
    )
    monkeypatch.setattr(api_module, "orchestrator", orchestrator)

    resp = client.post("/api/experience", json={"query": "urban jungle"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["model"] == ENHANCED_MODEL
    assert data["error"] == "API request failed with status 500"
    assert "note" in data
    assert "Fractal City" in data["response"]


def test_empty_body_is_rejected() -> None:
    resp = client.post("/api/experience", content=b"")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Query is required"}
    _assert_cors(resp)


@pytest.mark.parametrize(
    "body",
    [b"{}", b'{"query": ""}', b'{"query": "   "}', b'{"query": 42}', b"[1, 2]", b"not json"],
)
def test_invalid_query_is_rejected(body: bytes) -> None:
    resp = client.post("/api/experience", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Query is required"


def test_options_preflight_returns_empty_success() -> None:
    resp = client.options("/api/experience")
    assert resp.status_code == 200
    assert resp.content == b""
    _assert_cors(resp)


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH", "TRACE"])
def test_other_methods_are_not_allowed(method: str) -> None:
    resp = client.request(method, "/api/experience")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}
    _assert_cors(resp)
