from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from slateplanner.api.main import create_app
from slateplanner.api.schemas import EstimateRequest
from slateplanner.core.rate_limiter import reset_limiter
from slateplanner.core.settings import get_settings


def test_app_factory_healthcheck(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_rate_limiter_is_configured(app) -> None:
    assert hasattr(app.state, "limiter")


def test_metrics_are_exposed(client: TestClient) -> None:
    client.get("/api/v1/plans")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_request" in response.text


def test_list_plans_returns_tiers_and_add_ons(client: TestClient) -> None:
    response = client.get("/api/v1/plans")
    assert response.status_code == 200, response.text
    payload = response.json()
    assert [plan["name"] for plan in payload["plans"]] == ["Prospect", "Rookie", "Legend"]
    assert payload["plans"][2]["has_sms"] is True
    assert len(payload["add_ons"]) == 6
    assert payload["add_ons"][0] == {"credits": 250, "cost_per_credit": 0.1812, "package_price": 45.3}


def test_get_plan_by_name(client: TestClient) -> None:
    response = client.get("/api/v1/plans/rookie")
    assert response.status_code == 200
    assert response.json()["credits"] == 500

    missing = client.get("/api/v1/plans/enterprise")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Plan not found"


def test_list_features(client: TestClient) -> None:
    response = client.get("/api/v1/features")
    assert response.status_code == 200
    features = {item["key"]: item for item in response.json()}
    assert len(features) == 10
    assert features["sms"]["capability"] == "sms"
    assert features["auto_contact_data_enrichment"]["capability"] is None


def test_estimate_with_defaults(client: TestClient) -> None:
    response = client.post("/api/v1/estimate", json={})
    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["recommended_plan"] == "Prospect"
    assert payload["ongoing_total"] == 0
    assert payload["first_month_total"] == 0
    assert payload["add_on"] == {"needed": False, "credits": 0, "monthly_cost": 0.0}
    assert payload["diagnostics"]["economical_ai_replies_per_day"] == 6
    assert set(payload["suitability"]) == {"Prospect", "Rookie", "Legend"}


def test_estimate_recommends_add_on_beyond_top_tier(client: TestClient) -> None:
    response = client.post(
        "/api/v1/estimate",
        json={"sms": True, "sms_messages_per_day": 500, "working_days": 22},
    )
    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["recommended_plan"] == "Legend"
    assert payload["required_plan"] == "Legend"
    assert payload["ongoing_total"] == 11000
    assert payload["credits"]["sms"] == 11000
    assert payload["add_on"] == {"needed": True, "credits": 10000, "monthly_cost": 780.0}
    assert payload["suitability"]["Legend"]["credit_shortfall"] == 10000


def test_estimate_clamps_out_of_range_numbers(client: TestClient) -> None:
    response = client.post(
        "/api/v1/estimate",
        json={
            "ai_icebreakers": True,
            "linkedin_requests_per_day": 20,
            "connection_acceptance_rate": 4,
            "working_days": 0,
            "emails_per_day": -50,
        },
    )
    assert response.status_code == 200, response.text
    payload = response.json()
    assert payload["daily"]["linkedin_connections"] == 20
    assert payload["credits"]["icebreakers"] == 20
    assert payload["daily"]["domains"] == 0
    assert payload["diagnostics"]["economical_ai_replies_per_day"] == 150


def test_estimate_flags_entry_email_cap(client: TestClient) -> None:
    response = client.post("/api/v1/estimate", json={"emails_per_day": 200})
    payload = response.json()
    assert payload["email_limit_exceeded"] is True
    assert payload["recommended_plan"] == "Rookie"
    assert payload["suitability"]["Prospect"]["emails_exceeded"] is True


def test_estimate_rejects_wrong_types(client: TestClient) -> None:
    response = client.post("/api/v1/estimate", json={"emails_per_day": "lots"})
    assert response.status_code == 422


@pytest.fixture()
def throttled_client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SLATEPLANNER_RATE_LIMIT_REQUESTS", "2")
    monkeypatch.setenv("SLATEPLANNER_ENABLE_PROMETHEUS", "false")
    get_settings.cache_clear()
    reset_limiter()
    yield TestClient(create_app())
    get_settings.cache_clear()
    reset_limiter()


def test_rate_limit_returns_429(throttled_client: TestClient) -> None:
    for _ in range(2):
        assert throttled_client.get("/api/v1/features").status_code == 200
    response = throttled_client.get("/api/v1/features")
    assert response.status_code == 429
    assert response.json()["detail"] == "Too many requests"
    assert response.headers["Retry-After"] == "60"


def test_estimate_metrics_count_recommended_plans(client: TestClient) -> None:
    assert client.post("/api/v1/estimate", json={"sms": True, "sms_messages_per_day": 100}).status_code == 200
    text = client.get("/metrics").text
    recommended = [
        line
        for line in text.splitlines()
        if line.startswith("slateplanner_recommendations_total{") and 'plan="Legend"' in line
    ]
    assert any('add_on="true"' in line for line in recommended)
    assert "slateplanner_estimated_ongoing_credits_bucket" in text


def test_request_model_leaves_clamping_to_the_configuration() -> None:
    request = EstimateRequest(emails_per_day=-50, connection_acceptance_rate=4, working_days=0)
    assert request.emails_per_day == -50
    assert request.connection_acceptance_rate == 4
    assert request.working_days == 0

    config = request.to_configuration()
    assert config.emails_per_day == 0
    assert config.connection_acceptance_rate == 1
    assert config.working_days == 1
