from __future__ import annotations

from config import DEFAULT_INPUTS


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert body["endpoints"]["projection"] == "/api/projection/run"


def test_run_projection(client):
    response = client.post("/api/projection/run", json=DEFAULT_INPUTS)
    assert response.status_code == 200

    body = response.json()
    assert body["solvent"] is True
    assert body["depletion_age"] is None
    assert len(body["yearly_schedule"]) == 52
    assert body["yearly_schedule"][0]["lifecycle_phase"] == "working"
    assert body["yearly_schedule"][-1]["lifecycle_phase"] == "retired"
    assert len(body["accumulation_series"]) == 7
    assert len(body["decumulation_series"]) == 45


def test_run_rejects_out_of_order_ages(client):
    response = client.post(
        "/api/projection/run",
        json={**DEFAULT_INPUTS, "retirement_age": 34},
    )
    assert response.status_code == 400
    assert "Retirement age" in response.json()["detail"]


def test_run_rejects_negative_amounts(client):
    response = client.post(
        "/api/projection/run",
        json={**DEFAULT_INPUTS, "current_savings": -5},
    )
    assert response.status_code == 422


def test_table(client):
    response = client.post("/api/projection/table", json=DEFAULT_INPUTS)
    assert response.status_code == 200

    body = response.json()
    assert len(body["rows"]) == 52
    assert body["rows"][0]["status"] == "Earning"
    assert body["rows"][0]["opening_balance"] == "1,30,00,000"
    assert body["corpus_at_retirement"].endswith(" Cr")


def test_compare(client):
    later = {**DEFAULT_INPUTS, "retirement_age": 45}
    costly = {**DEFAULT_INPUTS, "post_retirement_monthly_expense": 400_000}
    response = client.post(
        "/api/projection/compare",
        json={"base": DEFAULT_INPUTS, "alternatives": [later, costly]},
    )
    assert response.status_code == 200

    body = response.json()
    assert body["base_scenario"]["solvent"] is True
    alternatives = body["alternative_scenarios"]
    assert len(alternatives) == 2
    assert len(alternatives[0]["accumulation_series"]) == 12
    assert alternatives[1]["solvent"] is False


def test_compare_caps_alternatives(client, fresh_settings, monkeypatch):
    monkeypatch.setenv("PLANNER_MAX_SCENARIOS", "1")
    response = client.post(
        "/api/projection/compare",
        json={"base": DEFAULT_INPUTS, "alternatives": [DEFAULT_INPUTS, DEFAULT_INPUTS]},
    )
    assert response.status_code == 400


def test_quick_check(client):
    response = client.get(
        "/api/projection/quick-check",
        params={
            "current_age": 34,
            "retirement_age": 40,
            "current_savings": 13_000_000,
            "monthly_investment": 180_000,
            "annual_step_up_rate": 0.1,
            "post_retirement_monthly_expense": 90_000,
        },
    )
    assert response.status_code == 200

    body = response.json()
    assert body["solvent"] is True
    assert body["coverage_rating"] == "Excellent"
    assert body["corpus_at_retirement_display"].startswith("₹")


def test_quick_check_flags_depletion(client):
    response = client.get(
        "/api/projection/quick-check",
        params={
            "current_age": 50,
            "retirement_age": 55,
            "current_savings": 0,
            "monthly_investment": 0,
            "post_retirement_monthly_expense": 50_000,
        },
    )
    body = response.json()
    assert body["solvent"] is False
    assert body["depletion_age"] == 56
    assert body["coverage_rating"] == "At Risk"


def test_quick_check_rejects_invalid_values(client):
    response = client.get(
        "/api/projection/quick-check",
        params={
            "current_age": 50,
            "retirement_age": 55,
            "current_savings": -1,
            "monthly_investment": 0,
            "post_retirement_monthly_expense": 50_000,
        },
    )
    assert response.status_code == 400


def test_defaults(client):
    response = client.get("/api/projection/defaults")
    assert response.status_code == 200
    assert response.json() == DEFAULT_INPUTS
