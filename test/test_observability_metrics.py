import importlib

from fastapi.testclient import TestClient


def _import_app():
    # Import lazily so environment variables (if any) can be set before import.
    mod = importlib.import_module("api.main")
    return mod


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    r = client.get("/metrics")
    assert r.status_code == 200
    # Prometheus text exposition format content-type
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "taskflow_requests_total" in body
    assert "taskflow_request_latency_seconds" in body


def test_extract_increments_counters() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    r = client.post(
        "/tasks/extract",
        json={"message": "We need to send the invoice", "now": "2024-01-15T10:00:00"},
    )
    assert r.status_code == 200

    lines = client.get("/metrics").text.splitlines()
    assert any(
        line.startswith('taskflow_requests_total{endpoint="/tasks/extract",status="ok"}')
        for line in lines
    )
    assert any(line.startswith('taskflow_tasks_extracted_total{source="message"}') for line in lines)


def test_rejected_recommendation_is_counted() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    r = client.post("/assignments/recommend", json={"task": {"title": "Anything"}, "team_members": []})
    assert r.status_code == 422

    lines = client.get("/metrics").text.splitlines()
    assert any(
        line.startswith('taskflow_recommendations_total{outcome="no_eligible"}') for line in lines
    )
