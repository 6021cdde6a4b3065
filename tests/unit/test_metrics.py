"""Unit tests for Prometheus metrics endpoint."""

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from studybolt.main import create_app


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_metrics_endpoint_returns_text() -> None:
    client = TestClient(create_app())
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "studybolt_chat_streams_total" in response.text


def test_requests_are_counted_by_route() -> None:
    client = TestClient(create_app())
    labels = {"method": "GET", "path": "/", "status_code": "200"}
    before = _sample("http_requests_total", labels)

    client.get("/")

    assert _sample("http_requests_total", labels) == before + 1
