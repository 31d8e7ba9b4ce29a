"""Tests for the HTTP API."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from jsonguard.api.deps import get_http_client
from jsonguard.core.config import settings
from jsonguard.main import app
from jsonguard.pipeline.steps.fetch_json import build_client

from tests.conftest import json_handler, make_client


@pytest.fixture
def serve():
    """Point the API's outbound HTTP client at a fake handler."""

    def _serve(handler) -> TestClient:
        async def override() -> Any:
            async with make_client(handler) as client:
                yield client

        app.dependency_overrides[get_http_client] = override
        return TestClient(app)

    yield _serve
    app.dependency_overrides.clear()


def test_health(serve):
    client = serve(json_handler({}))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_validate_success(serve, menu_schema, menu_document):
    client = serve(json_handler(menu_document))

    response = client.post("/api/v1/validate", json={"url": "data/menu.json", "schema": menu_schema})

    assert response.status_code == 200
    assert response.json() == {
        "url": "data/menu.json",
        "status": "COMPLETED",
        "failure": None,
        "message": None,
        "errors": [],
        "warnings": [],
    }


def test_validate_reports_violations(serve):
    client = serve(json_handler(True))
    schema = {"anyOf": [{"type": "string"}, {"type": "number"}]}

    body = client.post("/api/v1/validate", json={"url": "flag.json", "schema": schema}).json()

    assert body["status"] == "FAILED"
    assert body["failure"] == "VALIDATION"
    assert body["errors"] == ["flag: Value must match one of the allowed shapes."]
    assert len(body["warnings"]) == 2


def test_validate_reports_http_failure(serve, menu_schema):
    client = serve(json_handler({}, status_code=404))

    body = client.post("/api/v1/validate", json={"url": "data/menu.json", "schema": menu_schema}).json()

    assert body["failure"] == "LOAD"
    assert "HTTP 404" in body["message"]


def test_malformed_schema_is_unprocessable(serve):
    client = serve(json_handler({}))

    response = client.post("/api/v1/validate", json={"url": "x.json", "schema": {"type": "integer"}})

    assert response.status_code == 422
    assert response.json()["detail"]["errors"]


def test_preview_renders_document(serve, menu_schema, menu_document):
    client = serve(json_handler(menu_document))

    response = client.post("/api/v1/preview", json={"url": "data/menu.json", "schema": menu_schema})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    page = response.text
    assert "No errors found." in page
    assert '<div id="content"><pre>' in page
    assert "&quot;title&quot;: &quot;Lunch&quot;" in page


def test_preview_shows_fallback_on_validation_failure(serve, menu_schema):
    client = serve(json_handler({"title": "Lunch", "items": []}))

    page = client.post("/api/v1/preview", json={"url": "data/menu.json", "schema": menu_schema}).text

    assert "Errors (1)" in page
    assert "Validation failed for <b>data/menu.json</b>" in page
    assert "<pre>" not in page


def test_transport_errors_surface_as_load_failure(serve, menu_schema):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = serve(handler)

    body = client.post("/api/v1/validate", json={"url": "data/menu.json", "schema": menu_schema}).json()

    assert body["failure"] == "LOAD"
    assert "timed out" in body["message"]


def recording_handler(seen: list[str], payload: Any = None, status_code: int = 200, headers=None):
    """Handler that records every requested URL before answering."""

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(status_code, json=payload, headers=headers)

    return handler


@pytest.mark.parametrize("url", [
    "http://169.254.169.254/latest/meta-data/creds",
    "https://internal.example/admin.json",
    "//169.254.169.254/latest/meta-data/creds",
    "file:///etc/passwd",
])
@pytest.mark.parametrize("endpoint", ["/api/v1/validate", "/api/v1/preview"])
def test_off_base_locators_are_refused_before_fetching(serve, endpoint, url):
    seen: list[str] = []
    client = serve(recording_handler(seen, payload={"secret": "s3cr3t"}))

    response = client.post(endpoint, json={"url": url, "schema": {"type": "object"}})

    assert response.status_code == 422
    assert "host not allowed" in response.json()["detail"]["message"]
    assert seen == []
    assert "s3cr3t" not in response.text


def test_allowed_host_is_fetched(serve, monkeypatch, menu_schema, menu_document):
    monkeypatch.setattr(settings, "FETCH_ALLOWED_HOSTS", ["DATA.test"])
    seen: list[str] = []
    client = serve(recording_handler(seen, payload=menu_document))

    body = client.post(
        "/api/v1/validate",
        json={"url": "https://data.test/data/menu.json", "schema": menu_schema},
    ).json()

    assert body["status"] == "COMPLETED"
    assert seen == ["https://data.test/data/menu.json"]


def test_relative_locator_resolves_against_base(serve, menu_schema, menu_document):
    seen: list[str] = []
    client = serve(recording_handler(seen, payload=menu_document))

    client.post("/api/v1/validate", json={"url": "data/menu.json", "schema": menu_schema})

    assert seen == ["https://data.test/data/menu.json"]


def test_redirects_are_not_followed(serve, menu_schema):
    seen: list[str] = []
    client = serve(recording_handler(
        seen,
        status_code=302,
        headers={"Location": "http://169.254.169.254/latest/meta-data/creds"},
    ))

    body = client.post("/api/v1/validate", json={"url": "data/menu.json", "schema": menu_schema}).json()

    assert body["failure"] == "LOAD"
    assert "HTTP 302" in body["message"]
    assert seen == ["https://data.test/data/menu.json"]


@pytest.mark.asyncio
async def test_default_client_does_not_follow_redirects():
    async with build_client() as client:
        assert client.follow_redirects is False
