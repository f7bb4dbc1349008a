"""Test the HTTP API with a mocked Serpstat transport."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from serpstat_mcp.api.routes import get_client
from serpstat_mcp.main import app
from serpstat_mcp.serpstat.client import SerpstatClient


def serpstat_reply(request):
    body = json.loads(request.content)
    if body["method"] == "SerpstatLimitsProcedure.getStats":
        return httpx.Response(200, json={"id": 1, "result": {"data": {"max_lines": 100, "used_lines": 10, "left_lines": 90}}})
    if body["method"] == "SerpstatDomainProcedure.getDomainUrls":
        return httpx.Response(200, json={"id": 1, "error": {"code": 32002, "message": "Limit exceeded"}})
    return httpx.Response(200, json={
        "id": 1,
        "result": {
            "data": [{"domain": "a.com", "visible": 100.5}, {"domain": "b.com", "visible": 50.25}],
            "summary_info": {"left_lines": 90, "page": 1},
        },
    })


@pytest.fixture
def client():
    def mocked_client():
        return SerpstatClient(
            "https://api.serpstat.com/v4",
            "test-token",
            transport=httpx.MockTransport(serpstat_reply),
        )

    app.dependency_overrides[get_client] = mocked_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["tools"] == "/api/tools"


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "token_configured": True,
        "serpstat_connected": True,
        "error": None,
    }


def test_list_tools(client):
    data = client.get("/api/tools").json()
    assert data["count"] == 12
    methods = {tool["name"]: tool["method"] for tool in data["tools"]}
    assert methods["get_keywords"] == "SerpstatKeywordProcedure.getKeywords"


def test_get_unknown_tool(client):
    response = client.get("/api/tools/get_everything")
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown tool: get_everything"


def test_validate_dry_run(client):
    response = client.post("/api/tools/get_domain_keywords/validate", json={"domain": " Example.COM "})
    assert response.status_code == 200
    assert response.json() == {
        "tool": "get_domain_keywords",
        "method": "SerpstatDomainProcedure.getDomainKeywords",
        "arguments": {"domain": "example.com", "se": "g_us", "page": 1, "size": 100},
    }


def test_validate_rejects_bad_arguments(client):
    response = client.post(
        "/api/tools/get_domain_keywords/validate",
        json={"domain": "a.com", "filters": {"position_from": 50, "position_to": 10}},
    )
    assert response.status_code == 422
    assert "position_from" in response.json()["detail"]


def test_call_tool(client):
    response = client.post("/api/tools/get_domains_info", json={"domains": ["a.com", "b.com"]})
    assert response.status_code == 200
    report = response.json()
    assert report["analytics"]["summary"]["total_visibility"] == 150.75
    assert report["analytics"]["summary"]["average_visibility"] == 75.38
    assert report["api_info"]["credits_remaining"] == 90


def test_call_tool_upstream_error(client):
    response = client.post("/api/tools/get_domain_urls", json={"domain": "a.com"})
    assert response.status_code == 502
    assert response.json()["detail"] == "Serpstat API Error: Limit exceeded"


def test_call_unknown_tool(client):
    response = client.post("/api/tools/get_everything", json={})
    assert response.status_code == 404
