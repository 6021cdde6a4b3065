"""Integration tests for the search-with-summary endpoint."""

import pytest

from studybolt.shared.exceptions import NetworkError
from tests.fakes import FailingSearchProvider, FakeAgentClient


class TestSearchValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"query": ""}, {"query": "   "}, {"query": 42}])
    async def test_query_required(self, async_client, body):
        response = await async_client.post("/api/search", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Query is required"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("num_results", [0, -3, "five", 2.5, True])
    async def test_invalid_num_results(self, async_client, search_provider, num_results):
        response = await async_client.post(
            "/api/search",
            json={"query": "mitosis", "numResults": num_results},
        )

        assert response.status_code == 400
        assert "numResults" in response.json()["error"]
        assert search_provider.queries == []


class TestSearchWithSummary:

    @pytest.mark.asyncio
    async def test_fresh_then_cached(self, async_client, agent_client, search_provider):
        first = await async_client.post("/api/search", json={"query": "mitosis"})
        second = await async_client.post("/api/search", json={"query": "mitosis"})

        assert first.status_code == 200
        assert second.status_code == 200
        body = first.json()
        assert body["source"] == "fresh"
        assert body["query"] == "mitosis"
        assert body["summary"] == "Summary #1"
        assert body["sources"][0] == {
            "title": "mitosis - study notes part 1",
            "snippet": "Overview 1 of mitosis for revision.",
            "link": "https://example.org/mitosis/1",
            "id": "search-result-1",
        }
        assert body["timestamp"].endswith("Z")

        cached = second.json()
        assert cached["source"] == "cache"
        assert {k: v for k, v in cached.items() if k != "source"} == {
            k: v for k, v in body.items() if k != "source"
        }
        assert search_provider.queries == [("mitosis", 5)]
        assert len(agent_client.complete_calls) == 1

    @pytest.mark.asyncio
    async def test_cache_expires(self, async_client, fake_clock):
        await async_client.post("/api/search", json={"query": "mitosis"})
        fake_clock.advance(3600)

        response = await async_client.post("/api/search", json={"query": "mitosis"})

        assert response.json()["source"] == "fresh"
        assert response.json()["summary"] == "Summary #2"

    @pytest.mark.asyncio
    async def test_num_results_forwarded(self, async_client, search_provider):
        response = await async_client.post(
            "/api/search",
            json={"query": "mitosis", "numResults": 2},
        )

        assert response.status_code == 200
        assert len(response.json()["sources"]) == 2
        assert search_provider.queries == [("mitosis", 2)]

    @pytest.mark.asyncio
    async def test_num_results_clamped_to_maximum(self, async_client, search_provider):
        response = await async_client.post(
            "/api/search",
            json={"query": "mitosis", "numResults": 500},
        )

        assert response.status_code == 200
        assert search_provider.queries == [("mitosis", 20)]

    @pytest.mark.asyncio
    async def test_search_failure_returns_500(self, app, async_client, cache_store):
        app.state.search_provider = FailingSearchProvider()

        response = await async_client.post("/api/search", json={"query": "mitosis"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Search failed",
            "message": "SERP request failed: 500",
        }

    @pytest.mark.asyncio
    async def test_summary_failure_returns_500(self, app, async_client):
        app.state.agent_client = FakeAgentClient(
            complete_error=NetworkError("Connection to Mistral failed", service="mistral")
        )

        response = await async_client.post("/api/search", json={"query": "mitosis"})

        assert response.status_code == 500
        assert response.json()["error"] == "Search failed"
