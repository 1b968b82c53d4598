"""Tests for the NewsAPI client using httpx.MockTransport."""

import httpx
import pytest
from news_service import (
    NewsAPIConfig,
    NewsAPIError,
    fetch_cybersecurity_news,
)


def raw(title, url, published, description="Ransomware attack reported"):
    return {
        "title": title,
        "description": description,
        "url": url,
        "publishedAt": published,
        "source": {"id": None, "name": "Example News"},
    }


def client_for(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def config():
    return NewsAPIConfig(api_key="test-key", search_terms=("malware", "phishing"), page_size=20)


# ─── Success Path ────────────────────────────────────────────────────────────

class TestFetchSuccess:

    def test_returns_filtered_deduplicated_sorted_articles(self, config):
        payload = {
            "status": "ok",
            "totalResults": 5,
            "articles": [
                raw("Older breach", "https://n/1", "2024-01-01T00:00:00Z"),
                raw("Newer breach", "https://n/2", "2024-01-03T00:00:00Z"),
                raw("Newer breach copy", "https://n/2", "2024-01-04T00:00:00Z"),
                raw("Football results", "https://n/3", "2024-01-05T00:00:00Z",
                    description="Weekend scores"),
                {"title": "Missing fields"},
            ],
        }
        with client_for(lambda request: httpx.Response(200, json=payload)) as client:
            articles = fetch_cybersecurity_news(config=config, client=client)

        assert [a.url for a in articles] == ["https://n/2", "https://n/1"]
        assert all(len(a.id) == 12 for a in articles)
        assert articles[0].source.name == "Example News"

    def test_invalid_entries_skipped(self, config):
        payload = {"status": "ok", "articles": [
            raw("Malware report", "ftp://n/1", "2024-01-01T00:00:00Z"),
            raw("Malware report", "https://n/2", "not a date"),
            {**raw("Malware report", "https://n/3", "2024-01-01T00:00:00Z"), "source": {"name": " "}},
            "article",
            raw("Malware report", "https://n/4", "2024-01-02T00:00:00Z"),
        ]}
        with client_for(lambda request: httpx.Response(200, json=payload)) as client:
            articles = fetch_cybersecurity_news(config=config, client=client)

        assert [a.url for a in articles] == ["https://n/4"]
        assert articles[0].published_at == "2024-01-02T00:00:00Z"

    def test_sends_query_parameters(self, config):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(200, json={"status": "ok", "articles": []})

        with client_for(handler) as client:
            assert fetch_cybersecurity_news(page=3, config=config, client=client) == []

        assert seen["q"] == "malware OR phishing"
        assert seen["apiKey"] == "test-key"
        assert seen["pageSize"] == "20"
        assert seen["page"] == "3"
        assert seen["sortBy"] == "publishedAt"
        assert seen["language"] == "en"

    def test_missing_articles_key(self, config):
        with client_for(lambda request: httpx.Response(200, json={"status": "ok"})) as client:
            assert fetch_cybersecurity_news(config=config, client=client) == []


# ─── Error Mapping ───────────────────────────────────────────────────────────

class TestFetchErrors:

    @pytest.mark.parametrize("status,error_type", [
        (401, "authentication"),
        (429, "rate_limit"),
        (400, "bad_request"),
        (500, "server_error"),
        (503, "api_error"),
    ])
    def test_http_status(self, config, status, error_type):
        response = httpx.Response(status, json={"status": "error", "message": "nope"})
        with client_for(lambda request: response) as client:
            with pytest.raises(NewsAPIError) as excinfo:
                fetch_cybersecurity_news(config=config, client=client)
        assert excinfo.value.error_type == error_type
        assert excinfo.value.status == status

    def test_bad_request_uses_api_message(self, config):
        response = httpx.Response(400, json={"message": "q is too long"})
        with client_for(lambda request: response) as client:
            with pytest.raises(NewsAPIError, match="q is too long"):
                fetch_cybersecurity_news(config=config, client=client)

    def test_network_error(self, config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with client_for(handler) as client:
            with pytest.raises(NewsAPIError) as excinfo:
                fetch_cybersecurity_news(config=config, client=client)
        assert excinfo.value.error_type == "network_error"
        assert excinfo.value.status is None

    def test_invalid_json(self, config):
        with client_for(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(NewsAPIError) as excinfo:
                fetch_cybersecurity_news(config=config, client=client)
        assert excinfo.value.error_type == "unknown_error"

    def test_error_status_in_payload(self, config):
        payload = {"status": "error", "message": "apiKeyDisabled"}
        with client_for(lambda request: httpx.Response(200, json=payload)) as client:
            with pytest.raises(NewsAPIError, match="apiKeyDisabled") as excinfo:
                fetch_cybersecurity_news(config=config, client=client)
        assert excinfo.value.error_type == "api_error"

    @pytest.mark.parametrize("key", ["", "your_newsapi_key_here"])
    def test_missing_api_key(self, key):
        def handler(request):
            raise AssertionError("no request expected")

        with client_for(handler) as client:
            with pytest.raises(NewsAPIError) as excinfo:
                fetch_cybersecurity_news(config=NewsAPIConfig(api_key=key), client=client)
        assert excinfo.value.error_type == "configuration_error"


# ─── Config ──────────────────────────────────────────────────────────────────

class TestConfig:

    def test_config_query(self):
        assert NewsAPIConfig(search_terms=("a", "b c")).query == "a OR b c"
