import asyncio

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from writing_assistant.api.content import get_http_client
from writing_assistant.main import create_app

OPENAI_HEADERS = {"x-api-provider": "openai", "x-api-key": "sk-test", "x-api-model": "gpt-4o-mini"}
GENERATION_BODY = {"topic": "renewable energy", "keywords": ["solar", "grid"], "wordCount": 500}


@pytest.fixture
def make_app(make_upstream):
    """Build the app with outbound provider traffic routed to a stub upstream."""

    def _make(**upstream_kwargs):
        upstream = make_upstream(**upstream_kwargs)
        app = create_app()

        async def _client():
            async with upstream.client() as client:
                yield client

        app.dependency_overrides[get_http_client] = _client
        return app, upstream

    return _make


def _post(app, path, body, headers=None):
    async def _run():
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            return await client.post(path, json=body, headers=headers or {})

    return asyncio.run(_run())


def test_generate_content_returns_provider_text(make_app):
    app, upstream = make_app(json_body={"choices": [{"message": {"content": "ARTICLE"}}]})

    response = _post(app, "/api/generate-content", GENERATION_BODY, OPENAI_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"success": True, "content": "ARTICLE"}
    sent = upstream.last_json()
    assert sent["model"] == "gpt-4o-mini"
    assert sent["temperature"] == 0.7
    prompt = sent["messages"][-1]["content"]
    assert '"renewable energy"' in prompt
    assert "approximately 500 words" in prompt
    assert "Include these keywords naturally: solar, grid" in prompt


def test_generate_content_requires_api_key(make_app):
    app, upstream = make_app()

    response = _post(app, "/api/generate-content", GENERATION_BODY, {"x-api-provider": "openai"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "API key is required"}
    assert upstream.requests == []


def test_generate_content_defaults_to_openai(make_app):
    app, upstream = make_app(json_body={"choices": [{"message": {"content": "ARTICLE"}}]})

    response = _post(app, "/api/generate-content", GENERATION_BODY, {"x-api-key": "sk-test"})

    assert response.status_code == 200
    assert str(upstream.last_request.url) == "https://api.openai.com/v1/chat/completions"
    assert upstream.last_json()["model"] == "gpt-3.5-turbo"


def test_generate_content_upstream_unauthorized(make_app):
    app, _ = make_app(status_code=401, json_body={"error": {"message": "bad key"}})

    response = _post(app, "/api/generate-content", GENERATION_BODY, OPENAI_HEADERS)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "error" in body["error"]


def test_generate_content_unreachable_provider(make_app):
    app, _ = make_app(error=httpx.ConnectError("connection refused"))
    headers = {**OPENAI_HEADERS, "x-api-provider": "anthropic"}

    response = _post(app, "/api/generate-content", GENERATION_BODY, headers)

    assert response.status_code == 500
    assert response.json()["error"].startswith("Anthropic API request failed")


def test_generate_content_unsupported_provider(make_app):
    app, upstream = make_app()
    headers = {**OPENAI_HEADERS, "x-api-provider": "cohere"}

    response = _post(app, "/api/generate-content", GENERATION_BODY, headers)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Unsupported API provider"}
    assert upstream.requests == []


def test_generate_content_empty_result_is_an_error(make_app):
    app, _ = make_app(json_body={"choices": [{"message": {"content": ""}}]})

    response = _post(app, "/api/generate-content", GENERATION_BODY, OPENAI_HEADERS)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "No content generated"}


def test_generate_content_with_ollama_needs_no_key(make_app):
    app, upstream = make_app(json_body={"response": "LOCAL ARTICLE"})
    headers = {"x-api-provider": "ollama", "x-api-model": "llama3.2:3b"}

    response = _post(app, "/api/generate-content", GENERATION_BODY, headers)

    assert response.status_code == 200
    assert response.json()["content"] == "LOCAL ARTICLE"
    assert str(upstream.last_request.url) == "http://localhost:11434/api/generate"


def test_generate_content_invalid_body_is_bad_request(make_app):
    app, upstream = make_app()

    response = _post(app, "/api/generate-content", {"keywords": ["solar"]}, OPENAI_HEADERS)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "topic" in body["error"]
    assert upstream.requests == []


def test_optimize_text_with_custom_instructions(make_app):
    app, upstream = make_app(json_body={"content": [{"text": "Punchier text."}]})
    headers = {"x-api-provider": "anthropic", "x-api-key": "ant", "x-api-model": "claude-3-haiku"}
    body = {"text": "A dull sentence.", "mode": "custom", "customInstructions": "Make it punchier."}

    response = _post(app, "/api/optimize-text", body, headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "optimizedText": "Punchier text."}
    sent = upstream.last_json()
    assert sent["temperature"] == 0.8
    assert sent["messages"][0]["content"] == (
        "Make it punchier.\n\nText to optimize:\n\nA dull sentence."
    )


def test_optimize_text_rejects_blank_text(make_app):
    app, upstream = make_app()

    response = _post(
        app,
        "/api/optimize-text",
        {"text": "   ", "mode": "human-characteristics"},
        OPENAI_HEADERS,
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Text to optimize is required"}
    assert upstream.requests == []


def test_optimize_text_rejects_unknown_mode(make_app):
    app, upstream = make_app()

    response = _post(app, "/api/optimize-text", {"text": "Draft.", "mode": "pirate"}, OPENAI_HEADERS)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid optimization mode"}
    assert upstream.requests == []


def test_optimize_text_checks_api_key_first(make_app):
    app, _ = make_app()

    response = _post(app, "/api/optimize-text", {"text": "", "mode": "pirate"}, {"x-api-provider": "google"})

    assert response.status_code == 400
    assert response.json()["error"] == "API key is required"


def test_optimize_text_empty_result_is_an_error(make_app):
    app, _ = make_app(json_body={"candidates": []})
    headers = {"x-api-provider": "google", "x-api-key": "g"}

    response = _post(app, "/api/optimize-text", {"text": "Draft.", "mode": "ai-guidance"}, headers)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "No optimized text generated"}


def test_connection_success(make_app):
    app, _ = make_app(json_body={"choices": [{"message": {"content": "Hello"}}]})

    response = _post(
        app,
        "/api/test-connection",
        {"provider": "openai", "apiKey": "sk-test", "model": "gpt-4o-mini"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Connection successful"}


def test_connection_failure_is_reported_with_ok_status(make_app):
    app, _ = make_app(status_code=401, json_body={"error": "invalid"})

    response = _post(
        app,
        "/api/test-connection",
        {"provider": "anthropic", "apiKey": "bad", "model": "claude-3-haiku"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": False, "message": "Connection failed"}


def test_connection_to_unreachable_ollama(make_app):
    app, upstream = make_app(error=httpx.ConnectError("connection refused"))

    response = _post(
        app,
        "/api/test-connection",
        {"provider": "ollama", "endpoint": "http://localhost:11434"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert str(upstream.last_request.url) == "http://localhost:11434/api/tags"


def test_connection_unsupported_provider(make_app):
    app, upstream = make_app()

    response = _post(app, "/api/test-connection", {"provider": "bard", "apiKey": "k", "model": "m"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Unsupported provider"}
    assert upstream.requests == []
