from __future__ import annotations

import logging

import httpx

from writing_assistant.core.config import Settings, get_settings
from writing_assistant.core.errors import (
    EmptyResultError,
    InvalidRequestError,
    UnsupportedProviderError,
)
from writing_assistant.providers import (
    CONTENT_GENERATION,
    PROVIDERS,
    TEXT_OPTIMIZATION,
    LLMResult,
    ProviderCredentials,
    dispatch,
    probe,
    require_credentials,
)
from writing_assistant.schemas.content import (
    ConnectionTestRequest,
    GenerateContentRequest,
    OptimizeTextRequest,
)
from writing_assistant.utils.prompt_builder import (
    build_generation_prompt,
    build_optimization_prompt,
)


logger = logging.getLogger(__name__)


def normalize_provider(provider_name: str | None) -> str:
    return (provider_name or "").strip().lower()


class ContentService:
    """
    Application service for the three writing operations.

    Each call assembles a prompt, sends it to exactly one provider through
    the dispatcher and validates the result. Route handlers stay thin.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        self._client = client
        self._settings = settings or get_settings()

    async def generate_content(
        self,
        request: GenerateContentRequest,
        credentials: ProviderCredentials,
    ) -> LLMResult:
        require_credentials(credentials)
        prompt = build_generation_prompt(request)
        logger.info(
            "Generating content",
            extra={
                "provider": credentials.provider,
                "model": credentials.model,
                "word_count": request.word_count,
                "keywords": len(request.keywords),
            },
        )
        result = await dispatch(
            credentials.provider,
            prompt,
            credentials,
            CONTENT_GENERATION,
            self._client,
            self._settings,
        )
        if not result.text:
            raise EmptyResultError("No content generated")
        return result

    async def optimize_text(
        self,
        request: OptimizeTextRequest,
        credentials: ProviderCredentials,
    ) -> LLMResult:
        require_credentials(credentials)
        if not request.text.strip():
            raise InvalidRequestError("Text to optimize is required")
        prompt = build_optimization_prompt(
            request.text,
            request.mode,
            request.custom_instructions,
        )
        logger.info(
            "Optimizing text",
            extra={"provider": credentials.provider, "model": credentials.model, "mode": request.mode},
        )
        result = await dispatch(
            credentials.provider,
            prompt,
            credentials,
            TEXT_OPTIMIZATION,
            self._client,
            self._settings,
        )
        if not result.text:
            raise EmptyResultError("No optimized text generated")
        return result

    async def test_connection(self, request: ConnectionTestRequest) -> bool:
        provider_name = normalize_provider(request.provider)
        if provider_name not in PROVIDERS:
            raise UnsupportedProviderError(request.provider, "Unsupported provider")
        credentials = ProviderCredentials(
            provider=provider_name,
            api_key=request.api_key,
            model=request.model,
            endpoint=request.endpoint or None,
        )
        connected = await probe(provider_name, credentials, self._client, self._settings)
        logger.info(
            "Connection test finished",
            extra={"provider": provider_name, "model": request.model, "connected": connected},
        )
        return connected
