from __future__ import annotations

import logging
from typing import Dict, Type

import httpx

from writing_assistant.core.config import Settings
from writing_assistant.core.errors import MissingCredentialError, UnsupportedProviderError
from writing_assistant.providers.anthropic_provider import AnthropicProvider
from writing_assistant.providers.base import (
    CompletionParams,
    LLMProvider,
    LLMResult,
    ProviderCredentials,
)
from writing_assistant.providers.gemini_provider import GeminiProvider
from writing_assistant.providers.ollama_provider import OllamaProvider
from writing_assistant.providers.openai_provider import CustomProvider, OpenAIProvider

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "google": GeminiProvider,
    "ollama": OllamaProvider,
    "custom": CustomProvider,
}

# Providers that run without an API key.
KEYLESS_PROVIDERS: frozenset[str] = frozenset({"ollama"})


def get_provider(
    provider_name: str | None,
    client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> LLMProvider:
    """Return the LLM provider registered under the given name."""
    provider_cls = PROVIDERS.get((provider_name or "").strip().lower())
    if provider_cls is None:
        raise UnsupportedProviderError(provider_name)
    return provider_cls(client, settings)


def require_credentials(credentials: ProviderCredentials) -> None:
    """
    Reject credentials that cannot be used for a completion call.

    The API key check comes first and applies to any provider name,
    including unknown ones.
    """
    if not credentials.api_key and credentials.provider not in KEYLESS_PROVIDERS:
        raise MissingCredentialError()
    if credentials.provider == "custom" and not credentials.endpoint:
        raise MissingCredentialError("Endpoint is required for the custom provider")


async def dispatch(
    provider_name: str | None,
    prompt: str,
    credentials: ProviderCredentials,
    params: CompletionParams,
    client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> LLMResult:
    """
    Send one prompt to exactly one provider.

    No retries and no fallback: ProviderError and TransportError propagate
    to the caller unchanged. An empty ``text`` is returned as-is.
    """
    provider = get_provider(provider_name, client, settings)
    text = await provider.invoke(prompt, credentials, params)
    logger.info(
        "Provider call completed",
        extra={"provider": provider.name, "model": credentials.model, "chars": len(text)},
    )
    return LLMResult(
        success=bool(text),
        text=text,
        provider=provider.name,
        model=credentials.model,
    )


async def probe(
    provider_name: str | None,
    credentials: ProviderCredentials,
    client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> bool:
    """
    Check whether a provider configuration is usable.

    Raises UnsupportedProviderError for unknown names; for known providers
    every failure is reported as False.
    """
    provider = get_provider(provider_name, client, settings)
    try:
        require_credentials(credentials)
    except MissingCredentialError as exc:
        logger.info("Connection probe skipped", extra={"provider": provider.name, "error": str(exc)})
        return False
    return await provider.probe(credentials)
