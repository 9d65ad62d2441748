from __future__ import annotations

import logging
from typing import Any, Dict

from writing_assistant.providers.base import (
    CONNECTION_PROBE,
    PROBE_PROMPT,
    CompletionParams,
    LLMProvider,
    ProviderCredentials,
    as_text,
    first_item,
)

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """
    LLM provider that calls the Google Generative Language API.

    The key is passed as the ``key`` query parameter. Requests always go to
    the configured ``gemini_model``; the caller's model name is not used.
    """

    name = "google"

    async def _generate(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {"maxOutputTokens": params.max_tokens}
        if params.temperature is not None:
            generation_config = {"temperature": params.temperature, **generation_config}
        model_id = self._settings.gemini_model
        logger.info("Gemini request: model=%s max_tokens=%s", model_id, params.max_tokens)
        response = await self._send(
            "POST",
            f"{self._settings.gemini_base_url.rstrip('/')}/models/{model_id}:generateContent",
            params={"key": credentials.api_key},
            headers={"Content-Type": "application/json"},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": generation_config,
            },
        )
        return self._json_body(response)

    async def invoke(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> str:
        data = await self._generate(prompt, credentials, params)
        content = first_item(data.get("candidates")).get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        return as_text(first_item(parts).get("text"))

    async def check_connection(self, credentials: ProviderCredentials) -> bool:
        data = await self._generate(PROBE_PROMPT, credentials, CONNECTION_PROBE)
        return bool(data)
