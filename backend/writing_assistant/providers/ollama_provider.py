from __future__ import annotations

import logging
from typing import Any, Dict

from writing_assistant.providers.base import (
    CompletionParams,
    LLMProvider,
    ProviderCredentials,
    as_text,
)

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    """LLM provider that calls a local Ollama HTTP API. No API key is needed."""

    name = "ollama"

    def _base_url(self, credentials: ProviderCredentials) -> str:
        return (credentials.endpoint or self._settings.ollama_base_url).rstrip("/")

    async def invoke(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> str:
        options: Dict[str, Any] = {"num_predict": params.max_tokens}
        if params.temperature is not None:
            options["temperature"] = params.temperature
        payload: Dict[str, Any] = {
            "model": credentials.model,
            "prompt": prompt,
            "stream": False,
            "options": options,
        }
        if params.system_prompt:
            payload["system"] = params.system_prompt
        logger.info(
            "Requesting completion from Ollama",
            extra={"model": credentials.model},
        )
        response = await self._send(
            "POST",
            f"{self._base_url(credentials)}/api/generate",
            json=payload,
        )
        return as_text(self._json_body(response).get("response"))

    async def check_connection(self, credentials: ProviderCredentials) -> bool:
        response = await self._send("GET", f"{self._base_url(credentials)}/api/tags")
        return bool(self._json_body(response))
