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


class AnthropicProvider(LLMProvider):
    """LLM provider that calls the Anthropic Messages API over plain HTTP."""

    name = "anthropic"

    async def _post_message(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> Dict[str, Any]:
        # The Messages API call carries only the user turn; no system prompt is sent.
        payload: Dict[str, Any] = {
            "model": credentials.model,
            "max_tokens": params.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if params.temperature is not None:
            payload["temperature"] = params.temperature
        logger.info(
            "Anthropic request: model=%s max_tokens=%s",
            credentials.model,
            params.max_tokens,
        )
        response = await self._send(
            "POST",
            f"{self._settings.anthropic_base_url.rstrip('/')}/v1/messages",
            headers={
                "x-api-key": credentials.api_key,
                "anthropic-version": self._settings.anthropic_version,
                "Content-Type": "application/json",
            },
            json=payload,
        )
        return self._json_body(response)

    async def invoke(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> str:
        data = await self._post_message(prompt, credentials, params)
        return as_text(first_item(data.get("content")).get("text"))

    async def check_connection(self, credentials: ProviderCredentials) -> bool:
        data = await self._post_message(PROBE_PROMPT, credentials, CONNECTION_PROBE)
        return bool(data)
