from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

import openai
from openai import AsyncOpenAI

from writing_assistant.core.errors import MissingCredentialError, ProviderError, TransportError
from writing_assistant.providers.base import (
    CONNECTION_PROBE,
    PROBE_PROMPT,
    CompletionParams,
    LLMProvider,
    ProviderCredentials,
    as_text,
)

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """
    LLM provider that calls the OpenAI Chat Completions API.

    The SDK client is bound to the request's shared httpx client and has
    its built-in retries disabled, so every call is a single POST to
    ``{base_url}/chat/completions``.
    """

    name = "openai"

    def _base_url(self, credentials: ProviderCredentials) -> str:
        return self._settings.openai_base_url

    def _sdk_client(self, credentials: ProviderCredentials) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=credentials.api_key,
            base_url=self._base_url(credentials),
            http_client=self._client,
            max_retries=0,
        )

    async def _create(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> Any:
        messages: List[Dict[str, str]] = []
        if params.system_prompt:
            messages.append({"role": "system", "content": params.system_prompt})
        messages.append({"role": "user", "content": prompt})
        extra: Dict[str, Any] = {}
        if params.temperature is not None:
            extra["temperature"] = params.temperature

        logger.info(
            "%s request: model=%s max_tokens=%s",
            self.name,
            credentials.model,
            params.max_tokens,
        )
        try:
            return await self._sdk_client(credentials).chat.completions.create(
                model=credentials.model,
                messages=messages,
                max_tokens=params.max_tokens,
                **extra,
            )
        except openai.APIStatusError as exc:
            raise ProviderError(self.name, exc.status_code, exc.response.reason_phrase) from exc
        except openai.APIConnectionError as exc:
            raise TransportError(self.name, exc.__cause__ or exc) from exc

    async def invoke(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> str:
        try:
            response = await self._create(prompt, credentials, params)
        except (json.JSONDecodeError, openai.APIResponseValidationError):
            logger.warning("%s returned a body that is not valid JSON", self.name)
            return ""
        # The SDK hands back plain text when the body is not JSON.
        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        return as_text(getattr(message, "content", None))

    async def check_connection(self, credentials: ProviderCredentials) -> bool:
        response = await self._create(PROBE_PROMPT, credentials, CONNECTION_PROBE)
        return bool(getattr(response, "choices", None))


class CustomProvider(OpenAIProvider):
    """Any OpenAI-compatible server reachable at a caller-supplied base URL."""

    name = "custom"

    def _base_url(self, credentials: ProviderCredentials) -> str:
        if not credentials.endpoint:
            raise MissingCredentialError("Endpoint is required for the custom provider")
        return credentials.endpoint.rstrip("/")
