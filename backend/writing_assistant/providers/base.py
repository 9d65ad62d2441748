from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from writing_assistant.core.config import Settings, get_settings
from writing_assistant.core.errors import ProviderError, TransportError

logger = logging.getLogger(__name__)

PROBE_PROMPT = 'Say "Hello" if you can see this message.'
PROBE_MAX_TOKENS = 10


@dataclass(frozen=True)
class ProviderCredentials:
    """
    Per-request provider selection and secrets.

    Passed explicitly down the call chain and dropped with the request.
    The API key is excluded from repr so it cannot leak through logging.
    """

    provider: str
    api_key: str = field(default="", repr=False)
    model: str = ""
    endpoint: Optional[str] = None


@dataclass(frozen=True)
class CompletionParams:
    """Sampling settings that differ between call sites."""

    temperature: Optional[float]
    max_tokens: int
    system_prompt: Optional[str] = None


CONTENT_GENERATION = CompletionParams(
    temperature=0.7,
    max_tokens=4000,
    system_prompt=(
        "You are a professional writing assistant that creates high-quality, "
        "engaging content based on specific requirements and style guidelines."
    ),
)

# Rewriting runs hotter than generation to get more varied phrasing.
TEXT_OPTIMIZATION = CompletionParams(
    temperature=0.8,
    max_tokens=4000,
    system_prompt=(
        "You are an expert writing optimization assistant that helps make "
        "AI-generated text more natural, engaging, and human-like."
    ),
)

CONNECTION_PROBE = CompletionParams(temperature=None, max_tokens=PROBE_MAX_TOKENS)


@dataclass
class LLMResult:
    success: bool
    text: str = ""
    provider: str = ""
    model: str = ""


class LLMProvider(ABC):
    """
    Interface for LLM providers.

    Implementations translate a prompt into one provider-specific HTTP
    request, extract plain text from the response envelope, and expose a
    cheap connection probe. They perform no retries.
    """

    name: str = ""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings | None = None,
    ) -> None:
        self._client = client
        self._settings = settings or get_settings()

    @abstractmethod
    async def invoke(
        self,
        prompt: str,
        credentials: ProviderCredentials,
        params: CompletionParams,
    ) -> str:
        """
        Send the prompt and return the extracted text.

        Missing response fields yield an empty string; callers decide
        whether an empty result is an error.
        Raises ProviderError on a non-2xx status and TransportError when the
        provider cannot be reached.
        """
        ...

    @abstractmethod
    async def check_connection(self, credentials: ProviderCredentials) -> bool:
        """Issue the cheapest request that proves the configuration works. May raise."""
        ...

    async def probe(self, credentials: ProviderCredentials) -> bool:
        """
        Report whether the credentials and endpoint are usable.

        Never raises: every failure, including programming errors in a
        response handler, is reported as False.
        """
        try:
            return await self.check_connection(credentials)
        except Exception as exc:
            logger.info(
                "Connection probe failed",
                extra={"provider": self.name, "error": str(exc)},
            )
            return False

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(self.name, exc) from exc
        if not response.is_success:
            raise ProviderError(self.name, response.status_code, response.reason_phrase)
        return response

    @staticmethod
    def _json_body(response: httpx.Response) -> Dict[str, Any]:
        """Decode a JSON object body; anything else reads as an empty object."""
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return data if isinstance(data, dict) else {}


def first_item(value: Any) -> Dict[str, Any]:
    """Return value[0] when it is a dict inside a non-empty list, else {}."""
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return {}


def as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""
