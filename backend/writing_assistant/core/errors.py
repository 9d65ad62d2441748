"""
Error kinds raised by the provider layer and the request services.

Every error carries the HTTP status the API boundary reports it with:
400 for request-shape problems, 500 for upstream and transport failures.
"""
from __future__ import annotations


class WritingAssistantError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = 500


class InvalidRequestError(WritingAssistantError):
    """The inbound request is malformed or incomplete."""

    status_code = 400


class MissingCredentialError(InvalidRequestError):
    def __init__(self, message: str = "API key is required") -> None:
        super().__init__(message)


class UnsupportedProviderError(InvalidRequestError):
    def __init__(self, provider: str | None, message: str = "Unsupported API provider") -> None:
        super().__init__(message)
        self.provider = provider


class InvalidModeError(InvalidRequestError):
    def __init__(self, mode: str | None) -> None:
        super().__init__("Invalid optimization mode")
        self.mode = mode


class ProviderError(WritingAssistantError):
    """The upstream provider answered with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, reason: str) -> None:
        super().__init__(f"{provider_label(provider)} API error: {reason or status_code}")
        self.provider = provider
        self.http_status = status_code


class TransportError(WritingAssistantError):
    """The upstream provider could not be reached (DNS, refused connection, timeout)."""

    def __init__(self, provider: str, cause: Exception) -> None:
        super().__init__(
            f"{provider_label(provider)} API request failed: {str(cause) or type(cause).__name__}"
        )
        self.provider = provider
        self.cause = cause


class EmptyResultError(WritingAssistantError):
    """The provider call succeeded but yielded no usable text."""


_LABELS = {
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "google": "Gemini",
    "ollama": "Ollama",
    "custom": "Custom",
}


def provider_label(provider: str) -> str:
    return _LABELS.get(provider, provider)
