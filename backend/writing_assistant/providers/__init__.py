"""
LLM provider abstraction layer.

All provider-specific request and response handling lives in provider
implementations. Services depend only on dispatch() and probe().
"""

from writing_assistant.providers.base import (
    CONTENT_GENERATION,
    TEXT_OPTIMIZATION,
    CompletionParams,
    LLMProvider,
    LLMResult,
    ProviderCredentials,
)
from writing_assistant.providers.factory import (
    PROVIDERS,
    dispatch,
    get_provider,
    probe,
    require_credentials,
)

__all__ = [
    "CONTENT_GENERATION",
    "PROVIDERS",
    "TEXT_OPTIMIZATION",
    "CompletionParams",
    "LLMProvider",
    "LLMResult",
    "ProviderCredentials",
    "dispatch",
    "get_provider",
    "probe",
    "require_credentials",
]
