import logging
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from writing_assistant.core.config import get_settings
from writing_assistant.core.errors import WritingAssistantError
from writing_assistant.providers import ProviderCredentials
from writing_assistant.schemas.content import (
    ConnectionTestRequest,
    ConnectionTestResponse,
    ErrorResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    OptimizeTextRequest,
    OptimizeTextResponse,
)
from writing_assistant.services.content_service import ContentService, normalize_provider


logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing key, unsupported provider or invalid input"},
    500: {"model": ErrorResponse, "description": "Provider call failed"},
}


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Outbound HTTP client for one inbound request; closed when the request ends."""
    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
        yield client


def get_service(client: httpx.AsyncClient = Depends(get_http_client)) -> ContentService:
    return ContentService(client)


def get_credentials(
    x_api_provider: Optional[str] = Header(default=None),
    x_api_key: Optional[str] = Header(default=None),
    x_api_model: Optional[str] = Header(default=None),
    x_api_endpoint: Optional[str] = Header(default=None),
) -> ProviderCredentials:
    """
    Collect provider settings sent by the browser as x-api-* headers.
    """
    settings = get_settings()
    return ProviderCredentials(
        provider=normalize_provider(x_api_provider or settings.default_provider),
        api_key=(x_api_key or "").strip(),
        model=x_api_model or settings.default_model,
        endpoint=x_api_endpoint or None,
    )


def _error_response(exc: Exception) -> JSONResponse:
    status_code = getattr(exc, "status_code", status.HTTP_500_INTERNAL_SERVER_ERROR)
    message = str(exc) or "Unknown error occurred"
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/generate-content",
    response_model=GenerateContentResponse,
    responses=_ERROR_RESPONSES,
    summary="Generate an article with the selected provider",
)
async def generate_content(
    payload: GenerateContentRequest,
    credentials: ProviderCredentials = Depends(get_credentials),
    service: ContentService = Depends(get_service),
) -> GenerateContentResponse | JSONResponse:
    try:
        result = await service.generate_content(payload, credentials)
    except WritingAssistantError as exc:
        logger.warning("Content generation error: %s", exc, extra={"provider": credentials.provider})
        return _error_response(exc)
    except Exception as exc:
        logger.exception("Content generation error")
        return _error_response(exc)
    return GenerateContentResponse(content=result.text)


@router.post(
    "/optimize-text",
    response_model=OptimizeTextResponse,
    responses=_ERROR_RESPONSES,
    summary="Rewrite text with a named or custom optimization strategy",
)
async def optimize_text(
    payload: OptimizeTextRequest,
    credentials: ProviderCredentials = Depends(get_credentials),
    service: ContentService = Depends(get_service),
) -> OptimizeTextResponse | JSONResponse:
    try:
        result = await service.optimize_text(payload, credentials)
    except WritingAssistantError as exc:
        logger.warning("Text optimization error: %s", exc, extra={"provider": credentials.provider})
        return _error_response(exc)
    except Exception as exc:
        logger.exception("Text optimization error")
        return _error_response(exc)
    return OptimizeTextResponse(optimized_text=result.text)


@router.post(
    "/test-connection",
    response_model=ConnectionTestResponse,
    responses={400: _ERROR_RESPONSES[400]},
    summary="Check that a provider configuration is usable",
)
async def test_connection(
    payload: ConnectionTestRequest,
    service: ContentService = Depends(get_service),
) -> ConnectionTestResponse | JSONResponse:
    """
    Unreachable providers and rejected keys are reported as success=false
    with HTTP 200.
    """
    try:
        connected = await service.test_connection(payload)
    except WritingAssistantError as exc:
        logger.warning("Connection test error: %s", exc)
        return _error_response(exc)
    return ConnectionTestResponse(
        success=connected,
        message="Connection successful" if connected else "Connection failed",
    )
