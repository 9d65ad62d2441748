"""
Single entrypoint for the AI Writing Assistant service.

Run from backend directory: uvicorn writing_assistant.main:app --reload
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from writing_assistant.api import register_routes
from writing_assistant.core.logging_config import configure_logging
from writing_assistant.schemas.content import ErrorResponse


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies in the same envelope as every other request error."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=f"Invalid request: {details}").model_dump(),
    )


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.
    """
    configure_logging()

    app = FastAPI(
        title="AI Writing Assistant",
        description=(
            "Backend for generating and rewriting written content through "
            "OpenAI, Anthropic, Google, Ollama or any OpenAI-compatible endpoint."
        ),
        version="0.1.0",
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    register_routes(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "writing_assistant.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
    )
