from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, conint, constr


class StyleSettings(BaseModel):
    """
    Seven style axes for generated content.

    Values are free-form labels chosen in the UI and copied verbatim into
    the prompt; they are not validated against a closed set.
    """

    language: str = Field(default="clear and accessible", description="Language register.")
    structure: str = Field(default="well-organized sections", description="Structure of the piece.")
    narrative: str = Field(default="third person", description="Narrative perspective.")
    emotion: str = Field(default="neutral", description="Emotional tone.")
    creativity: str = Field(default="balanced", description="Creativity level.")
    formality: str = Field(default="semi-formal", description="Formality.")
    technicality: str = Field(default="general audience", description="Technical level.")


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: constr(strip_whitespace=True, min_length=1) = Field(
        ...,
        description="Subject of the article to write.",
    )
    keywords: List[str] = Field(
        default_factory=list,
        description="Keywords to weave into the text, in order. May be empty.",
    )
    word_count: conint(ge=1) = Field(
        default=800,
        alias="wordCount",
        description="Approximate target length. Advisory only; output is not trimmed.",
    )
    style: StyleSettings = Field(default_factory=StyleSettings)


class OptimizeTextRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Blank text is rejected by the service so it reports through the error envelope.
    text: str = Field(..., description="Text to rewrite.")
    mode: str = Field(
        ...,
        description="'human-characteristics', 'ai-guidance', or 'custom'.",
    )
    custom_instructions: Optional[str] = Field(
        default=None,
        alias="customInstructions",
        description="Instruction text used verbatim when mode is 'custom'.",
    )


class ConnectionTestRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(..., description="Provider identifier to probe.")
    api_key: str = Field(default="", alias="apiKey")
    model: str = Field(default="")
    endpoint: Optional[str] = Field(
        default=None,
        description="Base URL for the ollama and custom providers.",
    )


class GenerateContentResponse(BaseModel):
    success: bool = True
    content: str


class OptimizeTextResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    optimized_text: str = Field(..., alias="optimizedText")


class ConnectionTestResponse(BaseModel):
    success: bool
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
