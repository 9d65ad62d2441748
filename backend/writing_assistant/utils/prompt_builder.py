from __future__ import annotations

from typing import Dict, Optional, Sequence

from writing_assistant.core.errors import InvalidModeError
from writing_assistant.schemas.content import GenerateContentRequest, StyleSettings

CUSTOM_MODE = "custom"

OPTIMIZATION_TEMPLATES: Dict[str, str] = {
    "human-characteristics": """
Optimize the following text to make it more human-like and natural. Focus on these seven key characteristics:

1. **Perplexity Variation**: Add varied sentence complexity and length
2. **Burstiness**: Mix short punchy sentences with longer, more complex ones
3. **Natural Flow**: Ensure ideas connect smoothly and logically
4. **Conversational Elements**: Include subtle conversational markers and transitions
5. **Emotional Nuance**: Add appropriate emotional undertones where suitable
6. **Stylistic Variety**: Vary sentence structures and paragraph lengths
7. **Authentic Voice**: Make the writing sound like it comes from a real person with expertise

Keep the core meaning and information intact while making these improvements.
""".strip(),
    "ai-guidance": """
Analyze the following text and provide a comprehensive rewriting strategy. Include:

1. **Current Issues**: Identify characteristics that make it sound AI-generated
2. **Improvement Areas**: Specific aspects that need enhancement
3. **Rewriting Strategy**: Step-by-step approach for humanizing the content
4. **Optimized Version**: The improved text following your strategy
5. **Key Changes**: Summary of what was modified and why

Focus on making the text more engaging, natural, and human-like while preserving all important information.
""".strip(),
}


def build_keyword_clause(keywords: Sequence[str]) -> str:
    cleaned = [k.strip() for k in keywords if k and k.strip()]
    if not cleaned:
        return ""
    return f"Include these keywords naturally: {', '.join(cleaned)}"


def build_style_block(style: StyleSettings) -> str:
    return f"""
Style Requirements:
- Language Style: {style.language}
- Structure: {style.structure}
- Narrative Perspective: {style.narrative}
- Emotional Tone: {style.emotion}
- Creativity Level: {style.creativity}
- Formality: {style.formality}
- Technical Level: {style.technicality}
""".strip()


def build_generation_prompt(request: GenerateContentRequest) -> str:
    """
    Assemble the article-writing prompt from a generation request.

    The keyword clause is left out entirely when there are no keywords.
    """
    sections = [
        f'Write a comprehensive article about "{request.topic}" '
        f"with approximately {request.word_count} words."
    ]
    keyword_clause = build_keyword_clause(request.keywords)
    if keyword_clause:
        sections.append(keyword_clause)
    sections.append(build_style_block(request.style))
    sections.append(
        """
Please create engaging, high-quality content that:
1. Has a compelling introduction that hooks the reader
2. Follows a logical structure with clear sections
3. Includes specific examples and actionable insights
4. Maintains the specified style and tone throughout
5. Concludes with a strong summary or call-to-action

The content should be original, informative, and valuable to readers interested in this topic.
""".strip()
    )
    return "\n\n".join(sections)


def resolve_optimization_instructions(
    mode: Optional[str],
    custom_instructions: Optional[str] = None,
) -> str:
    """Return the instruction text for an optimization mode, or raise InvalidModeError."""
    name = (mode or "").strip()
    if name == CUSTOM_MODE:
        if custom_instructions and custom_instructions.strip():
            return custom_instructions
        raise InvalidModeError(mode)
    template = OPTIMIZATION_TEMPLATES.get(name)
    if template is None:
        raise InvalidModeError(mode)
    return template


def build_optimization_prompt(
    text: str,
    mode: Optional[str],
    custom_instructions: Optional[str] = None,
) -> str:
    instructions = resolve_optimization_instructions(mode, custom_instructions)
    return f"{instructions}\n\nText to optimize:\n\n{text}"
