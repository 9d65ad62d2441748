"""
AI Writing Assistant backend: content generation and text optimization
over interchangeable LLM providers.
"""

__version__ = "0.1.0"
