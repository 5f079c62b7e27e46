# AI Adapters
# Anthropic integration

from .anthropic_adapter import (
    AnthropicContentService,
    GeneratedText,
    content_ai_service,
    get_content_ai_service,
)

__all__ = [
    "AnthropicContentService",
    "GeneratedText",
    "content_ai_service",
    "get_content_ai_service",
]
