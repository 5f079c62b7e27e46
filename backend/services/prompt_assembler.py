"""
Prompt assembly for content generation.

Each content type has a fixed template. The placeholders a template needs
are read from the template text itself, so adding a field to a template is
enough to make it required.
"""

import re
import string
from typing import Optional

from core.domain.content import ContentType, GenerationSettings
from core.domain.profile import BusinessDetails, VoiceProfile
from core.exceptions import UnsupportedContentType, ValidationFailed

DEFAULT_LENGTH = "500-800"
DEFAULT_KEYWORDS = "none specified"

TOPIC_MAX_LENGTH = 500
TEXT_MAX_LENGTH = 2000

BLOG_TEMPLATE = """\
You are a professional content writer for {businessName}, a {industry} company.
Write a blog post about {topic} that resonates with {targetAudience}.

Business Context:
{businessDescription}

Writing Style:
- Formality: {formality}
- Complexity: {complexity}
- Emotional Tone: {emotion}

Additional Requirements:
- Length: {length} words
- Keywords to include: {keywords}
- Maintain a {tone} tone throughout the content

The blog post should be informative, engaging, and aligned with our brand voice.
Include a compelling headline, clear structure, and a strong call-to-action."""

LINKEDIN_TEMPLATE = """\
As a thought leader in {industry}, create a LinkedIn post for {businessName}.

Topic: {topic}
Target Audience: {targetAudience}

Business Context:
{businessDescription}

Writing Style:
- Formality: {formality}
- Complexity: {complexity}
- Emotional Tone: {emotion}

Requirements:
- Keep it professional yet engaging
- Include relevant hashtags
- Maximum length: 3000 characters
- Keywords to include: {keywords}
- Maintain a {tone} tone

Focus on providing value and encouraging engagement."""

TWITTER_TEMPLATE = """\
Create a Twitter/X post for {businessName} ({industry}).

Topic: {topic}
Target Audience: {targetAudience}

Key Message:
{businessDescription}

Style:
- Tone: {tone}
- Formality: {formality}
- Emotion: {emotion}

Requirements:
- Maximum 280 characters
- Include relevant hashtags
- Keywords: {keywords}
- Make it engaging and shareable"""

TEMPLATES: dict[ContentType, str] = {
    ContentType.BLOG: BLOG_TEMPLATE,
    ContentType.LINKEDIN: LINKEDIN_TEMPLATE,
    ContentType.TWITTER: TWITTER_TEMPLATE,
}


class PromptAssemblyError(ValidationFailed):
    """A template placeholder had no value."""

    default_message = "Prompt could not be assembled"


def template_fields(template: str) -> set[str]:
    """Names of the placeholders used by a template."""
    return {
        field_name
        for _, field_name, _, _ in string.Formatter().parse(template)
        if field_name
    }


def sanitize_prompt_input(text: Optional[str], max_length: int) -> str:
    """Strip control characters and limit length to prevent prompt injection."""
    if not text:
        return ""
    text = re.sub(r"[\r\n\t\x00-\x1f\x7f]", " ", str(text))
    text = re.sub(r" +", " ", text).strip()
    return text[:max_length]


def _resolve_type(content_type) -> ContentType:
    try:
        return ContentType(content_type)
    except ValueError:
        raise UnsupportedContentType(f"Unsupported content type: {content_type}")


def build_prompt(
    content_type,
    topic: str,
    business: BusinessDetails,
    voice: VoiceProfile,
    settings: GenerationSettings,
) -> str:
    """
    Render the prompt for one generation request.

    Args:
        content_type: blog, linkedin or twitter
        topic: What the content is about
        business: Business details from the profile
        voice: Voice profile (its writing style supplies formality,
            complexity and emotion)
        settings: Validated per-request settings

    Returns:
        The rendered prompt

    Raises:
        UnsupportedContentType: unknown content type, before any substitution
        PromptAssemblyError: a placeholder the template uses has no value
    """
    template = TEMPLATES.get(_resolve_type(content_type))
    if template is None:
        raise UnsupportedContentType(f"Unsupported content type: {content_type}")

    style = voice.writing_style
    values = {
        "topic": sanitize_prompt_input(topic, TOPIC_MAX_LENGTH),
        "businessName": sanitize_prompt_input(business.business_name, TEXT_MAX_LENGTH),
        "businessDescription": sanitize_prompt_input(business.description, TEXT_MAX_LENGTH),
        "industry": sanitize_prompt_input(settings.industry or business.industry, TEXT_MAX_LENGTH),
        "targetAudience": sanitize_prompt_input(
            settings.target_audience or business.target_audience, TEXT_MAX_LENGTH
        ),
        "formality": style.formality.value if style else "",
        "complexity": style.complexity.value if style else "",
        "emotion": style.emotion.value if style else "",
        "tone": sanitize_prompt_input(settings.tone, TEXT_MAX_LENGTH),
        "length": str(settings.length) if settings.length else DEFAULT_LENGTH,
        "keywords": sanitize_prompt_input(", ".join(settings.keywords or []), TEXT_MAX_LENGTH)
        or DEFAULT_KEYWORDS,
    }

    missing = sorted(name for name in template_fields(template) if not values.get(name))
    if missing:
        raise PromptAssemblyError(
            f"Missing values for prompt fields: {', '.join(missing)}",
            details={"missing": missing},
        )

    return template.format(**values)
