"""Unit tests for prompt assembly."""

import pytest

from core.domain.content import GenerationSettings
from core.domain.profile import BusinessDetails, VoiceProfile
from core.exceptions import UnsupportedContentType
from services.prompt_assembler import (
    BLOG_TEMPLATE,
    LINKEDIN_TEMPLATE,
    TEMPLATES,
    TWITTER_TEMPLATE,
    PromptAssemblyError,
    build_prompt,
    sanitize_prompt_input,
    template_fields,
)


@pytest.fixture
def business() -> BusinessDetails:
    return BusinessDetails.model_validate({
        "businessName": "Acme Analytics",
        "industry": "Retail software",
        "description": "We build dashboards for small retailers",
        "targetAudience": "Store owners",
    })


@pytest.fixture
def voice() -> VoiceProfile:
    return VoiceProfile.model_validate({
        "writingStyle": {"formality": "formal", "complexity": "simple", "emotion": "empathetic"},
    })


def _settings(**overrides) -> GenerationSettings:
    data = {"type": "blog", "tone": "Professional", "targetAudience": "devs", "industry": "Tech"}
    data.update(overrides)
    return GenerationSettings.model_validate(data)


class TestTemplateFields:

    def test_blog_uses_length_and_complexity(self):
        fields = template_fields(BLOG_TEMPLATE)
        assert {"length", "complexity", "keywords", "tone", "topic"} <= fields

    def test_linkedin_has_no_length(self):
        fields = template_fields(LINKEDIN_TEMPLATE)
        assert "length" not in fields
        assert "complexity" in fields

    def test_twitter_has_no_length_or_complexity(self):
        fields = template_fields(TWITTER_TEMPLATE)
        assert "length" not in fields
        assert "complexity" not in fields
        assert "emotion" in fields

    def test_every_content_type_has_a_template(self):
        assert set(TEMPLATES) == {"blog", "linkedin", "twitter"}


class TestBuildPrompt:

    def test_blog_defaults(self, business, voice):
        prompt = build_prompt("blog", "AI trends", business, voice, _settings())

        assert "Length: 500-800 words" in prompt
        assert "Keywords to include: none specified" in prompt
        assert "Write a blog post about AI trends" in prompt
        assert "Acme Analytics, a Tech company" in prompt
        assert "resonates with devs" in prompt
        assert "- Formality: formal" in prompt
        assert "- Complexity: simple" in prompt
        assert "{" not in prompt

    def test_blog_uses_length_and_keywords(self, business, voice):
        settings = _settings(length=1200, keywords=["ai", " ml ", ""])
        prompt = build_prompt("blog", "AI trends", business, voice, settings)

        assert "Length: 1200 words" in prompt
        assert "Keywords to include: ai, ml" in prompt

    def test_twitter_prompt(self, business, voice):
        settings = _settings(type="twitter", tone="Playful")
        prompt = build_prompt("twitter", "Launch day", business, voice, settings)

        assert prompt.startswith("Create a Twitter/X post for Acme Analytics (Tech).")
        assert "Maximum 280 characters" in prompt
        assert "- Tone: Playful" in prompt
        assert "Complexity" not in prompt

    def test_linkedin_prompt(self, business, voice):
        prompt = build_prompt("linkedin", "Hiring", business, voice, _settings(type="linkedin"))

        assert "As a thought leader in Tech" in prompt
        assert "Maximum length: 3000 characters" in prompt

    def test_deterministic(self, business, voice):
        settings = _settings(keywords=["a", "b"])
        first = build_prompt("blog", "Topic", business, voice, settings)
        second = build_prompt("blog", "Topic", business, voice, settings)
        assert first == second

    def test_unsupported_type(self, business, voice):
        with pytest.raises(UnsupportedContentType) as exc_info:
            build_prompt("newsletter", "Topic", business, voice, _settings())
        assert exc_info.value.status_code == 400
        assert "newsletter" in exc_info.value.message

    def test_missing_business_name(self, voice):
        business = BusinessDetails(description="Something")
        with pytest.raises(PromptAssemblyError) as exc_info:
            build_prompt("blog", "Topic", business, voice, _settings())
        assert "businessName" in exc_info.value.details["missing"]

    def test_missing_writing_style(self, business):
        with pytest.raises(PromptAssemblyError) as exc_info:
            build_prompt("twitter", "Topic", business, VoiceProfile(), _settings(type="twitter"))
        assert exc_info.value.details["missing"] == ["emotion", "formality"]

    def test_control_characters_collapsed(self, business, voice):
        prompt = build_prompt("blog", "AI\ntrends\x00now", business, voice, _settings())
        assert "about AI trends now that" in prompt

    def test_braces_in_values_are_kept_literally(self, business, voice):
        prompt = build_prompt("blog", "{tone}", business, voice, _settings())
        assert "about {tone} that" in prompt


class TestSanitize:

    def test_truncates(self):
        assert sanitize_prompt_input("x" * 600, 500) == "x" * 500

    def test_empty(self):
        assert sanitize_prompt_input(None, 10) == ""
        assert sanitize_prompt_input("", 10) == ""
