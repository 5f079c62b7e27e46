"""Profile domain types: business context, voice profile, content preferences."""
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Formality(str, Enum):
    CASUAL = "casual"
    NEUTRAL = "neutral"
    FORMAL = "formal"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class Emotion(str, Enum):
    NEUTRAL = "neutral"
    PASSIONATE = "passionate"
    EMPATHETIC = "empathetic"


class BusinessDetails(BaseModel):
    """Business context collected during onboarding. Unknown keys are kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", str_strip_whitespace=True)

    business_name: str = Field("", alias="businessName", max_length=255)
    industry: str = Field("", max_length=200)
    description: str = Field("", max_length=5000)
    target_audience: str = Field("", alias="targetAudience", max_length=500)

    @property
    def is_complete(self) -> bool:
        return all((self.business_name, self.industry, self.description, self.target_audience))


class WritingStyle(BaseModel):
    formality: Formality
    complexity: Complexity
    emotion: Emotion


class WritingSample(BaseModel):
    text: str = Field(..., min_length=1, max_length=10000)
    type: Literal["blog", "social", "custom"] = "custom"


class VoiceProfile(BaseModel):
    """Voice and style preferences."""

    model_config = ConfigDict(populate_by_name=True)

    writing_style: Optional[WritingStyle] = Field(None, alias="writingStyle")
    writing_samples: list[WritingSample] = Field(default_factory=list, alias="writingSamples")
    influencers: list[str] = Field(default_factory=list)


class ContentTypeToggles(BaseModel):
    blog: bool = False
    linkedin: bool = False
    twitter: bool = False


class ContentPreferences(BaseModel):
    """Which content types, topics, tones and goals the user cares about."""

    model_config = ConfigDict(populate_by_name=True)

    content_types: ContentTypeToggles = Field(default_factory=ContentTypeToggles, alias="contentTypes")
    topics: list[str] = Field(default_factory=list)
    tones: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)


def onboarding_complete(business: BusinessDetails, voice: VoiceProfile) -> bool:
    """Onboarding is done once the business context and the writing style are filled in."""
    return business.is_complete and voice.writing_style is not None


@dataclass(frozen=True)
class ProviderCredential:
    """The user's API key for the generation provider."""

    api_key: str

    def masked(self) -> str:
        if len(self.api_key) <= 8:
            return "****"
        return f"{self.api_key[:3]}...{self.api_key[-4:]}"

    def __repr__(self) -> str:
        return f"ProviderCredential(api_key={self.masked()!r})"
