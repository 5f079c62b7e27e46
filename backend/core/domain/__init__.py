# Domain types
# Pure business objects with no database or HTTP dependencies
from .content import (
    ContentType,
    GenerationMetadata,
    GenerationSettings,
    RepeatRule,
    ScheduleMetadata,
    VersionMetadata,
    VersionSource,
)
from .profile import (
    BusinessDetails,
    ContentPreferences,
    ProviderCredential,
    VoiceProfile,
    WritingStyle,
)

__all__ = [
    "ContentType",
    "GenerationSettings",
    "GenerationMetadata",
    "ScheduleMetadata",
    "VersionMetadata",
    "VersionSource",
    "RepeatRule",
    "BusinessDetails",
    "VoiceProfile",
    "WritingStyle",
    "ContentPreferences",
    "ProviderCredential",
]
