"""
Service layer for business logic.
"""

from services.content_generator import ContentGenerator
from services.content_store import ContentStore
from services.profile_store import ProfileStore
from services.prompt_assembler import PromptAssemblyError, build_prompt
from services.schedule_recorder import ScheduleRecorder

__all__ = [
    "ContentGenerator",
    "ContentStore",
    "ProfileStore",
    "PromptAssemblyError",
    "ScheduleRecorder",
    "build_prompt",
]
