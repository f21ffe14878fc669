"""
Domain records and API schemas
"""

from .status import StoryStage, CampaignStatus, WORK_STAGES
from .story import (
    TemplateFamily,
    Template,
    ModelConstraints,
    GenerationSettings,
    Scene,
    Story,
    StoryGenerationResult,
    clamp_story_duration,
    scenes_from_dicts,
)
from .api import (
    ModelConstraintsPayload,
    StoryRequest,
    CampaignRequest,
    StoryResponse,
    CampaignCreatedResponse,
    CampaignProgress,
    CampaignResponse,
)

__all__ = [
    # Status
    "StoryStage",
    "CampaignStatus",
    "WORK_STAGES",
    # Domain records
    "TemplateFamily",
    "Template",
    "ModelConstraints",
    "GenerationSettings",
    "Scene",
    "Story",
    "StoryGenerationResult",
    "clamp_story_duration",
    "scenes_from_dicts",
    # API
    "ModelConstraintsPayload",
    "StoryRequest",
    "CampaignRequest",
    "StoryResponse",
    "CampaignCreatedResponse",
    "CampaignProgress",
    "CampaignResponse",
]
