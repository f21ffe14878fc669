"""
Pydantic models for API request/response schemas
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storygen.config.constants import (
    ASPECT_RATIOS,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_STYLE,
    DEFAULT_MUSIC_VOLUME,
    DEFAULT_PACING,
    DEFAULT_VOICE_VOLUME,
)

from .story import GenerationSettings, ModelConstraints


# === Request Models ===

class ModelConstraintsPayload(BaseModel):
    """Custom video model constraints"""
    id: str = "custom"
    label: str = "Custom model"
    supported_durations: List[int]
    has_audio: bool = False
    aspect_ratios: List[str] = Field(default_factory=lambda: list(ASPECT_RATIOS))

    def to_domain(self) -> ModelConstraints:
        return ModelConstraints(
            id=self.id,
            label=self.label,
            supported_durations=tuple(self.supported_durations),
            has_audio=self.has_audio,
            aspect_ratios=tuple(self.aspect_ratios),
        )


class StoryRequest(BaseModel):
    """Request to generate one story

    Validation happens in GenerationSettings.create() so HTTP and in-process
    callers share the same rules.
    """
    model_config = ConfigDict(protected_namespaces=())

    template: str
    topic: str
    duration: float = 30
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    language: str = "en"
    image_style: str = DEFAULT_IMAGE_STYLE
    media_type: str = "static"
    has_voiceover: bool = True
    voice_volume: int = DEFAULT_VOICE_VOLUME
    background_music: Optional[str] = None
    music_volume: int = DEFAULT_MUSIC_VOLUME
    pacing: str = DEFAULT_PACING
    video_model: Optional[str] = None  # Catalog id, e.g. "veo-3.0"
    model_constraints: Optional[ModelConstraintsPayload] = None

    def to_settings(self, topic: Optional[str] = None) -> GenerationSettings:
        return GenerationSettings.create(
            template=self.template,
            topic=self.topic if topic is None else topic,
            duration=self.duration,
            aspect_ratio=self.aspect_ratio,
            language=self.language,
            image_style=self.image_style,
            media_type=self.media_type,
            has_voiceover=self.has_voiceover,
            voice_volume=self.voice_volume,
            background_music=self.background_music,
            music_volume=self.music_volume,
            pacing=self.pacing,
            model_constraints=self.model_constraints.to_domain() if self.model_constraints else None,
            video_model=self.video_model,
        )


class CampaignRequest(BaseModel):
    """Request to generate one story per topic with shared settings"""
    topics: List[str] = Field(min_length=1)
    settings: StoryRequest
    max_concurrent: Optional[int] = Field(default=None, ge=1, le=20)


# === Response Models ===

class StoryResponse(BaseModel):
    """Result of a story generation run"""
    success: bool
    storyId: str
    story: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    failedStage: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class CampaignCreatedResponse(BaseModel):
    """Campaign accepted for background processing"""
    campaign_id: str
    status: str
    total: int


class CampaignProgress(BaseModel):
    total: int
    completed: int
    failed: int
    in_progress: int
    pending: int


class CampaignResponse(BaseModel):
    """Campaign status with per-story progress"""
    id: str
    status: str
    maxConcurrent: int
    progress: CampaignProgress
    items: List[Dict[str, Any]]
    error: Optional[str] = None
    created_at: str
    updated_at: str
