"""
Story Domain Records

Shared records passed between pipeline stages:
- Template: narrative pattern with stage labels and scene-count bounds
- ModelConstraints: duration vocabulary and audio capability of a video model
- GenerationSettings: read-only input to every stage
- Scene: one timed unit, enriched stage by stage
- Story / StoryGenerationResult: the pipeline output

Wire format (to_dict/from_dict) uses camelCase keys.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from storygen.config.constants import (
    ASPECT_RATIOS,
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_STYLE,
    DEFAULT_MUSIC_VOLUME,
    DEFAULT_PACING,
    DEFAULT_VOICE_VOLUME,
    IMAGE_STYLES,
    MAX_STORY_DURATION,
    MAX_TOPIC_LENGTH,
    MEDIA_TYPES,
    MIN_STORY_DURATION,
    PACING_OPTIONS,
)
from storygen.core.exceptions import InvalidSettingsError, InvalidDurationError
from storygen.core.language import normalize_language


class TemplateFamily(str, Enum):
    """Content model of a template."""
    NARRATED = "narrated"
    AMBIENT = "ambient"  # independent scenes, no voiceover


@dataclass(frozen=True)
class Template:
    """
    A named narrative pattern.

    Attributes:
        id: Registry key (e.g. "problem-solution")
        name: Display name
        stages: Narrative stage labels, in order
        min_scenes / max_scenes: Hard scene-count bounds
        optimal_scene_count: Typical count for a mid-length story
        family: Narrated or ambient content
        avg_scene_duration: Divisor for unconstrained scene counts (None = pacing based)
        scene_duration_min / scene_duration_max: Per-scene range without model constraints
    """
    id: str
    name: str
    stages: Tuple[str, ...]
    min_scenes: int
    max_scenes: int
    optimal_scene_count: int
    family: TemplateFamily = TemplateFamily.NARRATED
    avg_scene_duration: Optional[float] = None
    scene_duration_min: int = 3
    scene_duration_max: int = 15
    description: str = ""

    @property
    def is_ambient(self) -> bool:
        return self.family == TemplateFamily.AMBIENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "stages": list(self.stages),
            "minScenes": self.min_scenes,
            "maxScenes": self.max_scenes,
            "optimalSceneCount": self.optimal_scene_count,
            "family": self.family.value,
            "sceneDurationMin": self.scene_duration_min,
            "sceneDurationMax": self.scene_duration_max,
            "description": self.description,
        }


@dataclass(frozen=True)
class ModelConstraints:
    """Discrete duration vocabulary of a downstream media model.

    supported_durations is normalised to a sorted tuple of unique positive ints.
    """
    id: str
    label: str
    supported_durations: Tuple[int, ...]
    has_audio: bool = False
    aspect_ratios: Tuple[str, ...] = tuple(ASPECT_RATIOS)

    def __post_init__(self):
        durations = tuple(sorted({int(d) for d in self.supported_durations}))
        if not durations:
            raise InvalidSettingsError(f"Model '{self.id}' has no supported durations")
        if durations[0] <= 0:
            raise InvalidDurationError(f"Model '{self.id}' has a non-positive duration: {durations[0]}")
        object.__setattr__(self, "supported_durations", durations)
        object.__setattr__(self, "aspect_ratios", tuple(self.aspect_ratios))

    @property
    def min_duration(self) -> int:
        return self.supported_durations[0]

    @property
    def max_duration(self) -> int:
        return self.supported_durations[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "supportedDurations": list(self.supported_durations),
            "minDuration": self.min_duration,
            "maxDuration": self.max_duration,
            "hasAudio": self.has_audio,
            "aspectRatios": list(self.aspect_ratios),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelConstraints":
        return cls(
            id=data.get("id", "custom"),
            label=data.get("label", data.get("id", "Custom model")),
            supported_durations=tuple(data.get("supportedDurations", ())),
            has_audio=bool(data.get("hasAudio", False)),
            aspect_ratios=tuple(data.get("aspectRatios", ASPECT_RATIOS)),
        )


@dataclass(frozen=True)
class GenerationSettings:
    """Caller-supplied settings, consumed read-only by every stage.

    Build through create(), which validates and clamps. Direct construction
    skips validation and is meant for tests and internal copies.
    """
    template: str
    topic: str
    duration: int
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    language: str = "en"
    image_style: str = DEFAULT_IMAGE_STYLE
    media_type: str = "static"
    has_voiceover: bool = True
    voice_volume: int = DEFAULT_VOICE_VOLUME
    background_music: Optional[str] = None
    music_volume: int = DEFAULT_MUSIC_VOLUME
    pacing: str = DEFAULT_PACING
    model_constraints: Optional[ModelConstraints] = None

    @property
    def is_animated(self) -> bool:
        return self.media_type == "animated"

    @classmethod
    def create(
        cls,
        template: str,
        topic: str,
        duration: float,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        language: str = "en",
        image_style: str = DEFAULT_IMAGE_STYLE,
        media_type: str = "static",
        has_voiceover: bool = True,
        voice_volume: int = DEFAULT_VOICE_VOLUME,
        background_music: Optional[str] = None,
        music_volume: int = DEFAULT_MUSIC_VOLUME,
        pacing: str = DEFAULT_PACING,
        model_constraints: Optional[ModelConstraints] = None,
        video_model: Optional[str] = None,
    ) -> "GenerationSettings":
        """
        Validate raw input and build settings.

        Raises:
            InvalidSettingsError: unknown template, empty or oversized topic,
                unknown aspect ratio, media type, pacing or video model
            InvalidDurationError: non-positive or non-finite duration
        """
        from storygen.services.catalog import get_template, get_video_model, DEFAULT_VIDEO_MODEL

        template_record = get_template(template)
        if template_record is None:
            raise InvalidSettingsError(f"Unknown template: {template!r}")

        clean_topic = (topic or "").strip()
        if not clean_topic:
            raise InvalidSettingsError("Topic must not be empty")
        if len(clean_topic) > MAX_TOPIC_LENGTH:
            raise InvalidSettingsError(
                f"Topic is {len(clean_topic)} characters, maximum is {MAX_TOPIC_LENGTH}"
            )

        if aspect_ratio not in ASPECT_RATIOS:
            raise InvalidSettingsError(f"Unsupported aspect ratio: {aspect_ratio!r}")
        if media_type not in MEDIA_TYPES:
            raise InvalidSettingsError(f"Unsupported media type: {media_type!r}")
        if pacing not in PACING_OPTIONS:
            raise InvalidSettingsError(f"Unsupported pacing: {pacing!r}")
        if image_style not in IMAGE_STYLES:
            image_style = DEFAULT_IMAGE_STYLE

        if template_record.is_ambient:
            # Ambient stories are always rendered as video clips without a voice
            media_type = "animated"
            has_voiceover = False
            if model_constraints is None and video_model is None:
                video_model = DEFAULT_VIDEO_MODEL

        if model_constraints is None and video_model:
            model_constraints = get_video_model(video_model)
            if model_constraints is None:
                raise InvalidSettingsError(f"Unknown video model: {video_model!r}")

        return cls(
            template=template_record.id,
            topic=clean_topic,
            duration=clamp_story_duration(duration),
            aspect_ratio=aspect_ratio,
            language=normalize_language(language),
            image_style=image_style,
            media_type=media_type,
            has_voiceover=has_voiceover,
            voice_volume=max(0, min(100, int(voice_volume))),
            background_music=background_music,
            music_volume=max(0, min(100, int(music_volume))),
            pacing=pacing,
            model_constraints=model_constraints,
        )


def clamp_story_duration(duration: float) -> int:
    """Round and clamp a requested duration into the supported range.

    Raises:
        InvalidDurationError: if the duration is non-numeric, non-finite or <= 0
    """
    try:
        value = float(duration)
    except (TypeError, ValueError):
        raise InvalidDurationError(f"Duration must be a number, got {duration!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidDurationError(f"Duration must be a positive finite number, got {duration!r}")
    return int(max(MIN_STORY_DURATION, min(MAX_STORY_DURATION, round(value))))


# Optional fields filled in by later stages, keyed by wire name
ENRICHABLE_FIELDS = {
    "imagePrompt": "image_prompt",
    "videoPrompt": "video_prompt",
    "voiceText": "voice_text",
    "voiceMood": "voice_mood",
    "animationName": "animation_name",
    "effectName": "effect_name",
    "transitionToNext": "transition_to_next",
}


@dataclass
class Scene:
    """
    One independent, timed unit of a story.

    Core fields come from the scene breakdown stage. Optional fields are
    added by enhancement and voice stages through enrich().
    """
    scene_number: int
    duration: int
    description: str
    sound_description: str = ""
    narration: str = ""
    image_prompt: Optional[str] = None
    video_prompt: Optional[str] = None
    voice_text: Optional[str] = None
    voice_mood: Optional[str] = None
    animation_name: Optional[str] = None
    effect_name: Optional[str] = None
    transition_to_next: Optional[str] = None

    def enrich(self, updates: Dict[str, Any]) -> None:
        """Fill optional fields from a wire-format dict.

        Fields that already hold a value are left untouched.
        """
        for wire_name, attr in ENRICHABLE_FIELDS.items():
            value = updates.get(wire_name)
            if value in (None, ""):
                continue
            if getattr(self, attr) in (None, ""):
                setattr(self, attr, value)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "sceneNumber": self.scene_number,
            "duration": self.duration,
            "description": self.description,
            "soundDescription": self.sound_description,
            "narration": self.narration,
        }
        for wire_name, attr in ENRICHABLE_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[wire_name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scene":
        scene = cls(
            scene_number=int(data.get("sceneNumber", 0)),
            duration=int(data.get("duration", 0)),
            description=data.get("description", ""),
            sound_description=data.get("soundDescription", ""),
            narration=data.get("narration", ""),
        )
        scene.enrich(data)
        return scene


@dataclass(frozen=True)
class Story:
    """A completed story."""
    title: str
    script: str
    scenes: Tuple[Scene, ...]
    duration: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "script": self.script,
            "scenes": [scene.to_dict() for scene in self.scenes],
            "duration": self.duration,
        }


@dataclass(frozen=True)
class StoryGenerationResult:
    """Outcome of one pipeline run.

    A failed result never carries a story.
    """
    success: bool
    story_id: str
    story: Optional[Story] = None
    error: Optional[str] = None
    failed_stage: Optional[str] = None
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.success and self.story is None:
            raise ValueError("A successful result requires a story")
        if not self.success and self.story is not None:
            raise ValueError("A failed result must not carry a story")

    @classmethod
    def succeeded(cls, story_id: str, story: Story, warnings: Sequence[str] = ()) -> "StoryGenerationResult":
        return cls(success=True, story_id=story_id, story=story, warnings=tuple(warnings))

    @classmethod
    def failed(
        cls,
        story_id: str,
        error: str,
        failed_stage: Optional[str] = None,
        warnings: Sequence[str] = (),
    ) -> "StoryGenerationResult":
        return cls(
            success=False,
            story_id=story_id,
            error=error,
            failed_stage=failed_stage,
            warnings=tuple(warnings),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "storyId": self.story_id,
            "warnings": list(self.warnings),
        }
        if self.story is not None:
            data["story"] = self.story.to_dict()
        if self.error is not None:
            data["error"] = self.error
        if self.failed_stage is not None:
            data["failedStage"] = self.failed_stage
        return data


def scenes_from_dicts(items: List[Dict[str, Any]]) -> List[Scene]:
    return [Scene.from_dict(item) for item in items]
