"""
Computed Constraints

One value object holds every number a stage prompt mentions: scene count,
duration plan, word targets. Prompt text and response schemas both read
from it, so the two cannot disagree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

from storygen.core.language import get_language_name, words_per_second
from storygen.models.story import GenerationSettings, Scene, Template
from storygen.services.pipeline.allocation import DurationPlan, scene_duration_range

# Accepted spread around the script word target
SCRIPT_WORD_TOLERANCE_LOW = 0.85
SCRIPT_WORD_TOLERANCE_HIGH = 1.15

ENHANCEMENT_MODE_TRANSITION = "transition"
ENHANCEMENT_MODE_IMAGE_TO_VIDEO = "image-to-video"


@dataclass(frozen=True)
class ComputedConstraints:
    """
    Inputs shared by prompt text and response schema for one stage call.

    Attributes:
        template: Template being rendered
        language / language_name: Narration language
        scene_count: Scenes in the whole story
        total_duration: Target sum of scene durations (seconds)
        durations: Planned per-scene durations
        supported_durations: Allowed values when a video model constrains clips
        scene_duration_min / scene_duration_max: Allowed range otherwise
        has_audio: Video model renders its own sound
        is_ambient: No narration allowed
        has_voiceover: Voice fields requested from enhancement
        words_per_second: Reading speed for the language
        total_word_target: Narration words for the whole story
        scene_word_targets: Narration words per planned scene
        script / title: Script stage output (SCENES and ENHANCE)
        scenes: Scenes to enhance in this batch (ENHANCE)
        enhancement_mode: "transition" (static) or "image-to-video" (animated)
    """
    template: Template
    topic: str
    language: str
    language_name: str
    scene_count: int
    total_duration: int
    durations: Tuple[int, ...]
    supported_durations: Optional[Tuple[int, ...]]
    scene_duration_min: int
    scene_duration_max: int
    has_audio: bool
    is_ambient: bool
    has_voiceover: bool
    words_per_second: float
    total_word_target: int
    scene_word_targets: Tuple[int, ...]
    image_style: str
    aspect_ratio: str
    pacing: str
    enhancement_mode: str
    script: str = ""
    title: str = ""
    scenes: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    @property
    def is_constrained(self) -> bool:
        return self.supported_durations is not None

    @property
    def script_word_min(self) -> int:
        return round(self.total_word_target * SCRIPT_WORD_TOLERANCE_LOW)

    @property
    def script_word_max(self) -> int:
        return round(self.total_word_target * SCRIPT_WORD_TOLERANCE_HIGH)

    @property
    def batch_scene_numbers(self) -> Tuple[int, ...]:
        return tuple(int(scene["sceneNumber"]) for scene in self.scenes)

    def allowed_duration(self, value: int) -> bool:
        if self.supported_durations is not None:
            return value in self.supported_durations
        return self.scene_duration_min <= value <= self.scene_duration_max


def compute_constraints(
    settings: GenerationSettings,
    template: Template,
    plan: DurationPlan,
    script: str = "",
    title: str = "",
    scenes: Sequence[Scene] = (),
) -> ComputedConstraints:
    """Derive the constraints for a stage call from settings and the duration plan."""
    model = settings.model_constraints
    wps = words_per_second(settings.language)
    duration_min, duration_max = scene_duration_range(template)

    is_ambient = template.is_ambient
    if is_ambient:
        total_words = 0
        scene_words: Tuple[int, ...] = tuple(0 for _ in plan.durations)
    else:
        total_words = round(plan.allocated_total * wps)
        scene_words = tuple(round(d * wps) for d in plan.durations)

    animated = settings.is_animated and model is not None

    return ComputedConstraints(
        template=template,
        topic=settings.topic,
        language=settings.language,
        language_name=get_language_name(settings.language),
        scene_count=plan.scene_count,
        total_duration=plan.allocated_total,
        durations=plan.durations,
        supported_durations=model.supported_durations if model is not None else None,
        scene_duration_min=duration_min,
        scene_duration_max=duration_max,
        has_audio=bool(model is not None and model.has_audio),
        is_ambient=is_ambient,
        has_voiceover=settings.has_voiceover and not is_ambient,
        words_per_second=wps,
        total_word_target=total_words,
        scene_word_targets=scene_words,
        image_style=settings.image_style,
        aspect_ratio=settings.aspect_ratio,
        pacing=settings.pacing,
        enhancement_mode=ENHANCEMENT_MODE_IMAGE_TO_VIDEO if animated else ENHANCEMENT_MODE_TRANSITION,
        script=script,
        title=title,
        scenes=tuple(scene.to_dict() for scene in scenes),
    )
