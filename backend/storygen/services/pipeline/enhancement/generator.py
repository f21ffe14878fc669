"""
Storyboard Enhancer

Enriches validated scenes in batches: image prompts for every scene, voice
direction when voiceover is on, and either motion/transition choices
(static media) or video motion prompts (animated media).

A story is enhanced all-or-nothing: any failing batch fails the stage and
no partially enhanced scenes are returned.
"""

import copy
from typing import List, Optional, Sequence

from storygen.config.models import get_model_config, get_model_name
from storygen.core import get_logger
from storygen.models.story import GenerationSettings, Scene, Template
from storygen.services.infrastructure.parsing import require_json_object
from storygen.services.llm import GenerationClient, GenerationRequest
from storygen.services.pipeline.allocation import DurationPlan
from storygen.services.pipeline.prompts import (
    FINAL_TRANSITION,
    PromptStage,
    build_prompt,
    compute_constraints,
)

from .config import DEFAULT_VOICE_MOOD, ENHANCE_BATCH_SIZE, ENHANCE_MAX_TOKENS, MODEL_STEP
from .validation import validate_enhancement

logger = get_logger(__name__, component="storyboard_enhancer")


def batch_scenes(scenes: Sequence[Scene], batch_size: int) -> List[List[Scene]]:
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    return [list(scenes[i:i + batch_size]) for i in range(0, len(scenes), batch_size)]


def apply_fallbacks(scenes: Sequence[Scene], has_voiceover: bool) -> None:
    """Fill fields a model left empty from data the scene already has"""
    for scene in scenes:
        placeholders = {"imagePrompt": scene.description}
        if has_voiceover:
            placeholders["voiceText"] = scene.narration
            placeholders["voiceMood"] = DEFAULT_VOICE_MOOD
        scene.enrich(placeholders)

    if scenes:
        scenes[-1].transition_to_next = FINAL_TRANSITION


class StoryboardEnhancer:
    """
    Usage:
        enhancer = StoryboardEnhancer(client)
        scenes = await enhancer.enhance(settings, template, plan, scenes, title, script)
    """

    def __init__(
        self,
        client: GenerationClient,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        batch_size: int = ENHANCE_BATCH_SIZE,
    ):
        model_config = get_model_config(MODEL_STEP)
        self.client = client
        self.model = model or get_model_name(MODEL_STEP)
        self.temperature = model_config.temperature if temperature is None else temperature
        self.max_tokens = model_config.max_tokens or ENHANCE_MAX_TOKENS
        self.batch_size = batch_size

    async def enhance(
        self,
        settings: GenerationSettings,
        template: Template,
        plan: DurationPlan,
        scenes: Sequence[Scene],
        title: str = "",
        script: str = "",
    ) -> List[Scene]:
        """
        Enhance every scene and return enriched copies.

        The input scenes are not modified.

        Raises:
            GenerationCallError: A batch call failed
            SchemaValidationError: A batch response violates the contract
        """
        enhanced = [copy.deepcopy(scene) for scene in scenes]
        batches = batch_scenes(enhanced, self.batch_size)

        for batch_index, batch in enumerate(batches, start=1):
            constraints = compute_constraints(
                settings, template, plan, script=script, title=title, scenes=batch,
            )
            bundle = build_prompt(PromptStage.ENHANCE, settings, constraints)
            request = GenerationRequest.from_bundle(
                bundle,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )

            text = await self.client.generate(request)
            data = require_json_object(text, source="storyboard enhancement")
            updates = validate_enhancement(data, constraints)

            for scene in batch:
                scene.enrich(updates.get(scene.scene_number, {}))

            logger.debug(
                "Enhancement batch merged",
                extra={
                    "batch": batch_index,
                    "batches": len(batches),
                    "scene_numbers": list(constraints.batch_scene_numbers),
                },
            )

        apply_fallbacks(enhanced, has_voiceover=settings.has_voiceover and not template.is_ambient)

        logger.info(
            "Storyboard enhanced",
            extra={"scene_count": len(enhanced), "batches": len(batches)},
        )
        return enhanced
