"""
Scene Breakdown Generator

Splits a script into timed scenes with one structured call. The response
schema pins scene count, duration vocabulary and required-empty fields;
validation re-checks all of it.
"""

from typing import List, Optional

from storygen.config.models import get_model_config, get_model_name
from storygen.core import get_logger
from storygen.models.story import GenerationSettings, Scene
from storygen.services.infrastructure.parsing import require_json_object
from storygen.services.llm import GenerationClient, GenerationRequest
from storygen.services.pipeline.prompts import ComputedConstraints, PromptStage, build_prompt

from .config import BREAKDOWN_MAX_TOKENS, MODEL_STEP
from .validation import validate_scene_breakdown

logger = get_logger(__name__, component="scene_breakdown")


class SceneBreakdownGenerator:
    """
    Produces validated scenes for a script.

    Usage:
        generator = SceneBreakdownGenerator(client)
        scenes = await generator.generate(settings, constraints)
    """

    def __init__(
        self,
        client: GenerationClient,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        model_config = get_model_config(MODEL_STEP)
        self.client = client
        self.model = model or get_model_name(MODEL_STEP)
        self.temperature = model_config.temperature if temperature is None else temperature
        self.max_tokens = model_config.max_tokens or BREAKDOWN_MAX_TOKENS

    async def generate(
        self,
        settings: GenerationSettings,
        constraints: ComputedConstraints,
    ) -> List[Scene]:
        """
        Raises:
            GenerationCallError: The client call failed
            SchemaValidationError: The breakdown violates the scene contract
        """
        bundle = build_prompt(PromptStage.SCENES, settings, constraints)
        request = GenerationRequest.from_bundle(
            bundle,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        text = await self.client.generate(request)
        data = require_json_object(text, source="scene breakdown")
        scenes = validate_scene_breakdown(data, constraints)

        logger.info(
            "Scene breakdown validated",
            extra={
                "scene_count": len(scenes),
                "durations": [scene.duration for scene in scenes],
                "total_duration": constraints.total_duration,
            },
        )
        return scenes
