"""
Prompt Compiler

build_prompt() is a pure function of its inputs: no I/O, no hidden state.
The same settings and constraints always produce byte-identical prompts
and schemas.
"""

from typing import Callable, Dict, Tuple

from storygen.models.story import GenerationSettings

from . import enhancement, scenes, script
from .base import PromptBundle, PromptStage
from .constraints import ComputedConstraints
from .schemas import (
    ENHANCE_SCHEMA_NAME,
    SCENES_SCHEMA_NAME,
    SCRIPT_SCHEMA_NAME,
    build_enhance_schema,
    build_scenes_schema,
    build_script_schema,
)

_STAGE_BUILDERS: Dict[PromptStage, Tuple[object, Callable, str]] = {
    PromptStage.SCRIPT: (script, build_script_schema, SCRIPT_SCHEMA_NAME),
    PromptStage.SCENES: (scenes, build_scenes_schema, SCENES_SCHEMA_NAME),
    PromptStage.ENHANCE: (enhancement, build_enhance_schema, ENHANCE_SCHEMA_NAME),
}


def build_prompt(
    stage: PromptStage,
    settings: GenerationSettings,
    computed_constraints: ComputedConstraints,
) -> PromptBundle:
    """
    Build the system prompt, user prompt and response schema for a stage.

    Args:
        stage: Which stage call to compile
        settings: Caller settings (topic, language, style)
        computed_constraints: Scene count, durations and word targets

    Raises:
        ValueError: For an unknown stage
    """
    try:
        module, schema_builder, schema_name = _STAGE_BUILDERS[PromptStage(stage)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown prompt stage: {stage!r}")

    if stage == PromptStage.ENHANCE and not computed_constraints.scenes:
        raise ValueError("Enhancement prompts need at least one scene")

    return PromptBundle(
        stage=PromptStage(stage),
        system_prompt=module.build_system_prompt(computed_constraints),
        user_prompt=module.build_user_prompt(settings, computed_constraints),
        response_schema=schema_builder(computed_constraints),
        schema_name=schema_name,
    )
