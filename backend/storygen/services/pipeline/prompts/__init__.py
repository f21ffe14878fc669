"""
Prompt Compiler

Builds (system prompt, user prompt, response schema) for the script,
scene breakdown and enhancement stages from a single ComputedConstraints.
"""

from .base import PromptBundle, PromptStage, PromptTemplate
from .compiler import build_prompt
from .constraints import (
    ComputedConstraints,
    compute_constraints,
    ENHANCEMENT_MODE_IMAGE_TO_VIDEO,
    ENHANCEMENT_MODE_TRANSITION,
)
from .schemas import (
    build_script_schema,
    build_scenes_schema,
    build_enhance_schema,
)
from .style_guides import (
    IMAGE_STYLE_GUIDES,
    VOICE_MOODS,
    ANIMATION_NAMES,
    EFFECT_NAMES,
    TRANSITIONS,
    VIDEO_TRANSITIONS,
    FINAL_TRANSITION,
)

__all__ = [
    # Compiler
    "build_prompt",
    "PromptBundle",
    "PromptStage",
    "PromptTemplate",
    # Constraints
    "ComputedConstraints",
    "compute_constraints",
    "ENHANCEMENT_MODE_IMAGE_TO_VIDEO",
    "ENHANCEMENT_MODE_TRANSITION",
    # Schemas
    "build_script_schema",
    "build_scenes_schema",
    "build_enhance_schema",
    # Vocabularies
    "IMAGE_STYLE_GUIDES",
    "VOICE_MOODS",
    "ANIMATION_NAMES",
    "EFFECT_NAMES",
    "TRANSITIONS",
    "VIDEO_TRANSITIONS",
    "FINAL_TRANSITION",
]
