"""
Response Schemas

JSON Schemas generated per call from ComputedConstraints. Values the model
must not vary are pinned with `const`, scene counts with minItems/maxItems,
and durations with an `enum` (constrained) or minimum/maximum.
"""

from typing import Any, Dict, List

from .constraints import ComputedConstraints, ENHANCEMENT_MODE_IMAGE_TO_VIDEO
from .style_guides import (
    ANIMATION_NAMES,
    EFFECT_NAMES,
    TRANSITIONS,
    VIDEO_TRANSITIONS,
    VOICE_MOODS,
)

SCRIPT_SCHEMA_NAME = "story_script"
SCENES_SCHEMA_NAME = "scene_breakdown"
ENHANCE_SCHEMA_NAME = "storyboard_enhancement"

IMAGE_PROMPT_MIN_LENGTH = 50
IMAGE_PROMPT_MAX_LENGTH = 1200
VIDEO_PROMPT_MIN_LENGTH = 20
VIDEO_PROMPT_MAX_LENGTH = 400


def _object(properties: Dict[str, Any]) -> Dict[str, Any]:
    """Closed object schema with every property required."""
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties.keys()),
        "additionalProperties": False,
    }


def build_script_schema(constraints: ComputedConstraints) -> Dict[str, Any]:
    return _object({
        "title": {
            "type": "string",
            "minLength": 1,
            "description": f"Short catchy title in {constraints.language_name}",
        },
        "script": {
            "type": "string",
            "minLength": 1,
            "description": "The full story text, plain prose without labels",
        },
    })


def build_duration_schema(constraints: ComputedConstraints) -> Dict[str, Any]:
    if constraints.supported_durations is not None:
        return {
            "type": "integer",
            "enum": list(constraints.supported_durations),
            "description": "Scene length in seconds, one of the supported clip lengths",
        }
    return {
        "type": "integer",
        "minimum": constraints.scene_duration_min,
        "maximum": constraints.scene_duration_max,
        "description": "Scene length in whole seconds",
    }


def build_scenes_schema(constraints: ComputedConstraints) -> Dict[str, Any]:
    count = constraints.scene_count

    if constraints.has_audio:
        sound = {
            "type": "string",
            "const": "",
            "description": "Always empty: the video model generates its own audio",
        }
    else:
        sound = {
            "type": "string",
            "minLength": 1,
            "description": "2-6 English words of onomatopoeic sound effects, no sentence",
        }

    if constraints.is_ambient:
        narration = {
            "type": "string",
            "const": "",
            "description": "Always empty: this content has no voiceover",
        }
    else:
        narration = {
            "type": "string",
            "minLength": 1,
            "description": f"Spoken narration in {constraints.language_name}",
        }

    scene = _object({
        "sceneNumber": {"type": "integer", "minimum": 1, "maximum": count},
        "duration": build_duration_schema(constraints),
        "description": {
            "type": "string",
            "minLength": 1,
            "description": "Visual description in English",
        },
        "soundDescription": sound,
        "narration": narration,
    })

    return _object({
        "scenes": {
            "type": "array",
            "minItems": count,
            "maxItems": count,
            "items": scene,
        },
        "totalScenes": {"type": "integer", "const": count},
        "totalDuration": {"type": "integer", "const": constraints.total_duration},
    })


def build_enhance_schema(constraints: ComputedConstraints) -> Dict[str, Any]:
    batch_numbers: List[int] = list(constraints.batch_scene_numbers)
    properties: Dict[str, Any] = {
        "sceneNumber": {"type": "integer", "enum": batch_numbers},
        "imagePrompt": {
            "type": "string",
            "minLength": IMAGE_PROMPT_MIN_LENGTH,
            "maxLength": IMAGE_PROMPT_MAX_LENGTH,
            "description": "Detailed English image prompt",
        },
    }

    if constraints.has_voiceover:
        properties["voiceText"] = {
            "type": "string",
            "description": f"Voiceover line in {constraints.language_name}",
        }
        properties["voiceMood"] = {"type": "string", "enum": list(VOICE_MOODS)}

    if constraints.enhancement_mode == ENHANCEMENT_MODE_IMAGE_TO_VIDEO:
        properties["videoPrompt"] = {
            "type": "string",
            "minLength": VIDEO_PROMPT_MIN_LENGTH,
            "maxLength": VIDEO_PROMPT_MAX_LENGTH,
            "description": "English description of motion for image-to-video",
        }
        properties["transitionToNext"] = {"type": "string", "enum": list(VIDEO_TRANSITIONS)}
    else:
        properties["animationName"] = {"type": "string", "enum": list(ANIMATION_NAMES)}
        properties["effectName"] = {"type": "string", "enum": list(EFFECT_NAMES)}
        properties["transitionToNext"] = {"type": "string", "enum": list(TRANSITIONS)}

    count = len(batch_numbers)
    return _object({
        "scenes": {
            "type": "array",
            "minItems": count,
            "maxItems": count,
            "items": _object(properties),
        },
    })
