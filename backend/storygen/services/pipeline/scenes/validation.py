"""
Scene breakdown validation

Re-checks a scene breakdown against the same constraints its schema was
compiled from. Structured output narrows what a model returns but does not
guarantee it, so every invariant is enforced here before scenes are built.
Errors name the offending field and value.
"""

from typing import Any, Dict, List

from storygen.core.exceptions import SchemaValidationError
from storygen.models.story import Scene
from storygen.services.pipeline.prompts import ComputedConstraints

from .config import SENTENCE_TERMINATORS, SOUND_DESCRIPTION_MAX_WORDS

SCENE_FIELDS = frozenset({"sceneNumber", "duration", "description", "soundDescription", "narration"})
ROOT_FIELDS = frozenset({"scenes", "totalScenes", "totalDuration"})


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_string(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise SchemaValidationError(field, "must be a string", value)
    return value


def _check_sound_phrase(field: str, sound: str) -> None:
    """Sound cues are short effect phrases; a full sentence reads as narration."""
    text = sound.strip()
    if text.endswith(SENTENCE_TERMINATORS):
        raise SchemaValidationError(field, "must be a short phrase, not a sentence", sound)
    if len(text.split()) > SOUND_DESCRIPTION_MAX_WORDS:
        raise SchemaValidationError(
            field, f"must be at most {SOUND_DESCRIPTION_MAX_WORDS} words", sound
        )


def _validate_scene(index: int, item: Any, constraints: ComputedConstraints) -> Scene:
    prefix = f"scenes[{index}]"
    if not isinstance(item, dict):
        raise SchemaValidationError(prefix, "must be an object", item)

    missing = sorted(SCENE_FIELDS - set(item))
    if missing:
        raise SchemaValidationError(f"{prefix}.{missing[0]}", "is required", None)
    extra = sorted(set(item) - SCENE_FIELDS)
    if extra:
        raise SchemaValidationError(f"{prefix}.{extra[0]}", "is not allowed", item[extra[0]])

    number = item["sceneNumber"]
    if not _is_int(number) or number != index + 1:
        raise SchemaValidationError(
            f"{prefix}.sceneNumber", f"expected {index + 1}", number
        )

    duration = item["duration"]
    if not _is_int(duration):
        raise SchemaValidationError(f"{prefix}.duration", "must be an integer", duration)
    if not constraints.allowed_duration(duration):
        if constraints.is_constrained:
            detail = f"must be one of {list(constraints.supported_durations)}"
        else:
            detail = (
                f"must be between {constraints.scene_duration_min} "
                f"and {constraints.scene_duration_max}"
            )
        raise SchemaValidationError(f"{prefix}.duration", detail, duration)

    description = _require_string(f"{prefix}.description", item["description"])
    if not description.strip():
        raise SchemaValidationError(f"{prefix}.description", "must not be empty", description)

    sound = _require_string(f"{prefix}.soundDescription", item["soundDescription"])
    if constraints.has_audio and sound != "":
        raise SchemaValidationError(
            f"{prefix}.soundDescription", "must be empty when the model renders audio", sound
        )
    if not constraints.has_audio and not sound.strip():
        raise SchemaValidationError(f"{prefix}.soundDescription", "must not be empty", sound)
    if not constraints.has_audio:
        _check_sound_phrase(f"{prefix}.soundDescription", sound)

    narration = _require_string(f"{prefix}.narration", item["narration"])
    if constraints.is_ambient and narration != "":
        raise SchemaValidationError(
            f"{prefix}.narration", "must be empty for ambient content", narration
        )
    if not constraints.is_ambient and not narration.strip():
        raise SchemaValidationError(f"{prefix}.narration", "must not be empty", narration)

    return Scene(
        scene_number=number,
        duration=duration,
        description=description.strip(),
        sound_description=sound.strip(),
        narration=narration.strip(),
    )


def validate_scene_breakdown(data: Dict[str, Any], constraints: ComputedConstraints) -> List[Scene]:
    """
    Validate a parsed scene breakdown and build Scene records.

    Checks: scene count, sequential numbering, duration membership (or
    range), the duration sum, the declared totalScenes and totalDuration,
    and the required-empty / required-present text fields.

    Raises:
        SchemaValidationError: naming the first offending field
    """
    if not isinstance(data, dict):
        raise SchemaValidationError("$", "must be an object", data)

    extra = sorted(set(data) - ROOT_FIELDS)
    if extra:
        raise SchemaValidationError(extra[0], "is not allowed", data[extra[0]])

    items = data.get("scenes")
    if not isinstance(items, list):
        raise SchemaValidationError("scenes", "must be an array", items)
    if len(items) != constraints.scene_count:
        raise SchemaValidationError(
            "scenes", f"expected {constraints.scene_count} scenes", len(items)
        )

    scenes = [_validate_scene(index, item, constraints) for index, item in enumerate(items)]

    declared_scenes = data.get("totalScenes")
    if declared_scenes != constraints.scene_count or not _is_int(declared_scenes):
        raise SchemaValidationError(
            "totalScenes", f"expected {constraints.scene_count}", declared_scenes
        )

    total = sum(scene.duration for scene in scenes)
    if total != constraints.total_duration:
        raise SchemaValidationError(
            "totalDuration",
            f"scene durations sum to {total}, expected {constraints.total_duration}",
            total,
        )

    declared_duration = data.get("totalDuration")
    if declared_duration != constraints.total_duration or not _is_int(declared_duration):
        raise SchemaValidationError(
            "totalDuration", f"expected {constraints.total_duration}", declared_duration
        )

    return scenes
