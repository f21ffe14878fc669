"""
Enhancement response validation
"""

from typing import Any, Dict, List

from storygen.core.exceptions import SchemaValidationError
from storygen.services.pipeline.prompts import (
    ANIMATION_NAMES,
    EFFECT_NAMES,
    ENHANCEMENT_MODE_IMAGE_TO_VIDEO,
    TRANSITIONS,
    VIDEO_TRANSITIONS,
    VOICE_MOODS,
    ComputedConstraints,
)


def _vocabularies(constraints: ComputedConstraints) -> Dict[str, List[str]]:
    vocab: Dict[str, List[str]] = {}
    if constraints.has_voiceover:
        vocab["voiceMood"] = list(VOICE_MOODS)
    if constraints.enhancement_mode == ENHANCEMENT_MODE_IMAGE_TO_VIDEO:
        vocab["transitionToNext"] = list(VIDEO_TRANSITIONS)
    else:
        vocab["animationName"] = list(ANIMATION_NAMES)
        vocab["effectName"] = list(EFFECT_NAMES)
        vocab["transitionToNext"] = list(TRANSITIONS)
    return vocab


def _text_fields(constraints: ComputedConstraints) -> List[str]:
    fields = ["imagePrompt"]
    if constraints.has_voiceover:
        fields.append("voiceText")
    if constraints.enhancement_mode == ENHANCEMENT_MODE_IMAGE_TO_VIDEO:
        fields.append("videoPrompt")
    return fields


def validate_enhancement(
    data: Dict[str, Any],
    constraints: ComputedConstraints,
) -> Dict[int, Dict[str, Any]]:
    """
    Validate one enhancement batch.

    Every scene of the batch must appear exactly once. Text fields must be
    strings; enumerated fields must come from their vocabulary. Empty text
    is accepted here and filled by fallbacks later.

    Returns:
        Updates keyed by scene number, in wire format

    Raises:
        SchemaValidationError: naming the offending field
    """
    items = data.get("scenes") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise SchemaValidationError("scenes", "must be an array", items)

    expected = list(constraints.batch_scene_numbers)
    if len(items) != len(expected):
        raise SchemaValidationError("scenes", f"expected {len(expected)} scenes", len(items))

    vocab = _vocabularies(constraints)
    text_fields = _text_fields(constraints)
    updates: Dict[int, Dict[str, Any]] = {}

    for index, item in enumerate(items):
        prefix = f"scenes[{index}]"
        if not isinstance(item, dict):
            raise SchemaValidationError(prefix, "must be an object", item)

        number = item.get("sceneNumber")
        if number not in expected or isinstance(number, bool):
            raise SchemaValidationError(f"{prefix}.sceneNumber", f"must be one of {expected}", number)
        if number in updates:
            raise SchemaValidationError(f"{prefix}.sceneNumber", "is duplicated", number)

        entry: Dict[str, Any] = {}
        for field in text_fields:
            value = item.get(field, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise SchemaValidationError(f"{prefix}.{field}", "must be a string", value)
            entry[field] = value.strip()

        for field, allowed in vocab.items():
            value = item.get(field)
            if value in (None, ""):
                continue
            if value not in allowed:
                raise SchemaValidationError(f"{prefix}.{field}", f"must be one of {allowed}", value)
            entry[field] = value

        updates[number] = entry

    return updates
