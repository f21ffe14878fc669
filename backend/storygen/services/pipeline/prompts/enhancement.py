"""
Storyboard Enhancement Prompts

Turns validated scenes into render-ready storyboard entries: an English image
prompt for every scene, voice direction when voiceover is on, and either
Ken Burns style motion (static media) or a video motion prompt (animated).
"""

from typing import List

from storygen.models.story import GenerationSettings

from .base import PromptTemplate
from .constraints import ComputedConstraints, ENHANCEMENT_MODE_IMAGE_TO_VIDEO
from .schemas import (
    IMAGE_PROMPT_MAX_LENGTH,
    IMAGE_PROMPT_MIN_LENGTH,
    VIDEO_PROMPT_MAX_LENGTH,
    VIDEO_PROMPT_MIN_LENGTH,
)
from .style_guides import (
    ANIMATION_NAMES,
    ASPECT_RATIO_FRAMING,
    EFFECT_NAMES,
    FINAL_TRANSITION,
    VOICE_MOODS,
    get_style_guide,
)


ENHANCE_SYSTEM = PromptTemplate(
    template="""You are a storyboard artist preparing scenes for AI image and video generation.

### IMAGE PROMPTS
- "imagePrompt" is ALWAYS in English, {image_min}-{image_max} characters
- Visual style: {style_name} ({style_keywords})
- Framing: {framing}
- Expand the scene description with subject, composition, lighting, color and mood
- Keep recurring subjects visually consistent across scenes
- No text, captions or logos inside the image

{voice_rules}
{motion_rules}

### TRANSITIONS
- "transitionToNext" matches the mood shift into the next scene
- Scene {final_scene} is the last scene: its transition is "{final_transition}"

### OUTPUT
Return JSON with "scenes": one entry for each scene number you are given, in the same order.""",
    description="System prompt for storyboard enhancement",
)


ENHANCE_USER = PromptTemplate(
    template="""Story title: {title}
Topic: {topic}

Scenes to enhance:
{scene_blocks}""",
    description="User prompt for storyboard enhancement",
)


def _voice_rules(constraints: ComputedConstraints) -> str:
    if not constraints.has_voiceover:
        return ""
    return (
        "### VOICEOVER\n"
        f'- "voiceText" is the line spoken over the scene, in {constraints.language_name}, '
        "based on the scene narration (polish it, keep its length)\n"
        f'- "voiceMood" is one of: {", ".join(VOICE_MOODS)}\n'
    )


def _motion_rules(constraints: ComputedConstraints) -> str:
    if constraints.enhancement_mode == ENHANCEMENT_MODE_IMAGE_TO_VIDEO:
        return (
            "### VIDEO MOTION\n"
            f'- "videoPrompt" describes camera and subject motion in English, '
            f"{VIDEO_PROMPT_MIN_LENGTH}-{VIDEO_PROMPT_MAX_LENGTH} characters\n"
            "- Motion must fit inside the scene duration; keep it smooth and physically plausible"
        )
    return (
        "### IMAGE MOTION\n"
        f'- "animationName" is one of: {", ".join(ANIMATION_NAMES)}\n'
        f'- "effectName" is one of: {", ".join(EFFECT_NAMES)}\n'
        "- Vary motion between consecutive scenes"
    )


def _scene_blocks(constraints: ComputedConstraints) -> str:
    blocks: List[str] = []
    for scene in constraints.scenes:
        lines = [
            f"Scene {scene['sceneNumber']} ({scene['duration']}s)",
            f"  Visual: {scene['description']}",
        ]
        if scene.get("soundDescription"):
            lines.append(f"  Sound: {scene['soundDescription']}")
        if scene.get("narration"):
            lines.append(f"  Narration: {scene['narration']}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def build_system_prompt(constraints: ComputedConstraints) -> str:
    style = get_style_guide(constraints.image_style)
    return ENHANCE_SYSTEM.format(
        image_min=IMAGE_PROMPT_MIN_LENGTH,
        image_max=IMAGE_PROMPT_MAX_LENGTH,
        style_name=style["name"],
        style_keywords=style["keywords"],
        framing=ASPECT_RATIO_FRAMING.get(constraints.aspect_ratio, constraints.aspect_ratio),
        voice_rules=_voice_rules(constraints),
        motion_rules=_motion_rules(constraints),
        final_scene=constraints.scene_count,
        final_transition=FINAL_TRANSITION,
    )


def build_user_prompt(settings: GenerationSettings, constraints: ComputedConstraints) -> str:
    return ENHANCE_USER.format(
        title=constraints.title or settings.topic,
        topic=settings.topic,
        scene_blocks=_scene_blocks(constraints),
    )
