"""
Scene Breakdown Prompts

The system prompt restates every number the response schema pins
(scene count, allowed durations, total, empty fields) so the model sees the
contract in prose as well as in the schema.
"""

from typing import List

from storygen.models.story import GenerationSettings

from .base import PromptTemplate
from .constraints import ComputedConstraints


SCENES_SYSTEM = PromptTemplate(
    template="""You are an elite video editor who breaks stories into perfectly timed visual scenes.

### YOUR MISSION
Break the provided script into EXACTLY {scene_count} scenes for a {total_duration}-second video.

### DURATION RULES (CRITICAL)
{duration_rules}
- The durations of all scenes MUST add up to exactly {total_duration} seconds
- Recommended plan: {duration_plan}

### SCENE FLOW
{flow_rules}

### VISUAL DESCRIPTION
- "description" is ALWAYS written in English, whatever the story language
- Describe one concrete, filmable moment: subject, action, setting, lighting, camera angle
- Every scene must work as a standalone image prompt

### SOUND EFFECTS
{sound_rules}

### NARRATION
{narration_rules}

### OUTPUT
Return JSON with "scenes" ({scene_count} items numbered 1-{scene_count} in order),
"totalScenes": {scene_count} and "totalDuration": {total_duration}.""",
    description="System prompt for scene breakdown",
)


SCENES_USER = PromptTemplate(
    template="""Title: {title}
Topic: {topic}

Script:
{script}

Break this into exactly {scene_count} scenes totalling {total_duration} seconds.""",
    description="User prompt for scene breakdown",
)


def _join(values) -> str:
    return ", ".join(str(v) for v in values)


def _duration_rules(constraints: ComputedConstraints) -> str:
    if constraints.supported_durations is not None:
        return (
            f"- Each scene duration MUST be one of: {_join(constraints.supported_durations)} seconds\n"
            f"- The video model cannot render any other clip length"
        )
    return (
        f"- Each scene lasts between {constraints.scene_duration_min} and "
        f"{constraints.scene_duration_max} whole seconds"
    )


def _flow_rules(constraints: ComputedConstraints) -> str:
    stages = ", ".join(constraints.template.stages)
    if constraints.is_ambient:
        return (
            f"- Scenes are INDEPENDENT sensory moments, not a connected narrative\n"
            f"- Drift through these moods: {stages}\n"
            f"- Favour close-ups of textures, materials, slow satisfying motion"
        )
    return (
        f"- Follow the story beats in order: {stages}\n"
        f"- Scene 1 hooks the viewer immediately; the final scene delivers the payoff\n"
        f"- Each scene has ONE clear focus"
    )


def _sound_rules(constraints: ComputedConstraints) -> str:
    if constraints.has_audio:
        return (
            '- "soundDescription" MUST be an empty string "" for every scene\n'
            "- The video model generates its own synchronized audio"
        )
    return (
        '- "soundDescription" is 2-6 English words of onomatopoeic sound effects '
        '(e.g. "soft whoosh, distant chime")\n'
        "- Never a full sentence, never narration, no ending punctuation\n"
        "- Always in English, whatever the story language"
    )


def _word_table(constraints: ComputedConstraints) -> List[str]:
    rows = []
    for number, (duration, words) in enumerate(
        zip(constraints.durations, constraints.scene_word_targets), start=1
    ):
        rows.append(f"  Scene {number}: {duration}s -> about {words} words")
    return rows


def _narration_rules(constraints: ComputedConstraints) -> str:
    if constraints.is_ambient:
        return (
            '- "narration" MUST be an empty string "" for every scene\n'
            "- This content has no voiceover"
        )
    lines = [
        f"- Narration is in {constraints.language_name}, taken from the script in order",
        "- Together the scenes cover the whole script without repeating lines",
        f"- Reading speed is {constraints.words_per_second} words per second; match each scene's length:",
    ]
    lines.extend(_word_table(constraints))
    return "\n".join(lines)


def build_system_prompt(constraints: ComputedConstraints) -> str:
    return SCENES_SYSTEM.format(
        scene_count=constraints.scene_count,
        total_duration=constraints.total_duration,
        duration_rules=_duration_rules(constraints),
        duration_plan=" + ".join(str(d) for d in constraints.durations),
        flow_rules=_flow_rules(constraints),
        sound_rules=_sound_rules(constraints),
        narration_rules=_narration_rules(constraints),
    )


def build_user_prompt(settings: GenerationSettings, constraints: ComputedConstraints) -> str:
    return SCENES_USER.format(
        title=constraints.title or settings.topic,
        topic=settings.topic,
        script=constraints.script,
        scene_count=constraints.scene_count,
        total_duration=constraints.total_duration,
    )
