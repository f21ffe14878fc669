"""
Script Writing Prompts

Narrated templates get a spoken script sized to the story duration.
Ambient templates get a short English visual concept with no narration.
"""

from storygen.models.story import GenerationSettings

from .base import PromptTemplate
from .constraints import ComputedConstraints


NARRATED_SCRIPT_SYSTEM = PromptTemplate(
    template="""You are an expert short-form video scriptwriter whose stories hold attention from the first second.

### YOUR MISSION
Write the spoken script for a {duration}-second vertical video using the "{template_name}" structure.

### STRUCTURE
Move through these beats in order, giving each roughly equal weight:
{stage_list}

### LENGTH (CRITICAL)
The script is read aloud at about {words_per_second} words per second.
- Target: {word_target} words
- Acceptable range: {word_min}-{word_max} words
A script outside this range will not fit the video. Count before you answer.

### LANGUAGE
Write the script and the title in {language_name}.

### FORMAT RULES
- Plain flowing prose, exactly what the narrator says
- No beat labels (never write "Hook:", "Problem:", "Scene 1:")
- No bullet points, numbered lists, markdown headers or [stage directions]
- Short sentences that sound natural when spoken

### OUTPUT
Return a JSON object with "title" (short and catchy) and "script" (the full text).""",
    description="System prompt for narrated script writing",
)


AMBIENT_SCRIPT_SYSTEM = PromptTemplate(
    template="""You are a creative director for calming ASMR-style sensory videos.

### YOUR MISSION
Write a short visual concept for a {duration}-second video made of independent, soothing clips.

### CONCEPT RULES
- Describe setting, materials, textures, light and the sounds they make
- Move through these moods in order: {stage_list}
- No characters speaking, no narration, no dialogue, no story arc
- 40-80 words, always in English (it drives image and video models)
- Plain prose only: no labels, lists, markdown or [directions]

### OUTPUT
Return a JSON object with "title" (short, evocative, in English) and "script" (the concept).""",
    description="System prompt for ambient concept writing",
)


SCRIPT_USER = PromptTemplate(
    template="""Topic: {topic}
Template: {template_name}
Video length: {duration} seconds
Pacing: {pacing}

Write the script now.""",
    description="User prompt for script writing",
)


def _stage_list(constraints: ComputedConstraints) -> str:
    return "\n".join(
        f"{index}. {stage}" for index, stage in enumerate(constraints.template.stages, start=1)
    )


def build_system_prompt(constraints: ComputedConstraints) -> str:
    if constraints.is_ambient:
        return AMBIENT_SCRIPT_SYSTEM.format(
            duration=constraints.total_duration,
            stage_list=", ".join(constraints.template.stages),
        )
    return NARRATED_SCRIPT_SYSTEM.format(
        duration=constraints.total_duration,
        template_name=constraints.template.name,
        stage_list=_stage_list(constraints),
        words_per_second=constraints.words_per_second,
        word_target=constraints.total_word_target,
        word_min=constraints.script_word_min,
        word_max=constraints.script_word_max,
        language_name=constraints.language_name,
    )


def build_user_prompt(settings: GenerationSettings, constraints: ComputedConstraints) -> str:
    return SCRIPT_USER.format(
        topic=settings.topic,
        template_name=constraints.template.name,
        duration=constraints.total_duration,
        pacing=constraints.pacing,
    )
