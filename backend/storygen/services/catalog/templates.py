"""
Template Registry

Static catalog of story templates. Templates are built once at import and
never mutated, so lookups can be shared across concurrent pipelines.
"""

from typing import Dict, List, Optional

from storygen.core.exceptions import InvalidSettingsError
from storygen.models.story import Template, TemplateFamily


# =============================================================================
# SCENE LIMITS
# =============================================================================

NARRATED_MIN_SCENES = 3
NARRATED_MAX_SCENES = 10
NARRATED_SCENE_DURATION_MIN = 3
NARRATED_SCENE_DURATION_MAX = 15

AMBIENT_MIN_SCENES = 2
AMBIENT_MAX_SCENES = 6
AMBIENT_SCENE_DURATION_MIN = 5
AMBIENT_SCENE_DURATION_MAX = 20
AMBIENT_AVG_SCENE_DURATION = 12.0


def _narrated(template_id: str, name: str, stages: List[str], description: str) -> Template:
    return Template(
        id=template_id,
        name=name,
        stages=tuple(stages),
        min_scenes=NARRATED_MIN_SCENES,
        max_scenes=NARRATED_MAX_SCENES,
        optimal_scene_count=6,
        family=TemplateFamily.NARRATED,
        scene_duration_min=NARRATED_SCENE_DURATION_MIN,
        scene_duration_max=NARRATED_SCENE_DURATION_MAX,
        description=description,
    )


_TEMPLATES: List[Template] = [
    _narrated(
        "problem-solution",
        "Problem-Solution",
        ["Hook", "Problem", "Solution", "Call-to-Action"],
        "Present a relatable problem, then resolve it",
    ),
    _narrated(
        "tease-reveal",
        "Tease & Reveal",
        ["Hook", "Tease", "Buildup", "Reveal"],
        "Build curiosity and pay it off with a reveal",
    ),
    _narrated(
        "before-after",
        "Before & After",
        ["Before State", "Transformation", "After State", "Results"],
        "Show a transformation from start to finish",
    ),
    _narrated(
        "myth-busting",
        "Myth-Busting",
        ["Common Myth", "Why It's Wrong", "The Truth", "Takeaway"],
        "Debunk a popular misconception",
    ),
    Template(
        id="auto-asmr",
        name="Auto-ASMR",
        stages=("Peaceful Opening", "Sensory Journey", "Calm Closing"),
        min_scenes=AMBIENT_MIN_SCENES,
        max_scenes=AMBIENT_MAX_SCENES,
        optimal_scene_count=4,
        family=TemplateFamily.AMBIENT,
        avg_scene_duration=AMBIENT_AVG_SCENE_DURATION,
        scene_duration_min=AMBIENT_SCENE_DURATION_MIN,
        scene_duration_max=AMBIENT_SCENE_DURATION_MAX,
        description="Independent sensory clips without narration",
    ),
]

TEMPLATES: Dict[str, Template] = {template.id: template for template in _TEMPLATES}

# Short aliases accepted from callers
TEMPLATE_ALIASES: Dict[str, str] = {
    "ambient": "auto-asmr",
    "asmr": "auto-asmr",
}


def get_template(template_id: str) -> Optional[Template]:
    """Look up a template by id (or alias). Unknown ids return None."""
    if not template_id:
        return None
    key = TEMPLATE_ALIASES.get(template_id, template_id)
    return TEMPLATES.get(key)


def require_template(template_id: str) -> Template:
    """Look up a template, raising InvalidSettingsError for unknown ids."""
    template = get_template(template_id)
    if template is None:
        raise InvalidSettingsError(f"Unknown template: {template_id!r}")
    return template


def list_templates() -> List[Template]:
    """All templates in registration order."""
    return list(_TEMPLATES)
