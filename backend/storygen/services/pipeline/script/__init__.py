"""
Script Generation

Usage:
    from storygen.services.pipeline.script import get_script_generator

    generator = get_script_generator(settings.template, client)
    result = await generator.generate(settings, constraints)
"""

from .cleaning import clean_story_text
from .generators import (
    ScriptGenerator,
    NarratedScriptGenerator,
    AmbientScriptGenerator,
    ScriptResult,
    SCRIPT_GENERATORS,
    get_script_generator,
    registered_templates,
)

__all__ = [
    "clean_story_text",
    "ScriptGenerator",
    "NarratedScriptGenerator",
    "AmbientScriptGenerator",
    "ScriptResult",
    "SCRIPT_GENERATORS",
    "get_script_generator",
    "registered_templates",
]
