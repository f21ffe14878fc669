"""
Scene Breakdown

Usage:
    from storygen.services.pipeline.scenes import SceneBreakdownGenerator
"""

from .generator import SceneBreakdownGenerator
from .validation import validate_scene_breakdown

__all__ = [
    "SceneBreakdownGenerator",
    "validate_scene_breakdown",
]
