"""
Duration Allocation

Scene counts and per-scene durations for a story budget.
"""

from .allocator import (
    DurationPlan,
    optimal_scene_count,
    allocate_durations,
    plan_durations,
    plan_story_durations,
    reachable_totals,
    scene_count_bounds,
    scene_duration_range,
)
from .config import (
    PACING_SCENE_RANGES,
    ABSOLUTE_MIN_SCENES,
    ABSOLUTE_MAX_SCENES,
    SCENE_DURATION_MIN,
    SCENE_DURATION_MAX,
)

__all__ = [
    # Allocator
    "DurationPlan",
    "optimal_scene_count",
    "allocate_durations",
    "plan_durations",
    "plan_story_durations",
    "reachable_totals",
    "scene_count_bounds",
    "scene_duration_range",
    # Config
    "PACING_SCENE_RANGES",
    "ABSOLUTE_MIN_SCENES",
    "ABSOLUTE_MAX_SCENES",
    "SCENE_DURATION_MIN",
    "SCENE_DURATION_MAX",
]
