"""
Duration Allocation Configuration
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class PacingRange:
    """Scene-count range and average scene length for one pacing style."""
    min_scenes: int
    max_scenes: int
    avg_duration_min: float
    avg_duration_max: float

    @property
    def avg_scene_duration(self) -> float:
        return (self.avg_duration_min + self.avg_duration_max) / 2


# =============================================================================
# PACING
# =============================================================================

PACING_SCENE_RANGES: Dict[str, PacingRange] = {
    # Fewer, longer scenes that let moments breathe
    "slow": PacingRange(min_scenes=3, max_scenes=5, avg_duration_min=8, avg_duration_max=15),
    # Natural conversational rhythm
    "medium": PacingRange(min_scenes=5, max_scenes=7, avg_duration_min=5, avg_duration_max=10),
    # Quick cuts
    "fast": PacingRange(min_scenes=7, max_scenes=10, avg_duration_min=3, avg_duration_max=6),
}

DEFAULT_PACING = "medium"


# =============================================================================
# DEFAULT LIMITS (no template supplied)
# =============================================================================

ABSOLUTE_MIN_SCENES = 3
ABSOLUTE_MAX_SCENES = 10
SCENE_DURATION_MIN = 3
SCENE_DURATION_MAX = 15

# Upper bound on scene_count accepted by the exhaustive search
MAX_ALLOCATION_SCENES = 50
