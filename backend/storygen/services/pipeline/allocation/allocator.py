"""
Duration Allocator

Decides how many scenes a story gets and how long each one runs.

Without model constraints, scene lengths are any integer inside the
template's per-scene range. With constraints, every scene length must be a
member of the model's supported durations and the lengths must still sum to
the story duration. That subset-sum is solved with a memoised depth-first
search over non-increasing sequences, trying the value closest to the
remaining average first so the first hit is also the most even split.
plan_story_durations() also moves the scene count within the template bounds
when that finds an exact split. When no exact combination exists at any
allowed count, the nearest reachable total is allocated and the drift is
reported as a warning.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from storygen.core import get_logger
from storygen.core.exceptions import InvalidDurationError
from storygen.models.story import ModelConstraints, Template

from .config import (
    ABSOLUTE_MAX_SCENES,
    ABSOLUTE_MIN_SCENES,
    DEFAULT_PACING,
    MAX_ALLOCATION_SCENES,
    PACING_SCENE_RANGES,
    SCENE_DURATION_MAX,
    SCENE_DURATION_MIN,
)

logger = get_logger(__name__, component="duration_allocator")


@dataclass(frozen=True)
class DurationPlan:
    """Per-scene durations plus how far they drifted from the request."""
    durations: Tuple[int, ...]
    requested_total: int
    allocated_total: int
    warning: Optional[str] = None

    @property
    def scene_count(self) -> int:
        return len(self.durations)

    @property
    def drift(self) -> int:
        return self.allocated_total - self.requested_total

    @property
    def is_exact(self) -> bool:
        return self.drift == 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _validate_total(total_duration: float) -> float:
    try:
        value = float(total_duration)
    except (TypeError, ValueError):
        raise InvalidDurationError(f"Total duration must be a number, got {total_duration!r}")
    if not math.isfinite(value) or value <= 0:
        raise InvalidDurationError(
            f"Total duration must be a positive finite number, got {total_duration!r}"
        )
    return value


def scene_count_bounds(template: Optional[Template] = None) -> Tuple[int, int]:
    if template is None:
        return ABSOLUTE_MIN_SCENES, ABSOLUTE_MAX_SCENES
    return template.min_scenes, template.max_scenes


def scene_duration_range(template: Optional[Template] = None) -> Tuple[int, int]:
    if template is None:
        return SCENE_DURATION_MIN, SCENE_DURATION_MAX
    return template.scene_duration_min, template.scene_duration_max


def optimal_scene_count(
    total_duration: float,
    constraints: Optional[ModelConstraints] = None,
    template: Optional[Template] = None,
    pacing: str = DEFAULT_PACING,
) -> int:
    """
    Number of scenes a story of total_duration seconds should be split into.

    Args:
        total_duration: Story length in seconds
        constraints: Downstream model durations; when given, the largest
            supported duration is the divisor so the fewest clips are rendered
        template: Supplies scene-count bounds and the ambient average
        pacing: slow / medium / fast, used for narrated templates

    Returns:
        A count within the template bounds (3-10 when no template is given)

    Raises:
        InvalidDurationError: total_duration is non-positive or non-finite
    """
    total = _validate_total(total_duration)
    min_scenes, max_scenes = scene_count_bounds(template)

    if constraints is not None:
        count = math.ceil(total / constraints.max_duration)
    else:
        if template is not None and template.avg_scene_duration:
            count = _round_half_up(total / template.avg_scene_duration)
        else:
            pacing_range = PACING_SCENE_RANGES.get(pacing, PACING_SCENE_RANGES[DEFAULT_PACING])
            count = _round_half_up(total / pacing_range.avg_scene_duration)
            count = max(pacing_range.min_scenes, min(pacing_range.max_scenes, count))

        # Keep the average scene length inside the per-scene range
        duration_min, duration_max = scene_duration_range(template)
        count = max(count, math.ceil(total / duration_max))
        count = min(count, max(1, math.floor(total / duration_min)))

    return max(min_scenes, min(max_scenes, count))


def _find_combination(total: int, count: int, values: Sequence[int]) -> Optional[List[int]]:
    """Non-increasing list of `count` members of `values` summing to `total`."""
    values_desc = sorted(set(values), reverse=True)
    dead_ends: Set[Tuple[int, int, int]] = set()

    def search(remaining: int, slots: int, cap_index: int) -> Optional[List[int]]:
        if slots == 0:
            return [] if remaining == 0 else None

        key = (remaining, slots, cap_index)
        if key in dead_ends:
            return None

        largest = values_desc[cap_index]
        smallest = values_desc[-1]
        if remaining > slots * largest or remaining < slots * smallest:
            dead_ends.add(key)
            return None

        average = remaining / slots
        candidates = sorted(
            range(cap_index, len(values_desc)),
            key=lambda i: (abs(values_desc[i] - average), -values_desc[i]),
        )
        for index in candidates:
            rest = search(remaining - values_desc[index], slots - 1, index)
            if rest is not None:
                return [values_desc[index]] + rest

        dead_ends.add(key)
        return None

    return search(total, count, 0)


def reachable_totals(count: int, values: Sequence[int]) -> Set[int]:
    """Every total reachable with exactly `count` members of `values`."""
    totals = {0}
    for _ in range(count):
        totals = {subtotal + value for subtotal in totals for value in values}
    return totals


def _even_split(total: int, count: int) -> List[int]:
    base, extra = divmod(total, count)
    return [base + 1] * extra + [base] * (count - extra)


def plan_durations(
    total_duration: float,
    scene_count: int,
    constraints: Optional[ModelConstraints] = None,
    template: Optional[Template] = None,
) -> DurationPlan:
    """
    Allocate per-scene durations and report any drift from the request.

    Raises:
        InvalidDurationError: bad total, or scene_count outside 1..MAX_ALLOCATION_SCENES
    """
    total = _round_half_up(_validate_total(total_duration))
    if scene_count < 1 or scene_count > MAX_ALLOCATION_SCENES:
        raise InvalidDurationError(
            f"Scene count must be between 1 and {MAX_ALLOCATION_SCENES}, got {scene_count}"
        )

    if constraints is not None:
        values = constraints.supported_durations
        durations = _find_combination(total, scene_count, values)
        if durations is None:
            reachable = reachable_totals(scene_count, values)
            nearest = min(reachable, key=lambda t: (abs(t - total), t))
            durations = _find_combination(nearest, scene_count, values)
    else:
        duration_min, duration_max = scene_duration_range(template)
        target = max(scene_count * duration_min, min(scene_count * duration_max, total))
        durations = _even_split(target, scene_count)

    allocated = sum(durations)
    warning = None
    if allocated != total:
        vocabulary = (
            f"supported durations {list(constraints.supported_durations)}"
            if constraints is not None
            else f"per-scene range {scene_duration_range(template)}"
        )
        warning = (
            f"No {scene_count}-scene split of {total}s fits {vocabulary}; "
            f"allocated {allocated}s instead"
        )
        logger.warning("Duration allocation drift", extra={
            "requested_total": total,
            "allocated_total": allocated,
            "scene_count": scene_count,
            "durations": durations,
        })

    return DurationPlan(
        durations=tuple(durations),
        requested_total=total,
        allocated_total=allocated,
        warning=warning,
    )


def _has_exact_split(
    total: int,
    scene_count: int,
    constraints: Optional[ModelConstraints],
    template: Optional[Template],
) -> bool:
    if constraints is not None:
        return _find_combination(total, scene_count, constraints.supported_durations) is not None
    duration_min, duration_max = scene_duration_range(template)
    return scene_count * duration_min <= total <= scene_count * duration_max


def plan_story_durations(
    total_duration: float,
    constraints: Optional[ModelConstraints] = None,
    template: Optional[Template] = None,
    pacing: str = DEFAULT_PACING,
) -> DurationPlan:
    """
    Pick a scene count and allocate durations for a whole story.

    Starts from optimal_scene_count(). When that count has no exact split,
    the other counts within the template bounds are tried, nearest first and
    larger before smaller at equal distance. Drift is accepted only when no
    count in bounds sums exactly.

    Raises:
        InvalidDurationError: total_duration is non-positive or non-finite
    """
    preferred = optimal_scene_count(total_duration, constraints, template, pacing)
    total = _round_half_up(_validate_total(total_duration))
    min_scenes, max_scenes = scene_count_bounds(template)

    candidates = sorted(
        range(min_scenes, max_scenes + 1),
        key=lambda count: (abs(count - preferred), -count),
    )
    for count in candidates:
        if _has_exact_split(total, count, constraints, template):
            if count != preferred:
                logger.info("Adjusted scene count for an exact split", extra={
                    "requested_total": total,
                    "preferred_scene_count": preferred,
                    "scene_count": count,
                })
            return plan_durations(total, count, constraints, template)

    return plan_durations(total, preferred, constraints, template)


def allocate_durations(
    total_duration: float,
    scene_count: int,
    constraints: Optional[ModelConstraints] = None,
    template: Optional[Template] = None,
) -> List[int]:
    """
    Per-scene durations of length scene_count.

    The list sums exactly to total_duration whenever a valid split exists;
    otherwise it sums to the nearest reachable total (a warning is logged).
    With constraints, every element is a supported duration.
    """
    return list(plan_durations(total_duration, scene_count, constraints, template).durations)
