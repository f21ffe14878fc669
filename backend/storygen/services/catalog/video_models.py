"""
Video Model Catalog

Duration vocabularies and audio capability of the video models that render
story scenes. Each model only accepts clips of the listed lengths.
"""

from typing import Dict, List, Optional

from storygen.models.story import ModelConstraints

DEFAULT_VIDEO_MODEL = "seedance-1.0-pro"

_VIDEO_MODELS: List[ModelConstraints] = [
    ModelConstraints(
        id="seedance-1.0-pro",
        label="Seedance 1.0 Pro",
        supported_durations=(2, 4, 5, 6, 8, 10, 12),
        has_audio=False,
        aspect_ratios=("9:16", "16:9", "1:1", "4:5"),
    ),
    ModelConstraints(
        id="klingai-2.5-turbo-pro",
        label="Kling AI 2.5 Turbo Pro",
        supported_durations=(5, 10),
        has_audio=False,
        aspect_ratios=("9:16", "16:9", "1:1"),
    ),
    ModelConstraints(
        id="veo-3.0",
        label="Veo 3.0",
        supported_durations=(4, 6, 8),
        has_audio=True,
        aspect_ratios=("9:16", "16:9"),
    ),
    ModelConstraints(
        id="veo-3.1",
        label="Veo 3.1",
        supported_durations=(4, 6, 8),
        has_audio=True,
        aspect_ratios=("9:16", "16:9"),
    ),
    ModelConstraints(
        id="pixverse-v5.5",
        label="PixVerse V5.5",
        supported_durations=(5, 8),
        has_audio=True,
        aspect_ratios=("9:16", "16:9", "1:1", "4:5"),
    ),
    ModelConstraints(
        id="hailuo-2.3",
        label="Hailuo 2.3",
        supported_durations=(6, 10),
        has_audio=False,
        aspect_ratios=("9:16", "16:9", "1:1"),
    ),
    ModelConstraints(
        id="sora-2-pro",
        label="Sora 2 Pro",
        supported_durations=(4, 8, 12),
        has_audio=False,
        aspect_ratios=("9:16", "16:9"),
    ),
    ModelConstraints(
        id="ltx-2-pro",
        label="LTX-2 Pro",
        supported_durations=(6, 8, 10),
        has_audio=True,
        aspect_ratios=("9:16", "16:9"),
    ),
]

VIDEO_MODELS: Dict[str, ModelConstraints] = {model.id: model for model in _VIDEO_MODELS}


def get_video_model(model_id: str) -> Optional[ModelConstraints]:
    """Look up a video model's constraints. Unknown ids return None."""
    return VIDEO_MODELS.get(model_id)


def list_video_models() -> List[ModelConstraints]:
    return list(_VIDEO_MODELS)


def closest_supported_duration(target: float, constraints: ModelConstraints) -> int:
    """Nearest supported clip length, ties resolved toward the shorter clip."""
    return min(constraints.supported_durations, key=lambda d: (abs(d - target), d))
