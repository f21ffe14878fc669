"""
Static catalogs: story templates and downstream video models.
"""

from .templates import (
    TEMPLATES,
    get_template,
    require_template,
    list_templates,
)
from .video_models import (
    DEFAULT_VIDEO_MODEL,
    VIDEO_MODELS,
    get_video_model,
    list_video_models,
    closest_supported_duration,
)

__all__ = [
    # Templates
    "TEMPLATES",
    "get_template",
    "require_template",
    "list_templates",
    # Video models
    "DEFAULT_VIDEO_MODEL",
    "VIDEO_MODELS",
    "get_video_model",
    "list_video_models",
    "closest_supported_duration",
]
