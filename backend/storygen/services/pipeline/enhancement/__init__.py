"""
Storyboard Enhancement
"""

from .config import ENHANCE_BATCH_SIZE, DEFAULT_VOICE_MOOD
from .generator import StoryboardEnhancer, apply_fallbacks, batch_scenes
from .validation import validate_enhancement

__all__ = [
    "StoryboardEnhancer",
    "apply_fallbacks",
    "batch_scenes",
    "validate_enhancement",
    "ENHANCE_BATCH_SIZE",
    "DEFAULT_VOICE_MOOD",
]
