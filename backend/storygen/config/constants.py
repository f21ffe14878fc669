"""
Story settings limits and vocabularies.
"""

# =============================================================================
# STORY DURATION
# =============================================================================

# Requested story length is clamped into this range (seconds)
MIN_STORY_DURATION = 10
MAX_STORY_DURATION = 120


# =============================================================================
# TOPIC
# =============================================================================

MIN_TOPIC_LENGTH = 1
MAX_TOPIC_LENGTH = 500


# =============================================================================
# VOCABULARIES
# =============================================================================

ASPECT_RATIOS = ["9:16", "16:9", "1:1", "4:5"]
DEFAULT_ASPECT_RATIO = "9:16"

MEDIA_TYPES = ["static", "animated"]

PACING_OPTIONS = ["slow", "medium", "fast"]
DEFAULT_PACING = "medium"

IMAGE_STYLES = [
    "photorealistic",
    "cinematic",
    "3d-render",
    "digital-art",
    "anime",
    "illustration",
    "watercolor",
    "minimalist",
]
DEFAULT_IMAGE_STYLE = "photorealistic"

DEFAULT_VOICE_VOLUME = 80
DEFAULT_MUSIC_VOLUME = 40
