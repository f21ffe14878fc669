"""
Storyboard Enhancement Configuration
"""

# =============================================================================
# GENERATION SETTINGS
# =============================================================================

# Model configuration step (see storygen.config.models)
MODEL_STEP = "enhancement"

# Scenes enhanced per call
ENHANCE_BATCH_SIZE = 6

# Upper bound for one batch response (tokens)
ENHANCE_MAX_TOKENS = 8192


# =============================================================================
# FALLBACKS
# =============================================================================

# Voice mood used when voiceover is on and a scene has none
DEFAULT_VOICE_MOOD = "neutral"
