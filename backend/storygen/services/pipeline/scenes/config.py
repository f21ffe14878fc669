"""
Scene Breakdown Configuration
"""

# Model configuration step (see storygen.config.models)
MODEL_STEP = "scene_breakdown"

# Upper bound for the breakdown response (tokens)
BREAKDOWN_MAX_TOKENS = 8192

# =============================================================================
# SOUND DESCRIPTIONS
# =============================================================================

# Prompts ask for 2-6 words; anything past this cap is prose, not a sound cue
SOUND_DESCRIPTION_MAX_WORDS = 10
SENTENCE_TERMINATORS = (".", "!", "?")
