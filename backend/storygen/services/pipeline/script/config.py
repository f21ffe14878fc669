"""
Script Generation Configuration
"""

# =============================================================================
# GENERATION SETTINGS
# =============================================================================

# Model configuration step (see storygen.config.models)
MODEL_STEP = "script_generation"

# Upper bound for generated script length (tokens)
SCRIPT_MAX_TOKENS = 2000


# =============================================================================
# CLEANING SETTINGS
# =============================================================================

# Beat labels a model may prefix lines with ("Hook:", "Scene 2:")
GENERIC_STAGE_LABELS = (
    "hook",
    "problem",
    "solution",
    "close",
    "scene",
    "part",
    "call-to-action",
    "cta",
)
