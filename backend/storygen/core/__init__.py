"""
Core Module - Cross-cutting concerns and shared infrastructure

Organization:
    - logging.py: Structured logging configuration and utilities
    - exceptions.py: Exception hierarchy for the story pipeline
    - language.py: Language codes and reading speeds

Usage:
    from storygen.core import get_logger, LogTimer, InvalidSettingsError
"""

# Logging
from .logging import (
    setup_logging,
    get_logger,
    set_request_id,
    set_story_id,
    set_campaign_id,
    clear_context,
    LogTimer,
)

# Exceptions
from .exceptions import (
    StoryGenError,
    PipelineError,
    InfrastructureError,
    InvalidSettingsError,
    InvalidDurationError,
    GenerationCallError,
    SchemaValidationError,
    PipelineStageError,
    PipelineCancelledError,
)

# Language
from .language import (
    LANGUAGE_NAMES,
    get_language_name,
    normalize_language,
    words_per_second,
    is_arabic_text,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_request_id",
    "set_story_id",
    "set_campaign_id",
    "clear_context",
    "LogTimer",
    # Exceptions
    "StoryGenError",
    "PipelineError",
    "InfrastructureError",
    "InvalidSettingsError",
    "InvalidDurationError",
    "GenerationCallError",
    "SchemaValidationError",
    "PipelineStageError",
    "PipelineCancelledError",
    # Language
    "LANGUAGE_NAMES",
    "get_language_name",
    "normalize_language",
    "words_per_second",
    "is_arabic_text",
]
