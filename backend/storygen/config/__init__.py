"""
Application configuration and settings
"""

import os

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Model configuration
from .models import (
    ModelConfig,
    PipelineModels,
    LLMProviderType,
    DEFAULT_PIPELINE_MODELS,
    OLLAMA_PIPELINE,
    get_active_provider,
    get_model_config,
    get_model_name,
    list_pipeline_steps,
)
from .constants import (
    MIN_STORY_DURATION,
    MAX_STORY_DURATION,
    MAX_TOPIC_LENGTH,
    ASPECT_RATIOS,
    MEDIA_TYPES,
    PACING_OPTIONS,
    IMAGE_STYLES,
)

# API settings
API_TITLE = "StoryGen API"
API_DESCRIPTION = "Turn a topic into a fully-timed sequence of short-video scenes"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]

# LLM Provider settings
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "").lower() or None  # "gemini" or "ollama"
OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Campaign settings
CAMPAIGN_MAX_CONCURRENT = int(os.getenv("CAMPAIGN_MAX_CONCURRENT", "3"))

__all__ = [
    "ModelConfig",
    "PipelineModels",
    "LLMProviderType",
    "DEFAULT_PIPELINE_MODELS",
    "OLLAMA_PIPELINE",
    "get_active_provider",
    "get_model_config",
    "get_model_name",
    "list_pipeline_steps",
    "MIN_STORY_DURATION",
    "MAX_STORY_DURATION",
    "MAX_TOPIC_LENGTH",
    "ASPECT_RATIOS",
    "MEDIA_TYPES",
    "PACING_OPTIONS",
    "IMAGE_STYLES",
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
    "LLM_PROVIDER",
    "OLLAMA_HOST",
    "GEMINI_API_KEY",
    "CAMPAIGN_MAX_CONCURRENT",
]
