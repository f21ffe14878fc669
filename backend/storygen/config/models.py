"""
Model Configuration for Pipeline Stages

Each text-generation stage of the story pipeline has its own model
configuration so the stages can be tuned independently.

=== PROVIDER CONFIGURATION ===

Set LLM_PROVIDER environment variable to switch providers:
    - "gemini" : Use Google Gemini API (requires GEMINI_API_KEY)
    - "ollama" : Use local Ollama models

Without LLM_PROVIDER, Gemini is used when GEMINI_API_KEY is set,
otherwise Ollama. For Ollama, set OLLAMA_HOST if not using the default
(http://localhost:11434).
"""

import os
from enum import Enum
from typing import Optional
from dataclasses import dataclass, field


class LLMProviderType(str, Enum):
    """Supported LLM providers"""
    GEMINI = "gemini"
    OLLAMA = "ollama"


def get_active_provider() -> LLMProviderType:
    """Get the active LLM provider from environment

    Priority:
    1. Explicit LLM_PROVIDER env var
    2. If GEMINI_API_KEY is set, use Gemini
    3. Default to Ollama (local)
    """
    provider_env = os.getenv("LLM_PROVIDER", "").lower()

    if provider_env == "ollama":
        return LLMProviderType.OLLAMA
    elif provider_env == "gemini":
        return LLMProviderType.GEMINI

    if os.getenv("GEMINI_API_KEY"):
        return LLMProviderType.GEMINI

    return LLMProviderType.OLLAMA


DEFAULT_OLLAMA_GENERAL = "gemma3:12b"

GEMINI_TO_OLLAMA_MAP = {
    "gemini-flash-lite-latest": "gemma3:4b",
    "gemini-2.5-flash": DEFAULT_OLLAMA_GENERAL,
    "gemini-3-flash-preview": DEFAULT_OLLAMA_GENERAL,
    "gemini-2.5-pro": "deepseek-r1:32b",
}


@dataclass
class ModelConfig:
    """Configuration for a single stage model

    model_name is the Gemini model; when Ollama is active it is mapped to a
    local equivalent unless ollama_model overrides the mapping.
    """
    model_name: str
    ollama_model: Optional[str] = None
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    description: str = ""

    def get_model_for_provider(self, provider: LLMProviderType) -> str:
        if provider == LLMProviderType.OLLAMA:
            if self.ollama_model:
                return self.ollama_model
            return GEMINI_TO_OLLAMA_MAP.get(self.model_name, DEFAULT_OLLAMA_GENERAL)
        return self.model_name


@dataclass
class PipelineModels:
    """
    Model configuration for each text-generation stage.

    Pipeline Stages:
    1. Script Generation - Write the story script for a topic
    2. Scene Breakdown - Split the script into timed scenes
    3. Enhancement - Add image/video prompts, voice text and transitions
    """

    script_generation: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.8,
        description="Creative short-form script writing"
    ))

    scene_breakdown: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.4,
        max_tokens=8192,
        description="Structured scene timing"
    ))

    enhancement: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name="gemini-2.5-flash",
        temperature=0.6,
        max_tokens=8192,
        description="Storyboard enrichment"
    ))


DEFAULT_PIPELINE_MODELS = PipelineModels()

OLLAMA_PIPELINE = PipelineModels(
    script_generation=ModelConfig(
        model_name="gemini-2.5-flash",
        ollama_model=DEFAULT_OLLAMA_GENERAL,
        temperature=0.8,
        description="Local script writing"
    ),
    scene_breakdown=ModelConfig(
        model_name="gemini-2.5-flash",
        ollama_model=DEFAULT_OLLAMA_GENERAL,
        temperature=0.3,
        description="Local scene timing (lower temperature for schema compliance)"
    ),
    enhancement=ModelConfig(
        model_name="gemini-2.5-flash",
        ollama_model=DEFAULT_OLLAMA_GENERAL,
        temperature=0.5,
        description="Local storyboard enrichment"
    ),
)


def list_pipeline_steps() -> list[str]:
    """List all configurable pipeline step names"""
    return ["script_generation", "scene_breakdown", "enhancement"]


def get_model_config(step: str, provider: Optional[LLMProviderType] = None) -> ModelConfig:
    """
    Get the model configuration for a specific pipeline step.

    Args:
        step: Pipeline step name (e.g., 'script_generation')
        provider: LLM provider (defaults to the active provider)

    Raises:
        ValueError: If the step is unknown
    """
    if provider is None:
        provider = get_active_provider()
    pipeline = OLLAMA_PIPELINE if provider == LLMProviderType.OLLAMA else DEFAULT_PIPELINE_MODELS

    if step in list_pipeline_steps():
        return getattr(pipeline, step)
    raise ValueError(f"Unknown pipeline step: {step}")


def get_model_name(step: str, provider: Optional[LLMProviderType] = None) -> str:
    """Get the model name for a pipeline step and provider."""
    if provider is None:
        provider = get_active_provider()
    return get_model_config(step, provider).get_model_for_provider(provider)
