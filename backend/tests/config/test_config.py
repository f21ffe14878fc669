"""
Tests for config module

Tests API constants, provider selection and per-stage model settings.
"""

import pytest

from storygen.config import (
    API_TITLE,
    API_VERSION,
    CORS_ORIGINS,
    CAMPAIGN_MAX_CONCURRENT,
    MIN_STORY_DURATION,
    MAX_STORY_DURATION,
)
from storygen.config.models import (
    DEFAULT_PIPELINE_MODELS,
    LLMProviderType,
    ModelConfig,
    PipelineModels,
    get_active_provider,
    get_model_config,
    get_model_name,
    list_pipeline_steps,
)


class TestConstants:
    """Test suite for application constants"""

    def test_api_metadata(self):
        assert API_TITLE == "StoryGen API"
        assert API_VERSION

    def test_cors_origins_is_list(self):
        assert isinstance(CORS_ORIGINS, list)
        assert all(origin.startswith("http") for origin in CORS_ORIGINS)

    def test_story_duration_range(self):
        assert MIN_STORY_DURATION == 10
        assert MAX_STORY_DURATION == 120

    def test_campaign_concurrency_positive(self):
        assert CAMPAIGN_MAX_CONCURRENT >= 1


class TestActiveProvider:
    """Provider resolution from the environment"""

    def test_explicit_ollama(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "ollama")
        monkeypatch.setenv("GEMINI_API_KEY", "key")
        assert get_active_provider() == LLMProviderType.OLLAMA

    def test_explicit_gemini(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "Gemini")
        assert get_active_provider() == LLMProviderType.GEMINI

    def test_api_key_selects_gemini(self, monkeypatch):
        monkeypatch.delenv("LLM_PROVIDER", raising=False)
        monkeypatch.setenv("GEMINI_API_KEY", "key")
        assert get_active_provider() == LLMProviderType.GEMINI

    def test_defaults_to_ollama(self, monkeypatch):
        monkeypatch.delenv("LLM_PROVIDER", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        assert get_active_provider() == LLMProviderType.OLLAMA


class TestModelConfig:
    """Test suite for per-stage model configuration"""

    def test_pipeline_has_every_step(self):
        pipeline = PipelineModels()
        for step in list_pipeline_steps():
            assert isinstance(getattr(pipeline, step), ModelConfig)

    def test_scene_breakdown_is_cooler_than_script(self):
        assert DEFAULT_PIPELINE_MODELS.scene_breakdown.temperature < DEFAULT_PIPELINE_MODELS.script_generation.temperature

    def test_get_model_config_unknown_step(self):
        with pytest.raises(ValueError, match="Unknown pipeline step"):
            get_model_config("rendering")

    def test_model_name_for_gemini(self):
        assert get_model_name("script_generation", LLMProviderType.GEMINI) == "gemini-2.5-flash"

    def test_model_name_maps_to_ollama(self):
        assert get_model_name("scene_breakdown", LLMProviderType.OLLAMA) == "gemma3:12b"

    def test_ollama_override_wins(self):
        config = ModelConfig(model_name="gemini-2.5-pro", ollama_model="llama3:8b")
        assert config.get_model_for_provider(LLMProviderType.OLLAMA) == "llama3:8b"
        assert config.get_model_for_provider(LLMProviderType.GEMINI) == "gemini-2.5-pro"

    def test_unmapped_gemini_model_falls_back(self):
        config = ModelConfig(model_name="gemini-unknown")
        assert config.get_model_for_provider(LLMProviderType.OLLAMA) == "gemma3:12b"
