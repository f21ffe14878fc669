"""
Generation Client - port to external text-generation services

Adapters:
- Gemini (google-genai)
- Ollama (local models over HTTP)
- Fixture (deterministic test double)

Usage:
    from storygen.services.llm import get_generation_client, GenerationRequest

    client = get_generation_client()
    text = await client.generate(GenerationRequest.from_bundle(bundle, model="gemini-2.5-flash"))
"""

from .base import (
    GenerationClient,
    GenerationRequest,
    Message,
    ResponseFormat,
    ProviderType,
    GENERATION_TIMEOUT,
    ensure_json_text,
)
from .factory import get_generation_client, get_default_provider_type, clear_client_cache
from .fixture_provider import FixtureGenerationClient
from .gemini_provider import GeminiGenerationClient
from .ollama_provider import OllamaGenerationClient

__all__ = [
    # Port
    "GenerationClient",
    "GenerationRequest",
    "Message",
    "ResponseFormat",
    "ProviderType",
    "GENERATION_TIMEOUT",
    "ensure_json_text",
    # Adapters
    "GeminiGenerationClient",
    "OllamaGenerationClient",
    "FixtureGenerationClient",
    # Factory
    "get_generation_client",
    "get_default_provider_type",
    "clear_client_cache",
]
