"""
Generation Client Factory

Creates and caches generation client instances based on configuration.
"""

from typing import Dict, Optional

from storygen.config.models import LLMProviderType, get_active_provider

from .base import GENERATION_TIMEOUT, GenerationClient, ProviderType
from .gemini_provider import GeminiGenerationClient
from .ollama_provider import OllamaGenerationClient


_client_cache: Dict[ProviderType, GenerationClient] = {}


def get_default_provider_type() -> ProviderType:
    """Provider from LLM_PROVIDER, else Gemini when GEMINI_API_KEY is set, else Ollama"""
    if get_active_provider() == LLMProviderType.GEMINI:
        return ProviderType.GEMINI
    return ProviderType.OLLAMA


def get_generation_client(
    provider_type: Optional[ProviderType] = None,
    use_cache: bool = True,
    **kwargs
) -> GenerationClient:
    """
    Get a generation client instance

    Args:
        provider_type: Specific provider to use. If None, uses the default
        use_cache: Whether to cache and reuse client instances
        **kwargs: Provider-specific options (api_key, base_url, timeout)

    Raises:
        ValueError: If the provider is unknown or not configured
    """
    if provider_type is None:
        provider_type = get_default_provider_type()
    provider_type = ProviderType(provider_type)

    if use_cache and provider_type in _client_cache:
        return _client_cache[provider_type]

    timeout = kwargs.get("timeout", GENERATION_TIMEOUT)
    client: GenerationClient

    if provider_type == ProviderType.GEMINI:
        client = GeminiGenerationClient(api_key=kwargs.get("api_key"), timeout=timeout)
        if not client.is_available():
            raise ValueError(
                "Gemini client is not available. "
                "Set GEMINI_API_KEY environment variable or use LLM_PROVIDER=ollama"
            )
    elif provider_type == ProviderType.OLLAMA:
        # Availability is checked per call; the server may start later
        client = OllamaGenerationClient(base_url=kwargs.get("base_url"), timeout=timeout)
    else:
        raise ValueError(f"No factory support for provider: {provider_type.value}")

    if use_cache:
        _client_cache[provider_type] = client

    return client


def clear_client_cache() -> None:
    _client_cache.clear()
