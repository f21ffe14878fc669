"""
Ollama Generation Client

Implementation of GenerationClient for local models served by Ollama.
Structured requests pass the JSON Schema as the chat `format`.
"""

import os
from typing import Any, Dict, List, Optional

import httpx

from storygen.core.exceptions import GenerationCallError
from storygen.core.logging import get_logger

from .base import (
    GENERATION_TIMEOUT,
    GenerationClient,
    GenerationRequest,
    ProviderType,
    ensure_json_text,
)

logger = get_logger(__name__, component="ollama_client")


class OllamaGenerationClient(GenerationClient):
    """Ollama generation client for local models (gemma3, deepseek-r1, ...)"""

    provider_type = ProviderType.OLLAMA

    RECOMMENDED_MODELS = [
        "gemma3:12b",
        "gemma3:4b",
        "deepseek-r1:14b",
        "qwen2.5:14b",
    ]

    def __init__(self, base_url: Optional[str] = None, timeout: float = GENERATION_TIMEOUT):
        """
        Args:
            base_url: Ollama server URL. Defaults to OLLAMA_HOST env or http://localhost:11434
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or os.getenv("OLLAMA_HOST", "http://localhost:11434")).rstrip("/")
        self.timeout = timeout
        self._available_models: Optional[List[str]] = None

    def is_available(self) -> bool:
        try:
            with httpx.Client(timeout=5.0) as client:
                response = client.get(f"{self.base_url}/api/tags")
                return response.status_code == 200
        except httpx.HTTPError:
            return False

    def list_models(self) -> List[str]:
        if self._available_models is not None:
            return self._available_models

        try:
            with httpx.Client(timeout=10.0) as client:
                response = client.get(f"{self.base_url}/api/tags")
                response.raise_for_status()
                self._available_models = [m["name"] for m in response.json().get("models", [])]
                return self._available_models
        except httpx.HTTPError as e:
            logger.warning("Failed to list Ollama models", extra={"error": str(e)})

        return self.RECOMMENDED_MODELS.copy()

    def _build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        options: Dict[str, Any] = {"temperature": request.temperature}
        if request.max_tokens:
            options["num_predict"] = request.max_tokens

        payload: Dict[str, Any] = {
            "model": request.model,
            "messages": [m.to_dict() for m in request.messages],
            "stream": False,
            "options": options,
        }
        if request.response_format is not None:
            payload["format"] = request.response_format.schema
        return payload

    async def generate(self, request: GenerationRequest) -> str:
        payload = self._build_payload(request)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.base_url}/api/chat", json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            logger.error(
                "Ollama call timed out",
                extra={"model": request.model, "timeout_seconds": self.timeout},
            )
            raise GenerationCallError(
                f"Ollama call timed out after {self.timeout}s", provider=self.name
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "Ollama call failed",
                extra={"model": request.model, "error": str(e)},
            )
            raise GenerationCallError(f"Ollama call failed: {e}", provider=self.name) from e

        text = (data.get("message") or {}).get("content", "").strip()

        if request.expects_json:
            return ensure_json_text(text, provider=self.name)
        if not text:
            raise GenerationCallError("Empty response from Ollama", provider=self.name)
        return text
