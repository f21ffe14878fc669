"""
Gemini Generation Client

Implementation of GenerationClient for Google's Gemini models via the
google-genai SDK. Structured requests use native JSON mode with the
response schema attached.
"""

import asyncio
import os
from typing import Any, List, Optional

from google import genai
from google.genai import types

from storygen.core.exceptions import GenerationCallError
from storygen.core.logging import get_logger

from .base import (
    GENERATION_TIMEOUT,
    GenerationClient,
    GenerationRequest,
    ProviderType,
    ensure_json_text,
)

logger = get_logger(__name__, component="gemini_client")


class GeminiGenerationClient(GenerationClient):
    """Google Gemini generation client"""

    provider_type = ProviderType.GEMINI

    AVAILABLE_MODELS = [
        "gemini-2.5-flash",
        "gemini-2.5-pro",
        "gemini-3-flash-preview",
        "gemini-flash-lite-latest",
    ]

    def __init__(self, api_key: Optional[str] = None, timeout: float = GENERATION_TIMEOUT):
        """
        Args:
            api_key: Gemini API key. If not provided, uses GEMINI_API_KEY env var
            timeout: Per-call timeout in seconds
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        self.timeout = timeout
        self.client = genai.Client(api_key=self.api_key) if self.api_key else None

    def is_available(self) -> bool:
        return self.client is not None

    def list_models(self) -> List[str]:
        return self.AVAILABLE_MODELS.copy()

    def _build_contents(self, request: GenerationRequest) -> List[Any]:
        contents = []
        for message in request.conversation:
            role = "model" if message.role == "assistant" else "user"
            contents.append(
                types.Content(role=role, parts=[types.Part.from_text(text=message.content)])
            )
        return contents

    def _build_config(self, request: GenerationRequest) -> Any:
        kwargs: dict = {"temperature": request.temperature}

        if request.max_tokens:
            kwargs["max_output_tokens"] = request.max_tokens

        system_instruction = request.system_instruction
        if system_instruction:
            kwargs["system_instruction"] = system_instruction

        if request.response_format is not None:
            kwargs["response_mime_type"] = "application/json"
            kwargs["response_json_schema"] = request.response_format.schema

        return types.GenerateContentConfig(**kwargs)

    async def generate(self, request: GenerationRequest) -> str:
        if not self.is_available():
            raise GenerationCallError(
                "Gemini client is not available. Set GEMINI_API_KEY.",
                provider=self.name,
            )

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.models.generate_content,
                    model=request.model,
                    contents=self._build_contents(request),
                    config=self._build_config(request),
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(
                "Gemini call timed out",
                extra={"model": request.model, "timeout_seconds": self.timeout},
            )
            raise GenerationCallError(
                f"Gemini call timed out after {self.timeout}s", provider=self.name
            )
        except GenerationCallError:
            raise
        except Exception as e:
            logger.error(
                "Gemini call failed",
                extra={"model": request.model, "error": str(e)},
            )
            raise GenerationCallError(f"Gemini call failed: {e}", provider=self.name) from e

        text = (response.text or "").strip()
        logger.debug(
            "Gemini response received",
            extra={"model": request.model, "response_chars": len(text)},
        )

        if request.expects_json:
            return ensure_json_text(text, provider=self.name)
        if not text:
            raise GenerationCallError("Empty response from Gemini", provider=self.name)
        return text
