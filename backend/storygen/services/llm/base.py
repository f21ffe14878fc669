"""
Base classes for generation clients

Defines the request shape and the abstract port every text-generation
adapter implements. Adapters return raw text; parsing and validation happen
in the pipeline stages.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from storygen.core.exceptions import GenerationCallError
from storygen.services.infrastructure.parsing import parse_json_response


class ProviderType(str, Enum):
    """Supported generation providers"""
    GEMINI = "gemini"
    OLLAMA = "ollama"
    FIXTURE = "fixture"


# Default timeout for a single generation call, in seconds
GENERATION_TIMEOUT = 120.0


@dataclass
class Message:
    """One chat message"""
    role: str  # "system" | "user" | "assistant"
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ResponseFormat:
    """Structured output request: a named JSON Schema"""
    name: str
    schema: Dict[str, Any]
    type: str = "json_schema"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "json_schema": {"name": self.name, "schema": self.schema},
        }


@dataclass
class GenerationRequest:
    """A single structured request to a text-generation service"""
    model: str
    messages: List[Message] = field(default_factory=list)
    temperature: float = 0.7
    max_tokens: Optional[int] = None
    response_format: Optional[ResponseFormat] = None

    @property
    def system_instruction(self) -> str:
        """All system messages joined, in order"""
        return "\n\n".join(m.content for m in self.messages if m.role == "system")

    @property
    def conversation(self) -> List[Message]:
        """Non-system messages"""
        return [m for m in self.messages if m.role != "system"]

    @property
    def expects_json(self) -> bool:
        return self.response_format is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
        }
        if self.max_tokens is not None:
            data["max_tokens"] = self.max_tokens
        if self.response_format is not None:
            data["response_format"] = self.response_format.to_dict()
        return data

    @classmethod
    def from_bundle(
        cls,
        bundle: Any,
        model: str,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> "GenerationRequest":
        """Build a request from a compiled PromptBundle"""
        return cls(
            model=model,
            messages=[Message(**m) for m in bundle.to_messages()],
            temperature=temperature,
            max_tokens=max_tokens,
            response_format=ResponseFormat(
                name=bundle.schema_name,
                schema=bundle.response_schema,
            ),
        )


def ensure_json_text(text: Optional[str], provider: str) -> str:
    """Return text that parses to a JSON object, or raise GenerationCallError.

    Fenced or chatter-wrapped payloads are normalised to the bare object.
    """
    if not text or not text.strip():
        raise GenerationCallError("Empty response for a structured request", provider=provider)

    stripped = text.strip()
    parsed = parse_json_response(stripped)
    if parsed is None:
        raise GenerationCallError(
            f"Non-JSON response for a structured request: {stripped[:120]!r}",
            provider=provider,
        )
    try:
        if json.loads(stripped) == parsed:
            return stripped
    except json.JSONDecodeError:
        pass
    return json.dumps(parsed, ensure_ascii=False)


class GenerationClient(ABC):
    """Abstract port to an external text-generation service

    Implementations must raise GenerationCallError for unreachable
    providers, timeouts and non-JSON responses to structured requests.
    """

    provider_type: ProviderType

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> str:
        """Send the request and return the raw response text"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and properly configured"""
        pass

    @abstractmethod
    def list_models(self) -> List[str]:
        """List available models for this provider"""
        pass

    @property
    def name(self) -> str:
        return self.provider_type.value
