"""
Base prompt types shared by every stage.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List


class PromptStage(str, Enum):
    """Stages that issue a text-generation call."""
    SCRIPT = "script"
    SCENES = "scenes"
    ENHANCE = "enhance"


@dataclass
class PromptTemplate:
    """
    A prompt template with placeholders.

    Usage:
        template = PromptTemplate(
            template="Write about {topic}",
            description="Topic prompt"
        )
        result = template.format(topic="coffee")
    """
    template: str
    description: str = ""

    def format(self, **kwargs) -> str:
        """Format the template with provided values"""
        try:
            return self.template.format(**kwargs)
        except (KeyError, ValueError, IndexError):
            # Templates that embed JSON braces: replace only the provided keys
            result = self.template
            for k, v in kwargs.items():
                result = result.replace("{" + k + "}", str(v))
            return result

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"


@dataclass(frozen=True)
class PromptBundle:
    """System prompt, user prompt and response schema for one call."""
    stage: PromptStage
    system_prompt: str
    user_prompt: str
    response_schema: Dict[str, Any]
    schema_name: str

    def to_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_prompt},
        ]

    def schema_json(self) -> str:
        """Canonical serialisation, stable across calls."""
        return json.dumps(self.response_schema, sort_keys=True, ensure_ascii=False)
