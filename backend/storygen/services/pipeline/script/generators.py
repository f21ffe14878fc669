"""
Script Generators

Static strategy registry mapping a template id to the generator that writes
its script. Narrated templates get a spoken script sized to the duration;
the ambient template gets a short English visual concept with no narration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Type

from storygen.config.models import get_model_config, get_model_name
from storygen.core import get_logger
from storygen.core.exceptions import InvalidSettingsError, SchemaValidationError
from storygen.core.language import count_words
from storygen.models.story import GenerationSettings
from storygen.services.infrastructure.parsing import require_json_object
from storygen.services.llm import GenerationClient, GenerationRequest
from storygen.services.pipeline.prompts import ComputedConstraints, PromptStage, build_prompt

from .cleaning import clean_story_text
from .config import MODEL_STEP, SCRIPT_MAX_TOKENS

logger = get_logger(__name__, component="script_generator")


@dataclass
class ScriptResult:
    """Output of the script stage"""
    title: str
    script: str
    word_count: int
    warnings: List[str] = field(default_factory=list)


class ScriptGenerator(ABC):
    """
    Writes the script for one story.

    Subclasses decide how the returned script is checked; the call itself
    (prompt compilation, structured request, JSON parsing, cleaning) is
    shared.
    """

    def __init__(
        self,
        client: GenerationClient,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        model_config = get_model_config(MODEL_STEP)
        self.client = client
        self.model = model or get_model_name(MODEL_STEP)
        self.temperature = model_config.temperature if temperature is None else temperature

    async def generate(
        self,
        settings: GenerationSettings,
        constraints: ComputedConstraints,
    ) -> ScriptResult:
        """
        Generate, clean and check a script.

        Raises:
            GenerationCallError: The client call failed
            SchemaValidationError: The script is empty or not a string
        """
        bundle = build_prompt(PromptStage.SCRIPT, settings, constraints)
        request = GenerationRequest.from_bundle(
            bundle,
            model=self.model,
            temperature=self.temperature,
            max_tokens=SCRIPT_MAX_TOKENS,
        )

        text = await self.client.generate(request)
        data = require_json_object(text, source="script generation")

        raw_script = data.get("script")
        if not isinstance(raw_script, str) or not raw_script.strip():
            raise SchemaValidationError("script", "script is empty", raw_script)

        script = clean_story_text(raw_script, extra_labels=constraints.template.stages)
        if not script:
            raise SchemaValidationError("script", "script is empty after cleaning", raw_script)
        if script != raw_script.strip():
            logger.info("Script cleaned of formatting", extra={"template": constraints.template.id})

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            title = settings.topic
        title = title.strip()

        result = ScriptResult(title=title, script=script, word_count=count_words(script))
        result.warnings.extend(self.check(result, constraints))

        logger.info(
            "Script generated",
            extra={
                "template": constraints.template.id,
                "word_count": result.word_count,
                "word_target": constraints.total_word_target,
            },
        )
        return result

    @abstractmethod
    def check(self, result: ScriptResult, constraints: ComputedConstraints) -> List[str]:
        """Soft checks on a generated script; returns warning messages"""
        pass


class NarratedScriptGenerator(ScriptGenerator):
    """Spoken script whose length tracks the story duration"""

    def check(self, result: ScriptResult, constraints: ComputedConstraints) -> List[str]:
        warnings = []
        if result.word_count < constraints.script_word_min:
            warnings.append(
                f"Script is short: {result.word_count} words "
                f"(expected {constraints.total_word_target})"
            )
        elif result.word_count > constraints.script_word_max:
            warnings.append(
                f"Script is long: {result.word_count} words "
                f"(expected {constraints.total_word_target})"
            )
        for warning in warnings:
            logger.warning(warning, extra={"template": constraints.template.id})
        return warnings


class AmbientScriptGenerator(ScriptGenerator):
    """Visual concept for ambient content; never narrated"""

    def check(self, result: ScriptResult, constraints: ComputedConstraints) -> List[str]:
        return []


# Template id -> generator class
SCRIPT_GENERATORS: Dict[str, Type[ScriptGenerator]] = {
    "problem-solution": NarratedScriptGenerator,
    "tease-reveal": NarratedScriptGenerator,
    "before-after": NarratedScriptGenerator,
    "myth-busting": NarratedScriptGenerator,
    "auto-asmr": AmbientScriptGenerator,
}


def registered_templates() -> Tuple[str, ...]:
    return tuple(SCRIPT_GENERATORS)


def get_script_generator(
    template_id: str,
    client: GenerationClient,
    model: Optional[str] = None,
) -> ScriptGenerator:
    """
    Instantiate the script generator registered for a template.

    Raises:
        InvalidSettingsError: No generator is registered for the template
    """
    generator_cls = SCRIPT_GENERATORS.get(template_id)
    if generator_cls is None:
        raise InvalidSettingsError(f"No script generator registered for template: {template_id}")
    return generator_cls(client, model=model)
