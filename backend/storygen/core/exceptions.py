"""
Core Exceptions
Standardized exceptions for the story generation pipeline.

Hierarchy:
    StoryGenError
    ├── PipelineError
    │   ├── InvalidSettingsError
    │   │   └── InvalidDurationError
    │   ├── SchemaValidationError
    │   ├── PipelineStageError
    │   └── PipelineCancelledError
    └── InfrastructureError
        └── GenerationCallError
"""

from typing import Any, Optional


class StoryGenError(Exception):
    """Base exception for all application errors."""
    pass


class PipelineError(StoryGenError):
    """Base exception for story pipeline errors."""
    pass


class InfrastructureError(StoryGenError):
    """Base exception for infrastructure errors (LLM providers, network)."""
    pass


class InvalidSettingsError(PipelineError):
    """Malformed or out-of-range generation settings.

    Raised before any network call is attempted and never retried.
    """
    pass


class InvalidDurationError(InvalidSettingsError):
    """A total or per-scene duration that cannot be allocated."""
    pass


class GenerationCallError(InfrastructureError):
    """The generation client could not produce a usable response.

    Covers unreachable providers, timeouts and non-JSON text returned
    for a structured-output request.
    """

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class SchemaValidationError(PipelineError):
    """Syntactically valid JSON that violates a required invariant."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(f"{field}: {message} (got {value!r})")
        self.field = field
        self.value = value


class PipelineCancelledError(PipelineError):
    """The pipeline was cancelled at a stage boundary."""

    def __init__(self, reason: str = "cancelled"):
        super().__init__(reason)
        self.reason = reason


class PipelineStageError(PipelineError):
    """Wraps any stage failure with the name of the failing stage."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"Stage {stage} failed: {cause}")
        self.stage = stage
        self.cause = cause
