"""
Tests for storygen.core.exceptions
"""

import pytest

from storygen.core.exceptions import (
    GenerationCallError,
    InfrastructureError,
    InvalidDurationError,
    InvalidSettingsError,
    PipelineCancelledError,
    PipelineError,
    PipelineStageError,
    SchemaValidationError,
    StoryGenError,
)


class TestHierarchy:
    """Callers catch by category, so the hierarchy is part of the contract"""

    @pytest.mark.parametrize("error_cls, parent", [
        (PipelineError, StoryGenError),
        (InfrastructureError, StoryGenError),
        (InvalidSettingsError, PipelineError),
        (InvalidDurationError, InvalidSettingsError),
        (SchemaValidationError, PipelineError),
        (PipelineStageError, PipelineError),
        (PipelineCancelledError, PipelineError),
        (GenerationCallError, InfrastructureError),
    ])
    def test_subclassing(self, error_cls, parent):
        assert issubclass(error_cls, parent)


class TestErrorDetails:

    def test_schema_validation_error_names_field(self):
        error = SchemaValidationError("totalDuration", "expected 30", 31)

        assert error.field == "totalDuration"
        assert error.value == 31
        assert str(error) == "totalDuration: expected 30 (got 31)"

    def test_generation_call_error_keeps_provider(self):
        error = GenerationCallError("timed out", provider="ollama")

        assert error.provider == "ollama"
        assert str(error) == "timed out"

    def test_stage_error_wraps_cause(self):
        cause = SchemaValidationError("scenes", "expected 5 scenes", 4)
        error = PipelineStageError("SCENES", cause)

        assert error.stage == "SCENES"
        assert error.cause is cause
        assert str(error).startswith("Stage SCENES failed: scenes:")

    def test_cancelled_error_reason(self):
        assert PipelineCancelledError().reason == "cancelled"
        assert PipelineCancelledError("user request").reason == "user request"
