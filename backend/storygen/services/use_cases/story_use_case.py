"""
GenerateStoryUseCase - validate settings and run one story pipeline.
"""

from storygen.core import get_logger
from storygen.models.api import StoryRequest
from storygen.models.story import StoryGenerationResult
from storygen.services.pipeline import StoryPipeline

from .base import UseCase

logger = get_logger(__name__, component="story_use_case")


class GenerateStoryUseCase(UseCase[StoryRequest, StoryGenerationResult]):
    """Builds settings from a request and runs the pipeline to completion."""

    def __init__(self, pipeline: StoryPipeline):
        self.pipeline = pipeline

    async def execute(self, request: StoryRequest) -> StoryGenerationResult:
        """
        Raises:
            InvalidSettingsError: Before any generation call, for invalid input
        """
        settings = request.to_settings()
        logger.info(
            "Story requested",
            extra={
                "template": settings.template,
                "duration": settings.duration,
                "video_model": settings.model_constraints.id if settings.model_constraints else None,
            },
        )
        return await self.pipeline.generate_story(settings)
