"""
Shared route dependencies
"""

from fastapi import HTTPException

from storygen.core import get_logger
from storygen.services.campaigns import CampaignManager, get_campaign_manager
from storygen.services.llm import get_generation_client
from storygen.services.pipeline import StoryPipeline

logger = get_logger(__name__, component="routes")


def get_story_pipeline() -> StoryPipeline:
    """Pipeline bound to the configured generation client"""
    try:
        client = get_generation_client()
    except ValueError as e:
        logger.error("Generation client unavailable", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=str(e))
    return StoryPipeline(client)


def get_manager() -> CampaignManager:
    return get_campaign_manager()
