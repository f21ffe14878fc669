"""
StartCampaignUseCase - validate every topic up front, register the campaign
and schedule it as a background task.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import BackgroundTasks

from storygen.config import CAMPAIGN_MAX_CONCURRENT
from storygen.core import get_logger
from storygen.models.api import CampaignRequest
from storygen.services.campaigns import Campaign, CampaignManager, CampaignProcessor
from storygen.services.pipeline import StoryPipeline

from .base import UseCase

logger = get_logger(__name__, component="campaign_use_case")


@dataclass
class StartCampaignRequest:
    """
    Attributes:
        campaign: Topics plus the settings they share
        background_tasks: FastAPI task list the campaign run is added to
    """
    campaign: CampaignRequest
    background_tasks: BackgroundTasks


class StartCampaignUseCase(UseCase[StartCampaignRequest, Campaign]):
    """Handle campaign creation and background execution."""

    def __init__(
        self,
        pipeline: StoryPipeline,
        manager: CampaignManager,
        default_max_concurrent: Optional[int] = None,
    ):
        self.manager = manager
        self.processor = CampaignProcessor(pipeline, manager)
        self.default_max_concurrent = default_max_concurrent or CAMPAIGN_MAX_CONCURRENT

    async def execute(self, request: StartCampaignRequest) -> Campaign:
        """
        Raises:
            InvalidSettingsError: Any topic or the shared settings are invalid;
                nothing is scheduled in that case
        """
        campaign_request = request.campaign
        settings_list = [
            campaign_request.settings.to_settings(topic=topic) for topic in campaign_request.topics
        ]
        max_concurrent = campaign_request.max_concurrent or self.default_max_concurrent

        campaign = self.manager.create_campaign(settings_list, max_concurrent=max_concurrent)
        request.background_tasks.add_task(self.processor.run, campaign.id)

        logger.info(
            "Campaign scheduled",
            extra={
                "campaign_id": campaign.id,
                "story_count": len(settings_list),
                "max_concurrent": max_concurrent,
            },
        )
        return campaign
