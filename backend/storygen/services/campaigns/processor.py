"""
Campaign Batch Processor

Runs the stories of a campaign through independent pipelines with a bounded
number in flight. Stories share no mutable state; one story failing never
affects another. Cancelling the campaign stops every pipeline at its next
stage boundary.
"""

import asyncio
from typing import List

from storygen.core import LogTimer, get_logger
from storygen.core.logging import campaign_id_var
from storygen.models.status import CampaignStatus
from storygen.models.story import StoryGenerationResult
from storygen.services.pipeline import StageProgress, StoryPipeline

from .manager import (
    ITEM_COMPLETED,
    ITEM_FAILED,
    ITEM_RUNNING,
    Campaign,
    CampaignManager,
)

logger = get_logger(__name__, component="campaign_processor")


def final_status(campaign: Campaign, results: List[StoryGenerationResult]) -> CampaignStatus:
    if campaign.cancel_event.is_set():
        return CampaignStatus.CANCELLED
    succeeded = sum(1 for r in results if r.success)
    if succeeded == len(results):
        return CampaignStatus.COMPLETED
    if succeeded == 0:
        return CampaignStatus.FAILED
    return CampaignStatus.PARTIAL


class CampaignProcessor:
    """
    Usage:
        processor = CampaignProcessor(StoryPipeline(client), get_campaign_manager())
        results = await processor.run(campaign.id)
    """

    def __init__(self, pipeline: StoryPipeline, manager: CampaignManager):
        self.pipeline = pipeline
        self.manager = manager

    async def run(self, campaign_id: str) -> List[StoryGenerationResult]:
        """
        Process every story of a campaign.

        Returns:
            One result per story, in campaign order

        Raises:
            KeyError: Unknown campaign id
        """
        campaign = self.manager.get_campaign(campaign_id)
        if campaign is None:
            raise KeyError(campaign_id)

        token = campaign_id_var.set(campaign_id)
        try:
            with LogTimer(logger, f"campaign {campaign_id}"):
                return await self._run(campaign)
        finally:
            campaign_id_var.reset(token)

    async def _run(self, campaign: Campaign) -> List[StoryGenerationResult]:
        semaphore = asyncio.Semaphore(campaign.max_concurrent)
        self.manager.set_status(campaign.id, CampaignStatus.RUNNING)

        logger.info(
            "Campaign started",
            extra={"story_count": len(campaign.items), "max_concurrent": campaign.max_concurrent},
        )

        async def process_item(index: int) -> StoryGenerationResult:
            item = campaign.items[index]
            async with semaphore:
                self.manager.update_item(campaign.id, index, status=ITEM_RUNNING)

                def on_progress(progress: StageProgress) -> None:
                    self.manager.update_item(
                        campaign.id, index, stage=progress.stage, progress=progress.progress
                    )

                result = await self.pipeline.generate_story(
                    item.settings,
                    cancel_event=campaign.cancel_event,
                    on_progress=on_progress,
                    story_id=item.story_id,
                )
                self.manager.update_item(
                    campaign.id,
                    index,
                    status=ITEM_COMPLETED if result.success else ITEM_FAILED,
                    result=result,
                )
                return result

        tasks = [process_item(index) for index in range(len(campaign.items))]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: List[StoryGenerationResult] = []
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, BaseException):
                # The pipeline converts stage errors to results; this is a bug path
                logger.error(
                    "Campaign story raised",
                    extra={"index": index, "error": str(outcome), "error_type": type(outcome).__name__},
                )
                outcome = StoryGenerationResult.failed(
                    story_id=campaign.items[index].story_id,
                    error=str(outcome),
                )
                self.manager.update_item(campaign.id, index, status=ITEM_FAILED, result=outcome)
            results.append(outcome)

        status = final_status(campaign, results)
        self.manager.set_status(campaign.id, status)

        counters = campaign.counters()
        logger.info(
            "Campaign finished",
            extra={"status": status.value, **counters},
        )
        return results
