"""
Tests for storygen.services.use_cases.campaign_use_case
"""

from unittest.mock import MagicMock

import pytest
from fastapi import BackgroundTasks

from storygen.core.exceptions import InvalidSettingsError
from storygen.models.api import CampaignRequest
from storygen.services.campaigns import CampaignManager
from storygen.services.pipeline import StoryPipeline
from storygen.services.use_cases import StartCampaignRequest, StartCampaignUseCase, UseCase


class TestStartCampaignUseCase:
    """Test StartCampaignUseCase scheduling."""

    @pytest.fixture
    def manager(self):
        return CampaignManager()

    def test_is_a_use_case(self, manager, story_client):
        assert isinstance(StartCampaignUseCase(StoryPipeline(story_client), manager), UseCase)

    @pytest.mark.asyncio
    async def test_execute_schedules_background_run(self, manager, story_client):
        background_tasks = MagicMock(spec=BackgroundTasks)
        request = StartCampaignRequest(
            campaign=CampaignRequest(
                topics=["Coffee", "Tea", "Cocoa"],
                settings={"template": "tease-reveal", "topic": "unused", "duration": 20},
            ),
            background_tasks=background_tasks,
        )
        use_case = StartCampaignUseCase(StoryPipeline(story_client), manager, default_max_concurrent=2)

        campaign = await use_case.execute(request)

        assert manager.get_campaign(campaign.id) is campaign
        assert campaign.max_concurrent == 2
        assert [item.settings.topic for item in campaign.items] == ["Coffee", "Tea", "Cocoa"]
        background_tasks.add_task.assert_called_once_with(use_case.processor.run, campaign.id)

    @pytest.mark.asyncio
    async def test_request_concurrency_wins(self, manager, story_client):
        request = StartCampaignRequest(
            campaign=CampaignRequest(
                topics=["Coffee"],
                settings={"template": "tease-reveal", "topic": "unused"},
                max_concurrent=5,
            ),
            background_tasks=MagicMock(spec=BackgroundTasks),
        )

        campaign = await StartCampaignUseCase(StoryPipeline(story_client), manager).execute(request)

        assert campaign.max_concurrent == 5

    @pytest.mark.asyncio
    async def test_one_invalid_topic_rejects_campaign(self, manager, story_client):
        background_tasks = MagicMock(spec=BackgroundTasks)
        request = StartCampaignRequest(
            campaign=CampaignRequest(
                topics=["Coffee", ""],
                settings={"template": "tease-reveal", "topic": "unused"},
            ),
            background_tasks=background_tasks,
        )

        with pytest.raises(InvalidSettingsError):
            await StartCampaignUseCase(StoryPipeline(story_client), manager).execute(request)

        assert manager.list_campaigns() == []
        background_tasks.add_task.assert_not_called()
