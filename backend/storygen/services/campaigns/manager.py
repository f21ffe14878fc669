"""
Campaign Manager - Track batch campaigns in memory.

Campaigns are not persisted: a restart forgets them.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional, Sequence

from storygen.models.status import CampaignStatus
from storygen.models.story import GenerationSettings, StoryGenerationResult

ITEM_PENDING = "pending"
ITEM_RUNNING = "running"
ITEM_COMPLETED = "completed"
ITEM_FAILED = "failed"


@dataclass
class CampaignItem:
    """One story of a campaign"""
    index: int
    settings: GenerationSettings
    story_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: str = ITEM_PENDING
    stage: Optional[str] = None
    progress: float = 0.0
    result: Optional[StoryGenerationResult] = None

    def to_dict(self, include_result: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "index": self.index,
            "topic": self.settings.topic,
            "storyId": self.story_id,
            "status": self.status,
            "stage": self.stage,
            "progress": self.progress,
        }
        if include_result and self.result is not None:
            data["result"] = self.result.to_dict()
        return data


@dataclass
class Campaign:
    id: str
    items: List[CampaignItem]
    max_concurrent: int
    status: CampaignStatus = CampaignStatus.PENDING
    error: Optional[str] = None
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event, repr=False)
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def counters(self) -> Dict[str, int]:
        statuses = [item.status for item in self.items]
        return {
            "total": len(self.items),
            "completed": statuses.count(ITEM_COMPLETED),
            "failed": statuses.count(ITEM_FAILED),
            "in_progress": statuses.count(ITEM_RUNNING),
            "pending": statuses.count(ITEM_PENDING),
        }

    def to_dict(self, include_results: bool = True) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "maxConcurrent": self.max_concurrent,
            "progress": self.counters(),
            "items": [item.to_dict(include_results) for item in self.items],
            "error": self.error,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class CampaignManager:
    """Thread-safe in-memory registry of campaigns"""

    def __init__(self):
        self._campaigns: Dict[str, Campaign] = {}
        self._lock = RLock()

    def create_campaign(
        self,
        settings_list: Sequence[GenerationSettings],
        max_concurrent: int,
        campaign_id: Optional[str] = None,
    ) -> Campaign:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        with self._lock:
            campaign = Campaign(
                id=campaign_id or str(uuid.uuid4()),
                items=[CampaignItem(index=i, settings=s) for i, s in enumerate(settings_list)],
                max_concurrent=max_concurrent,
            )
            self._campaigns[campaign.id] = campaign
            return campaign

    def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        with self._lock:
            return self._campaigns.get(campaign_id)

    def list_campaigns(self) -> List[Campaign]:
        with self._lock:
            return list(self._campaigns.values())

    def set_status(
        self,
        campaign_id: str,
        status: CampaignStatus,
        error: Optional[str] = None,
    ) -> None:
        with self._lock:
            campaign = self._campaigns.get(campaign_id)
            if not campaign:
                return
            campaign.status = status
            if error is not None:
                campaign.error = error
            campaign.updated_at = datetime.now().isoformat()

    def update_item(
        self,
        campaign_id: str,
        index: int,
        status: Optional[str] = None,
        stage: Optional[str] = None,
        progress: Optional[float] = None,
        result: Optional[StoryGenerationResult] = None,
    ) -> None:
        with self._lock:
            campaign = self._campaigns.get(campaign_id)
            if not campaign or not 0 <= index < len(campaign.items):
                return
            item = campaign.items[index]
            if status is not None:
                item.status = status
            if stage is not None:
                item.stage = stage
            if progress is not None:
                item.progress = progress
            if result is not None:
                item.result = result
            campaign.updated_at = datetime.now().isoformat()

    def request_cancel(self, campaign_id: str) -> bool:
        """Signal every pipeline of the campaign to stop at its next stage boundary.

        Returns False for unknown or already finished campaigns.
        """
        with self._lock:
            campaign = self._campaigns.get(campaign_id)
            if not campaign or campaign.status.is_terminal():
                return False
            campaign.cancel_event.set()
            campaign.updated_at = datetime.now().isoformat()
            return True


_campaign_manager: Optional[CampaignManager] = None


def get_campaign_manager() -> CampaignManager:
    """Get the process-wide campaign manager"""
    global _campaign_manager
    if _campaign_manager is None:
        _campaign_manager = CampaignManager()
    return _campaign_manager
