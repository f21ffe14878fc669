"""
Campaigns - batches of topics processed concurrently
"""

from .manager import (
    Campaign,
    CampaignItem,
    CampaignManager,
    get_campaign_manager,
)
from .processor import CampaignProcessor, final_status

__all__ = [
    "Campaign",
    "CampaignItem",
    "CampaignManager",
    "get_campaign_manager",
    "CampaignProcessor",
    "final_status",
]
