"""
Use cases - business operations independent of HTTP
"""

from .base import UseCase
from .story_use_case import GenerateStoryUseCase
from .campaign_use_case import StartCampaignRequest, StartCampaignUseCase

__all__ = [
    "UseCase",
    "GenerateStoryUseCase",
    "StartCampaignRequest",
    "StartCampaignUseCase",
]
