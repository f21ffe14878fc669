"""
Pipeline and campaign status enumerations.
"""

from enum import Enum


class StoryStage(str, Enum):
    """States of a single story pipeline run."""

    PENDING = "PENDING"
    SCRIPT = "SCRIPT"
    SCENES = "SCENES"
    ENHANCE = "ENHANCE"
    VOICE = "VOICE"
    DONE = "DONE"
    FAILED = "FAILED"

    def is_terminal(self) -> bool:
        return self in (StoryStage.DONE, StoryStage.FAILED)


# Stages that do work, in execution order
WORK_STAGES = [StoryStage.SCRIPT, StoryStage.SCENES, StoryStage.ENHANCE, StoryStage.VOICE]


class CampaignStatus(str, Enum):
    """Lifecycle of a batch campaign."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        return self not in (CampaignStatus.PENDING, CampaignStatus.RUNNING)
