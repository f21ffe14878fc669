"""
Campaign routes: batch generation in the background
"""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from ..core import InvalidSettingsError
from ..models import CampaignCreatedResponse, CampaignRequest, CampaignResponse
from ..services.campaigns import CampaignManager
from ..services.pipeline import StoryPipeline
from ..services.use_cases import StartCampaignRequest, StartCampaignUseCase
from .dependencies import get_manager, get_story_pipeline

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@router.post("", response_model=CampaignCreatedResponse)
async def create_campaign(
    request: CampaignRequest,
    background_tasks: BackgroundTasks,
    pipeline: StoryPipeline = Depends(get_story_pipeline),
    manager: CampaignManager = Depends(get_manager),
):
    """Validate all topics and start the campaign in the background"""
    try:
        campaign = await StartCampaignUseCase(pipeline, manager).execute(
            StartCampaignRequest(campaign=request, background_tasks=background_tasks)
        )
    except InvalidSettingsError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return CampaignCreatedResponse(
        campaign_id=campaign.id,
        status=campaign.status.value,
        total=len(campaign.items),
    )


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(campaign_id: str, manager: CampaignManager = Depends(get_manager)):
    """Campaign status, progress counters and per-story results"""
    campaign = manager.get_campaign(campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign.to_dict()


@router.post("/{campaign_id}/cancel")
async def cancel_campaign(campaign_id: str, manager: CampaignManager = Depends(get_manager)):
    """Stop every story of the campaign at its next stage boundary"""
    campaign = manager.get_campaign(campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    if not manager.request_cancel(campaign_id):
        raise HTTPException(status_code=409, detail=f"Campaign already {campaign.status.value}")
    return {"campaign_id": campaign_id, "cancel_requested": True}
