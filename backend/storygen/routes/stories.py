"""
Story routes: catalogs and single-story generation
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ..core import InvalidSettingsError
from ..models import StoryRequest, StoryResponse
from ..services.catalog import list_templates, list_video_models
from ..services.pipeline import StoryPipeline
from ..services.use_cases import GenerateStoryUseCase
from .dependencies import get_story_pipeline

router = APIRouter(tags=["stories"])


@router.get("/templates")
async def get_templates() -> List[Dict[str, Any]]:
    """List story templates"""
    return [template.to_dict() for template in list_templates()]


@router.get("/video-models")
async def get_video_models() -> List[Dict[str, Any]]:
    """List known video models and their supported clip durations"""
    return [model.to_dict() for model in list_video_models()]


@router.post("/stories", response_model=StoryResponse)
async def create_story(
    request: StoryRequest,
    pipeline: StoryPipeline = Depends(get_story_pipeline),
):
    """Generate one story and wait for the result.

    Pipeline failures are reported in the body (success=false); only invalid
    settings are rejected with 422.
    """
    try:
        result = await GenerateStoryUseCase(pipeline).execute(request)
    except InvalidSettingsError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return result.to_dict()
