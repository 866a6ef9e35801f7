from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.companion.schemas import (
    CompanionRequest, AffirmationResponse, CompanionInsightsResponse,
    MoodRecommendationsResponse, ProgressSummaryResponse
)
from app.modules.companion.service import CompanionService
from app.core.ai import OpenAIProvider, get_ai_provider
from app.core.dependencies import get_current_user_id, check_user_access
from supabase import Client
from typing import Dict, Optional

router = APIRouter(tags=["companion"])


def get_companion_service(
    supabase: Client = Depends(get_supabase),
    provider: Optional[OpenAIProvider] = Depends(get_ai_provider)
) -> CompanionService:
    return CompanionService(supabase, provider)


def _target_user(body: CompanionRequest, current_user: Dict, supabase: Client) -> str:
    if body.user_id:
        check_user_access(body.user_id, current_user, supabase, allow_admin=False)
    return current_user["id"]


@router.post("/affirmation", response_model=AffirmationResponse)
async def affirmation(
    body: CompanionRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: CompanionService = Depends(get_companion_service),
    supabase: Client = Depends(get_supabase)
):
    """Personalized daily affirmation"""
    return await service.affirmation(_target_user(body, current_user, supabase))


@router.post("/insights", response_model=CompanionInsightsResponse)
async def insights(
    body: CompanionRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: CompanionService = Depends(get_companion_service),
    supabase: Client = Depends(get_supabase)
):
    """Insights from the latest health report and recent activity"""
    return await service.insights(_target_user(body, current_user, supabase))


@router.post("/mood-recommendations", response_model=MoodRecommendationsResponse)
async def mood_recommendations(
    body: CompanionRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: CompanionService = Depends(get_companion_service),
    supabase: Client = Depends(get_supabase)
):
    """Three activities suited to the current mood"""
    return await service.mood_recommendations(_target_user(body, current_user, supabase), body.current_mood)


@router.post("/progress-summary", response_model=ProgressSummaryResponse)
async def progress_summary(
    body: CompanionRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: CompanionService = Depends(get_companion_service),
    supabase: Client = Depends(get_supabase)
):
    return await service.progress_summary(_target_user(body, current_user, supabase))
